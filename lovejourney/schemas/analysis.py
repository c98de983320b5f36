# schemas/analysis.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from uuid import UUID
import enum

from lovejourney.models.analysis import AnalysisStatus


# =====================================================================
# ENUMS
# =====================================================================

class AnalysisOutcome(str, enum.Enum):
    """Terminal states of one trigger run."""
    NOT_NEEDED = "NOT_NEEDED"
    NO_CONTENT = "NO_CONTENT"
    GENERATED = "GENERATED"
    ALREADY_ANALYZED = "ALREADY_ANALYZED"
    QUOTA_EXCEEDED = "OPENAI_QUOTA_EXCEEDED"


# =====================================================================
# REQUEST SCHEMAS
# =====================================================================

class AnalysisTriggerRequest(BaseModel):
    """Body sent by the client after a journal save.

    Fields are optional here so that a missing value yields the
    pipeline's own error body instead of the generic 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    email: Optional[str] = None


# =====================================================================
# PIPELINE VALUE OBJECTS
# =====================================================================

class BatchEntry(BaseModel):
    """One journal entry as presented to the completion service."""
    prompt: Optional[str] = None
    response: str
    date: str


class AnalysisDecision(BaseModel):
    generate: bool
    watermark: Optional[datetime] = None
    watermark_entry_id: Optional[UUID] = None
    entries_since_watermark: int


class AnalysisTriggerResult(BaseModel):
    outcome: AnalysisOutcome
    message: str
    analysis_id: Optional[UUID] = None
    entry_count: int = 0


# =====================================================================
# READ SCHEMAS
# =====================================================================

class AnalysisOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    email: str
    content: str
    status: AnalysisStatus
    entry_ids: Optional[List[str]] = None
    covers_from: Optional[datetime] = None
    covers_to: Optional[datetime] = None
    created_at: datetime
