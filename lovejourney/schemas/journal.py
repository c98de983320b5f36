# schemas/journal.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime, date
from uuid import UUID


# =====================================================================
# A. JOURNAL ENTRIES
# =====================================================================

class JournalEntryCreate(BaseModel):
    """Journal submission for today's daily sentence."""
    content: str = Field(..., min_length=1, description="Reflection text")
    daily_sentence: Optional[str] = Field(
        None, description="Prompt answered; defaults to today's daily sentence"
    )
    timezone: Optional[str] = Field(
        None, description="IANA timezone of the writer; defaults to the profile timezone"
    )

    @field_validator('content')
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Content must not be blank')
        return v


class JournalEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    content: str
    daily_sentence: Optional[str] = None
    created_at: datetime


class JournalDatesOut(BaseModel):
    """Local calendar dates that have at least one entry (newest first)."""
    timezone: str
    dates: List[date]


class JournalTodayStatus(BaseModel):
    timezone: str
    local_date: date
    has_written_today: bool
    entries_today: int
    daily_limit: int


# =====================================================================
# B. DAILY SENTENCES
# =====================================================================

class DailySentenceCreate(BaseModel):
    content: str = Field(..., min_length=1)
    active_date: date


class DailySentenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    active_date: date
