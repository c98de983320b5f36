# schemas/practice.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from uuid import UUID


class PracticeCreate(BaseModel):
    """A practice reflection: what was done and how it went."""
    action_taken: str = Field(..., min_length=1)
    reflection: str = Field(..., min_length=1)


class PracticeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    action_taken: str
    reflection: str
    created_at: datetime
