# schemas/question.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


class QuestionCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class QuestionInterpretationUpdate(BaseModel):
    interpretation: str = Field(..., min_length=1)


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    content: str
    interpretation: Optional[str] = None
    created_at: datetime
    interpreted_at: Optional[datetime] = None
