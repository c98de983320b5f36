# models/daily_sentence.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Date, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from lovejourney.core.config import Base


class DailySentence(Base):
    __tablename__ = "daily_sentences"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    content = Column(Text, nullable=False)
    active_date = Column(Date, nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
