# models/analysis.py

import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Text, DateTime, JSON, ForeignKey, UniqueConstraint, Enum as SqlEnum
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from lovejourney.core.config import Base


class AnalysisStatus(str, enum.Enum):
    generated = "generated"
    deferred = "deferred"  # sentinel row: generation attempted, quota exceeded


class Analysis(Base):
    __tablename__ = "analyses"
    __table_args__ = (
        # One analysis per (user, batch). NULL keys (sentinels) never collide.
        UniqueConstraint("user_id", "batch_key", name="uq_analyses_user_batch"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(255), nullable=False)

    content = Column(Text, nullable=False)
    status = Column(SqlEnum(AnalysisStatus), nullable=False, default=AnalysisStatus.generated)

    # ---- Batch coverage ----
    entry_ids = Column(JSON, nullable=True)  # [str(uuid), ...] oldest first
    covers_from = Column(DateTime(timezone=True), nullable=True)
    covers_to = Column(DateTime(timezone=True), nullable=True)
    batch_key = Column(String(64), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    user = relationship("User", back_populates="analyses")
