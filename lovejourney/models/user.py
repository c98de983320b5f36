# models/user.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, DateTime, Enum as SqlEnum
)
import enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from lovejourney.core.config import Base

class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"

class User(Base):
    __tablename__ = "users"

    # ---- Base fields ----
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    username = Column(String(50), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SqlEnum(UserRole), default=UserRole.user, nullable=False)
    timezone = Column(String(64), nullable=False, default="UTC")  # IANA name, used for day boundaries

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # ---- Relationships ----
    journal_entries = relationship("JournalEntry", back_populates="user", cascade="all, delete-orphan")
    analyses = relationship("Analysis", back_populates="user", cascade="all, delete-orphan")
    practices = relationship("Practice", back_populates="user", cascade="all, delete-orphan")
    questions = relationship("Question", back_populates="user", cascade="all, delete-orphan")
