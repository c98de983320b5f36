# schemas/user.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import enum


# =====================================================================
# ENUMS
# =====================================================================

class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"


def _check_timezone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        ZoneInfo(v)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {v}")
    return v


# =====================================================================
# 1. CREATE SCHEMAS
# =====================================================================

class UserCreate(BaseModel):
    """Public registration payload."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: Optional[str] = Field(None, max_length=50)
    timezone: Optional[str] = Field(None, description="IANA timezone, e.g. Asia/Jakarta")

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not any(c.isalpha() for c in v):
            raise ValueError('Password must contain at least one letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        return v

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


# =====================================================================
# 2. UPDATE SCHEMAS
# =====================================================================

class UserUpdate(BaseModel):
    """Profile update - all optional."""
    username: Optional[str] = Field(None, max_length=50)
    timezone: Optional[str] = None

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


# =====================================================================
# 3. READ SCHEMAS
# =====================================================================

class UserOut(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    username: Optional[str] = None
    role: UserRole
    timezone: str
    created_at: datetime


# =====================================================================
# 4. AUTH SCHEMAS
# =====================================================================

class LoginRequest(BaseModel):
    """User login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    refresh_token: str
    user: UserOut

class RefreshTokenRequest(BaseModel):
    """Refresh token request."""
    refresh_token: str
