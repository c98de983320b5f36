from typing import Generator, List, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from pydantic import model_validator
from pydantic_settings import BaseSettings


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Love Journey API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./lovejourney.db"

    # JWT
    SECRET_KEY: str = "Lovejourneysecretkey"
    REFRESH_SECRET_KEY: str = "Lovejourneyrefreshkey"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8080",
    ]

    # Completion service (OpenAI)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 1000
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    # Journal analysis
    ANALYSIS_BATCH_SIZE: int = 3
    ANALYSIS_MAX_ENTRIES: int = 3
    ANALYSIS_PERSIST_QUOTA_SENTINEL: bool = True

    # Journaling policy
    JOURNAL_DAILY_ENTRY_LIMIT: int = 1
    DEFAULT_TIMEZONE: str = "UTC"

    # Milestone notification
    MILESTONE_ENTRY_COUNT: int = 5
    MILESTONE_NOTIFY_EMAIL: Optional[str] = None
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_EMAIL: Optional[str] = None
    SMTP_FROM_NAME: str = "Love Journey"
    NOTIFICATION_MAX_ATTEMPTS: int = 3

    class Config:
        env_file = ".env"
        extra = "ignore"

    @model_validator(mode="after")
    def check_analysis_window(self) -> "Settings":
        if self.ANALYSIS_BATCH_SIZE < 1:
            raise ValueError("ANALYSIS_BATCH_SIZE must be at least 1")
        if self.ANALYSIS_MAX_ENTRIES < self.ANALYSIS_BATCH_SIZE:
            raise ValueError("ANALYSIS_MAX_ENTRIES must be >= ANALYSIS_BATCH_SIZE")
        return self


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=(
        {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
    ),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
