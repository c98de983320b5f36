# lovejourney/schemas/__init__.py

from .user import (
    UserRole,
    UserCreate,
    UserUpdate,
    UserOut,
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from .journal import (
    JournalEntryCreate,
    JournalEntryOut,
    JournalDatesOut,
    JournalTodayStatus,
    DailySentenceCreate,
    DailySentenceOut,
)
from .analysis import (
    AnalysisStatus,
    AnalysisOutcome,
    AnalysisTriggerRequest,
    AnalysisTriggerResult,
    AnalysisDecision,
    BatchEntry,
    AnalysisOut,
)
from .practice import PracticeCreate, PracticeOut
from .question import QuestionCreate, QuestionInterpretationUpdate, QuestionOut


__all__ = [
    # Users
    "UserRole", "UserCreate", "UserUpdate", "UserOut",
    "LoginRequest", "TokenResponse", "RefreshTokenRequest",

    # Journal
    "JournalEntryCreate", "JournalEntryOut", "JournalDatesOut", "JournalTodayStatus",
    "DailySentenceCreate", "DailySentenceOut",

    # Analyses
    "AnalysisStatus", "AnalysisOutcome", "AnalysisTriggerRequest", "AnalysisTriggerResult",
    "AnalysisDecision", "BatchEntry", "AnalysisOut",

    # Practices & questions
    "PracticeCreate", "PracticeOut",
    "QuestionCreate", "QuestionInterpretationUpdate", "QuestionOut",
]
