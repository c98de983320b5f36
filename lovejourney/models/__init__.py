# lovejourney/models/__init__.py

from lovejourney.core.config import Base

# Import all models here so metadata.create_all and app-wide imports work
from .user import User, UserRole
from .journal_entry import JournalEntry
from .analysis import Analysis, AnalysisStatus
from .daily_sentence import DailySentence
from .practice import Practice
from .question import Question

__all__ = [
    "Base",
    "User",
    "UserRole",
    "JournalEntry",
    "Analysis",
    "AnalysisStatus",
    "DailySentence",
    "Practice",
    "Question",
]
