# services/journal.py
import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from lovejourney.core.config import settings
from lovejourney.core.dates import (
    distinct_local_dates,
    local_day_bounds,
    local_today,
    resolve_timezone,
)
from lovejourney.core.exceptions import ConflictError, DatabaseConflictError, NotFoundError
from lovejourney.crud.daily_sentence import crud_daily_sentence
from lovejourney.crud.journal_entry import crud_journal_entry
from lovejourney.models.daily_sentence import DailySentence
from lovejourney.models.journal_entry import JournalEntry
from lovejourney.models.user import User
from lovejourney.schemas.journal import (
    DailySentenceCreate,
    JournalDatesOut,
    JournalEntryCreate,
    JournalTodayStatus,
)

logger = logging.getLogger(__name__)


class JournalService:
    """Service layer for journal entries and daily sentences."""

    def __init__(self):
        self.crud = crud_journal_entry
        self.sentence_crud = crud_daily_sentence

    def _timezone_name(self, user: User, tz_name: Optional[str]) -> str:
        return tz_name or user.timezone or settings.DEFAULT_TIMEZONE

    # =====================================================================
    # JOURNAL ENTRIES
    # =====================================================================

    def create_entry(
        self,
        db: Session,
        user: User,
        entry_data: JournalEntryCreate,
        now: Optional[datetime] = None,
    ) -> Tuple[JournalEntry, bool]:
        """
        Save a journal entry for the user's current local day.

        Args:
            db: Database session
            user: Author
            entry_data: Submission payload
            now: Submission time (defaults to current UTC time)

        Returns:
            (created entry, whether the milestone entry count was just reached)

        Raises:
            ConflictError: If the daily entry limit is already used up
        """
        tz = resolve_timezone(self._timezone_name(user, entry_data.timezone))
        now = now or datetime.now(timezone.utc)
        local_date = now.astimezone(tz).date()

        limit = settings.JOURNAL_DAILY_ENTRY_LIMIT
        if limit > 0:
            start, end = local_day_bounds(local_date, tz)
            if self.crud.count_in_range(db, user_id=user.id, start=start, end=end) >= limit:
                raise ConflictError(
                    "You've poured your heart out. See you tomorrow to continue your journey."
                )

        daily_sentence = entry_data.daily_sentence
        if not daily_sentence:
            sentence = self.sentence_crud.get_by_date(db, active_date=local_date)
            daily_sentence = sentence.content if sentence else None

        entry = self.crud.create(
            db,
            user_id=user.id,
            content=entry_data.content,
            daily_sentence=daily_sentence,
            created_at=now,
        )

        total = self.crud.count_by_user(db, user_id=user.id)
        milestone_reached = total == settings.MILESTONE_ENTRY_COUNT
        logger.info("Journal entry %s saved for user %s (total=%d)", entry.id, user.id, total)
        return entry, milestone_reached

    def get_entries_for_day(
        self, db: Session, user: User, day: Optional[date], tz_name: Optional[str] = None
    ) -> List[JournalEntry]:
        """Entries written on a local calendar day, oldest first."""
        tz = resolve_timezone(self._timezone_name(user, tz_name))
        start, end = local_day_bounds(day or local_today(tz), tz)
        return self.crud.get_in_range(db, user_id=user.id, start=start, end=end)

    def get_entry_dates(
        self, db: Session, user: User, tz_name: Optional[str] = None
    ) -> JournalDatesOut:
        """Distinct local dates with entries, newest first (calendar highlights)."""
        name = self._timezone_name(user, tz_name)
        tz = resolve_timezone(name)
        timestamps = self.crud.get_timestamps(db, user_id=user.id)
        return JournalDatesOut(timezone=name, dates=distinct_local_dates(timestamps, tz))

    def get_today_status(
        self, db: Session, user: User, tz_name: Optional[str] = None
    ) -> JournalTodayStatus:
        name = self._timezone_name(user, tz_name)
        tz = resolve_timezone(name)
        today = local_today(tz)
        start, end = local_day_bounds(today, tz)
        count = self.crud.count_in_range(db, user_id=user.id, start=start, end=end)
        limit = settings.JOURNAL_DAILY_ENTRY_LIMIT
        return JournalTodayStatus(
            timezone=name,
            local_date=today,
            has_written_today=limit > 0 and count >= limit,
            entries_today=count,
            daily_limit=limit,
        )

    # =====================================================================
    # DAILY SENTENCES
    # =====================================================================

    def get_daily_sentence(self, db: Session, day: date) -> DailySentence:
        sentence = self.sentence_crud.get_by_date(db, active_date=day)
        if not sentence:
            raise NotFoundError(f"No daily sentence for {day}")
        return sentence

    def create_daily_sentence(self, db: Session, data: DailySentenceCreate) -> DailySentence:
        try:
            return self.sentence_crud.create(db, obj_in=data)
        except DatabaseConflictError as exc:
            raise ConflictError(str(exc)) from exc

    def list_daily_sentences(
        self, db: Session, skip: int = 0, limit: int = 100
    ) -> List[DailySentence]:
        return self.sentence_crud.get_multi(db, skip=skip, limit=limit)


journal_service = JournalService()
