# services/journal_analysis.py
import logging
from datetime import datetime
from typing import Optional, List, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lovejourney.core.config import settings
from lovejourney.core.dates import ensure_utc, resolve_timezone, to_local_date
from lovejourney.core.exceptions import (
    CompletionQuotaExceededError,
    DatabaseConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from lovejourney.crud.analysis import crud_analysis
from lovejourney.crud.journal_entry import crud_journal_entry
from lovejourney.crud.user import crud_user
from lovejourney.data.analysis_prompt import (
    QUOTA_EXCEEDED_MESSAGE,
    QUOTA_SENTINEL_CONTENT,
    build_messages,
)
from lovejourney.models.analysis import Analysis, AnalysisStatus
from lovejourney.models.journal_entry import JournalEntry
from lovejourney.schemas.analysis import (
    AnalysisDecision,
    AnalysisOutcome,
    AnalysisTriggerResult,
    BatchEntry,
)
from lovejourney.services.completion import CompletionClient, completion_client

logger = logging.getLogger(__name__)

GENESIS_BATCH_KEY = "genesis"


# =====================================================================
# EXCEPTIONS
# =====================================================================

class TriggerValidationError(ValidationError):
    """Trigger request rejected before any store access."""

    def __init__(self, detail: str, code: str = "MISSING_FIELDS"):
        super().__init__(detail)
        self.code = code


# =====================================================================
# SERVICE CLASS
# =====================================================================

class JournalAnalysisService:
    """
    Incremental journal analysis.

    A trigger evaluates whether enough entries accumulated since the last
    generated analysis (the watermark), selects the next batch oldest-first,
    asks the completion service for an analysis and appends exactly one
    Analysis row for that batch.
    """

    def __init__(
        self,
        completion: Optional[CompletionClient] = None,
        batch_size: Optional[int] = None,
        max_entries: Optional[int] = None,
        record_quota_sentinel: Optional[bool] = None,
    ):
        self.entry_crud = crud_journal_entry
        self.analysis_crud = crud_analysis
        self.user_crud = crud_user
        self.completion = completion or completion_client
        self.batch_size = batch_size or settings.ANALYSIS_BATCH_SIZE
        self.max_entries = max(max_entries or settings.ANALYSIS_MAX_ENTRIES, self.batch_size)
        self.record_quota_sentinel = (
            settings.ANALYSIS_PERSIST_QUOTA_SENTINEL
            if record_quota_sentinel is None
            else record_quota_sentinel
        )

    # =====================================================================
    # INPUT VALIDATION
    # =====================================================================

    def validate_trigger(
        self, user_id: Optional[str], email: Optional[str]
    ) -> Tuple[UUID, str]:
        """
        Validate a trigger request.

        Raises:
            TriggerValidationError: If user id or email is missing or malformed
        """
        missing = [
            name
            for name, value in (("userId", user_id), ("email", email))
            if value is None or not str(value).strip()
        ]
        if missing:
            raise TriggerValidationError(
                f"Missing required fields: {', '.join(missing)}"
            )

        try:
            parsed_user_id = UUID(str(user_id).strip())
        except ValueError:
            raise TriggerValidationError("userId must be a UUID", code="INVALID_USER_ID")

        return parsed_user_id, str(email).strip()

    # =====================================================================
    # THRESHOLD EVALUATOR
    # =====================================================================

    def get_watermark(
        self, db: Session, user_id: UUID
    ) -> Tuple[Optional[datetime], Optional[UUID]]:
        """
        Position of the last analyzed entry as (created_at, entry id).

        Both are None before the first analysis. The id is None for rows
        without recorded coverage, which fall back to their creation time.
        """
        latest = self.analysis_crud.get_latest_generated(db, user_id=user_id)
        if latest is None:
            return None, None
        if latest.covers_to is not None and latest.entry_ids:
            return latest.covers_to, UUID(latest.entry_ids[-1])
        return latest.covers_to or latest.created_at, None

    def evaluate_threshold(self, db: Session, user_id: UUID) -> AnalysisDecision:
        """
        Decide whether a new analysis should be generated now.

        Generate when no analysis exists yet (bootstrap, regardless of count)
        or when at least `batch_size` entries arrived after the watermark.
        """
        watermark, watermark_entry_id = self.get_watermark(db, user_id)
        count = self.entry_crud.count_since(
            db, user_id=user_id, since=watermark, since_id=watermark_entry_id
        )

        generate = watermark is None or count >= self.batch_size
        logger.info(
            "Threshold for user %s: watermark=%s new_entries=%d batch_size=%d generate=%s",
            user_id,
            watermark.isoformat() if watermark else None,
            count,
            self.batch_size,
            generate,
        )
        return AnalysisDecision(
            generate=generate,
            watermark=watermark,
            watermark_entry_id=watermark_entry_id,
            entries_since_watermark=count,
        )

    # =====================================================================
    # ENTRY SELECTOR
    # =====================================================================

    def select_entries(
        self,
        db: Session,
        user_id: UUID,
        watermark: Optional[datetime],
        watermark_entry_id: Optional[UUID] = None,
    ) -> List[JournalEntry]:
        """Up to `max_entries` entries after the watermark, oldest first."""
        return self.entry_crud.get_batch(
            db,
            user_id=user_id,
            since=watermark,
            since_id=watermark_entry_id,
            limit=self.max_entries,
        )

    def user_timezone(self, db: Session, user_id: UUID) -> ZoneInfo:
        user = self.user_crud.get(db, id=user_id)
        return resolve_timezone(user.timezone if user else None, settings.DEFAULT_TIMEZONE)

    @staticmethod
    def to_batch_entries(entries: List[JournalEntry], tz: ZoneInfo) -> List[BatchEntry]:
        """Entries as prompt items, dated by the writer's local calendar day."""
        return [
            BatchEntry(
                prompt=entry.daily_sentence,
                response=entry.content,
                date=to_local_date(entry.created_at, tz).isoformat(),
            )
            for entry in entries
        ]

    # =====================================================================
    # ANALYSIS GENERATOR
    # =====================================================================

    def generate_analysis(self, batch: List[BatchEntry]) -> Optional[str]:
        """
        Render the batch and ask the completion service for an analysis.

        Returns:
            Generated text, or None when the batch is empty (no call is made)

        Raises:
            CompletionQuotaExceededError: Quota or rate limit reached
            CompletionError: Any other completion failure
        """
        if not batch:
            return None
        return self.completion.complete(build_messages(batch))

    # =====================================================================
    # RESULT PERSISTER
    # =====================================================================

    @staticmethod
    def make_batch_key(
        watermark: Optional[datetime], watermark_entry_id: Optional[UUID] = None
    ) -> str:
        """Batches are keyed by the entry they start after."""
        if watermark is None:
            return GENESIS_BATCH_KEY
        if watermark_entry_id is not None:
            return str(watermark_entry_id)
        return ensure_utc(watermark).isoformat()

    def persist_analysis(
        self,
        db: Session,
        *,
        user_id: UUID,
        email: str,
        content: str,
        entries: List[JournalEntry],
        watermark: Optional[datetime],
        watermark_entry_id: Optional[UUID] = None,
    ) -> Analysis:
        """
        Append the analysis for this batch.

        Raises:
            DatabaseConflictError: If this batch was already analyzed
        """
        return self.analysis_crud.create(
            db,
            user_id=user_id,
            email=email,
            content=content,
            status=AnalysisStatus.generated,
            entry_ids=[str(entry.id) for entry in entries],
            covers_from=entries[0].created_at,
            covers_to=entries[-1].created_at,
            batch_key=self.make_batch_key(watermark, watermark_entry_id),
        )

    def persist_quota_sentinel(
        self, db: Session, *, user_id: UUID, email: str, entries: List[JournalEntry]
    ) -> Analysis:
        """Record a deferred attempt. Sentinels carry no batch key."""
        return self.analysis_crud.create(
            db,
            user_id=user_id,
            email=email,
            content=QUOTA_SENTINEL_CONTENT,
            status=AnalysisStatus.deferred,
            entry_ids=[str(entry.id) for entry in entries],
            covers_from=entries[0].created_at,
            covers_to=entries[-1].created_at,
        )

    # =====================================================================
    # TRIGGER RECEIVER
    # =====================================================================

    def run(self, db: Session, user_id: UUID, email: str) -> AnalysisTriggerResult:
        """
        Run one trigger: evaluate, select, generate, persist.

        Returns:
            AnalysisTriggerResult describing the terminal state

        Raises:
            ServiceError: On store failures or non-quota completion failures
        """
        try:
            decision = self.evaluate_threshold(db, user_id)
            if not decision.generate:
                return AnalysisTriggerResult(
                    outcome=AnalysisOutcome.NOT_NEEDED,
                    message="No analysis needed yet",
                )

            entries = self.select_entries(
                db, user_id, decision.watermark, decision.watermark_entry_id
            )
            logger.info("Selected %d entries for user %s", len(entries), user_id)

            try:
                content = self.generate_analysis(
                    self.to_batch_entries(entries, self.user_timezone(db, user_id))
                )
            except CompletionQuotaExceededError:
                analysis_id = None
                if self.record_quota_sentinel and entries:
                    sentinel = self.persist_quota_sentinel(
                        db, user_id=user_id, email=email, entries=entries
                    )
                    analysis_id = sentinel.id
                return AnalysisTriggerResult(
                    outcome=AnalysisOutcome.QUOTA_EXCEEDED,
                    message=QUOTA_EXCEEDED_MESSAGE,
                    analysis_id=analysis_id,
                    entry_count=len(entries),
                )

            if content is None:
                return AnalysisTriggerResult(
                    outcome=AnalysisOutcome.NO_CONTENT,
                    message="No journal entries to analyze yet",
                )

            try:
                analysis = self.persist_analysis(
                    db,
                    user_id=user_id,
                    email=email,
                    content=content,
                    entries=entries,
                    watermark=decision.watermark,
                    watermark_entry_id=decision.watermark_entry_id,
                )
            except DatabaseConflictError:
                logger.warning(
                    "Batch %s for user %s was analyzed concurrently; discarding duplicate",
                    self.make_batch_key(decision.watermark, decision.watermark_entry_id),
                    user_id,
                )
                return AnalysisTriggerResult(
                    outcome=AnalysisOutcome.ALREADY_ANALYZED,
                    message="Analysis already generated for these entries",
                    entry_count=len(entries),
                )

            logger.info("Analysis %s saved for user %s", analysis.id, user_id)
            return AnalysisTriggerResult(
                outcome=AnalysisOutcome.GENERATED,
                message="Analysis generated and saved successfully",
                analysis_id=analysis.id,
                entry_count=len(entries),
            )
        except SQLAlchemyError as exc:
            raise ServiceError(f"Store failure while analyzing entries: {exc}") from exc

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_my_analyses(
        self, db: Session, user_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[Analysis]:
        return self.analysis_crud.get_by_user_id(db, user_id=user_id, skip=skip, limit=limit)

    def get_analysis(self, db: Session, analysis_id: UUID, user_id: UUID) -> Analysis:
        analysis = self.analysis_crud.get(db, id=analysis_id)
        if analysis is None or analysis.user_id != user_id:
            raise NotFoundError("Analysis not found")
        return analysis


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

journal_analysis_service = JournalAnalysisService()
