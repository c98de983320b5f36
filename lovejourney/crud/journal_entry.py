# crud/journal_entry.py
from typing import Optional, List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import and_, asc, desc, or_

from lovejourney.models.journal_entry import JournalEntry


class CRUDJournalEntry:
    """CRUD operations for JournalEntry model. Entries are never updated."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self,
        db: Session,
        *,
        user_id: UUID,
        content: str,
        daily_sentence: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> JournalEntry:
        """
        Create a new journal entry.

        Args:
            db: Database session
            user_id: Owner UUID
            content: Reflection text
            daily_sentence: Prompt the entry responded to
            created_at: Creation time (defaults to now, stored as UTC)

        Returns:
            Created JournalEntry instance
        """
        db_obj = JournalEntry(
            user_id=user_id,
            content=content,
            daily_sentence=daily_sentence,
            created_at=(created_at or datetime.now(timezone.utc)).astimezone(timezone.utc),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[JournalEntry]:
        return db.query(JournalEntry).filter(JournalEntry.id == id).first()

    def count_by_user(self, db: Session, *, user_id: UUID) -> int:
        return db.query(JournalEntry).filter(JournalEntry.user_id == user_id).count()

    @staticmethod
    def _after(query, since: Optional[datetime], since_id: Optional[UUID]):
        """Restrict to entries ordered after (since, since_id) in (created_at, id) order."""
        if since is None:
            return query
        if since_id is None:
            return query.filter(JournalEntry.created_at > since)
        return query.filter(
            or_(
                JournalEntry.created_at > since,
                and_(JournalEntry.created_at == since, JournalEntry.id > since_id),
            )
        )

    def count_since(
        self,
        db: Session,
        *,
        user_id: UUID,
        since: Optional[datetime] = None,
        since_id: Optional[UUID] = None,
    ) -> int:
        """
        Count entries after the watermark (all entries when `since` is None).

        Args:
            db: Database session
            user_id: Owner UUID
            since: created_at of the last analyzed entry
            since_id: id of the last analyzed entry; breaks created_at ties

        Returns:
            Number of matching entries
        """
        query = db.query(JournalEntry).filter(JournalEntry.user_id == user_id)
        return self._after(query, since, since_id).count()

    def get_batch(
        self,
        db: Session,
        *,
        user_id: UUID,
        since: Optional[datetime] = None,
        since_id: Optional[UUID] = None,
        limit: int = 3,
    ) -> List[JournalEntry]:
        """
        Get up to `limit` entries after the watermark, oldest first.

        Args:
            db: Database session
            user_id: Owner UUID
            since: created_at of the last analyzed entry (no bound when None)
            since_id: id of the last analyzed entry; breaks created_at ties
            limit: Maximum number of entries

        Returns:
            List of JournalEntry instances in ascending (created_at, id) order
        """
        query = db.query(JournalEntry).filter(JournalEntry.user_id == user_id)
        return (
            self._after(query, since, since_id)
            .order_by(asc(JournalEntry.created_at), asc(JournalEntry.id))
            .limit(limit)
            .all()
        )

    def get_first(self, db: Session, *, user_id: UUID, limit: int) -> List[JournalEntry]:
        """Get the user's first `limit` entries, oldest first."""
        return self.get_batch(db, user_id=user_id, since=None, limit=limit)

    def get_in_range(
        self, db: Session, *, user_id: UUID, start: datetime, end: datetime
    ) -> List[JournalEntry]:
        """Get entries with start <= created_at < end, oldest first."""
        return (
            db.query(JournalEntry)
            .filter(
                JournalEntry.user_id == user_id,
                JournalEntry.created_at >= start,
                JournalEntry.created_at < end,
            )
            .order_by(asc(JournalEntry.created_at))
            .all()
        )

    def count_in_range(
        self, db: Session, *, user_id: UUID, start: datetime, end: datetime
    ) -> int:
        return (
            db.query(JournalEntry)
            .filter(
                JournalEntry.user_id == user_id,
                JournalEntry.created_at >= start,
                JournalEntry.created_at < end,
            )
            .count()
        )

    def get_timestamps(self, db: Session, *, user_id: UUID) -> List[datetime]:
        """Creation timestamps of all the user's entries, newest first."""
        rows = (
            db.query(JournalEntry.created_at)
            .filter(JournalEntry.user_id == user_id)
            .order_by(desc(JournalEntry.created_at))
            .all()
        )
        return [row[0] for row in rows]


# Create singleton instance
crud_journal_entry = CRUDJournalEntry()
