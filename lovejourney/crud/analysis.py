# crud/analysis.py
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from lovejourney.core.exceptions import DatabaseConflictError
from lovejourney.models.analysis import Analysis, AnalysisStatus


class CRUDAnalysis:
    """CRUD operations for Analysis model. Analyses are append-only."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self,
        db: Session,
        *,
        user_id: UUID,
        email: str,
        content: str,
        status: AnalysisStatus = AnalysisStatus.generated,
        entry_ids: Optional[List[str]] = None,
        covers_from: Optional[datetime] = None,
        covers_to: Optional[datetime] = None,
        batch_key: Optional[str] = None,
    ) -> Analysis:
        """
        Insert a new analysis row.

        Args:
            db: Database session
            user_id: Owner UUID
            email: Owner email (denormalized)
            content: Generated text, or the sentinel for deferred rows
            status: generated or deferred
            entry_ids: Ids of the covered journal entries, oldest first
            covers_from: created_at of the first covered entry
            covers_to: created_at of the last covered entry
            batch_key: Deterministic batch key; unique per user when set

        Returns:
            Created Analysis instance

        Raises:
            DatabaseConflictError: If an analysis already exists for this batch
        """
        db_obj = Analysis(
            user_id=user_id,
            email=email,
            content=content,
            status=status,
            entry_ids=entry_ids,
            covers_from=covers_from,
            covers_to=covers_to,
            batch_key=batch_key,
        )
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DatabaseConflictError(
                f"Analysis for batch {batch_key!r} already exists"
            ) from exc
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[Analysis]:
        return db.query(Analysis).filter(Analysis.id == id).first()

    def get_latest_generated(self, db: Session, *, user_id: UUID) -> Optional[Analysis]:
        """
        Get the user's most recent generated analysis.

        Deferred sentinel rows are ignored so they never act as a watermark.
        """
        return (
            db.query(Analysis)
            .filter(
                Analysis.user_id == user_id,
                Analysis.status == AnalysisStatus.generated,
            )
            .order_by(desc(Analysis.created_at))
            .first()
        )

    def get_by_user_id(
        self, db: Session, *, user_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[Analysis]:
        """Get the user's analyses, newest first."""
        return (
            db.query(Analysis)
            .filter(Analysis.user_id == user_id)
            .order_by(desc(Analysis.created_at))
            .offset(skip)
            .limit(limit)
            .all()
        )


# Create singleton instance
crud_analysis = CRUDAnalysis()
