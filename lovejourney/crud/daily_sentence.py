# crud/daily_sentence.py
from typing import Optional, List
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from lovejourney.core.exceptions import DatabaseConflictError
from lovejourney.models.daily_sentence import DailySentence
from lovejourney.schemas.journal import DailySentenceCreate


class CRUDDailySentence:
    """CRUD operations for DailySentence model."""

    def create(self, db: Session, *, obj_in: DailySentenceCreate) -> DailySentence:
        db_obj = DailySentence(**obj_in.model_dump())
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DatabaseConflictError(
                f"A daily sentence already exists for {obj_in.active_date}"
            ) from exc
        db.refresh(db_obj)
        return db_obj

    def get_by_date(self, db: Session, *, active_date: date) -> Optional[DailySentence]:
        return (
            db.query(DailySentence)
            .filter(DailySentence.active_date == active_date)
            .first()
        )

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[DailySentence]:
        return (
            db.query(DailySentence)
            .order_by(desc(DailySentence.active_date))
            .offset(skip)
            .limit(limit)
            .all()
        )


# Create singleton instance
crud_daily_sentence = CRUDDailySentence()
