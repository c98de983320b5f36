# crud/practice.py
from typing import List
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc

from lovejourney.models.practice import Practice
from lovejourney.schemas.practice import PracticeCreate


class CRUDPractice:
    """CRUD operations for Practice model."""

    def create(self, db: Session, *, user_id: UUID, obj_in: PracticeCreate) -> Practice:
        db_obj = Practice(user_id=user_id, **obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_in_range(
        self, db: Session, *, user_id: UUID, start: datetime, end: datetime
    ) -> List[Practice]:
        """Get practices with start <= created_at < end, oldest first."""
        return (
            db.query(Practice)
            .filter(
                Practice.user_id == user_id,
                Practice.created_at >= start,
                Practice.created_at < end,
            )
            .order_by(asc(Practice.created_at))
            .all()
        )

    def get_timestamps(self, db: Session, *, user_id: UUID) -> List[datetime]:
        rows = (
            db.query(Practice.created_at)
            .filter(Practice.user_id == user_id)
            .order_by(desc(Practice.created_at))
            .all()
        )
        return [row[0] for row in rows]


# Create singleton instance
crud_practice = CRUDPractice()
