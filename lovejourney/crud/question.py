# crud/question.py
from typing import Optional, List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import desc

from lovejourney.models.question import Question


class CRUDQuestion:
    """CRUD operations for Question model."""

    def create(self, db: Session, *, user_id: UUID, content: str) -> Question:
        db_obj = Question(user_id=user_id, content=content)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: UUID) -> Optional[Question]:
        return db.query(Question).filter(Question.id == id).first()

    def get_by_user_id(self, db: Session, *, user_id: UUID) -> List[Question]:
        return (
            db.query(Question)
            .filter(Question.user_id == user_id)
            .order_by(desc(Question.created_at))
            .all()
        )

    def set_interpretation(
        self, db: Session, *, db_obj: Question, interpretation: str
    ) -> Question:
        db_obj.interpretation = interpretation
        db_obj.interpreted_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


# Create singleton instance
crud_question = CRUDQuestion()
