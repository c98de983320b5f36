# services/question.py
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from lovejourney.core.exceptions import NotFoundError
from lovejourney.crud.question import crud_question
from lovejourney.models.question import Question
from lovejourney.models.user import User


class QuestionService:
    """Relationship questions awaiting a tarot-deck interpretation."""

    def __init__(self):
        self.crud = crud_question

    def ask(self, db: Session, user: User, content: str) -> Question:
        return self.crud.create(db, user_id=user.id, content=content.strip())

    def get_my_questions(self, db: Session, user: User) -> List[Question]:
        return self.crud.get_by_user_id(db, user_id=user.id)

    def interpret(self, db: Session, question_id: UUID, interpretation: str) -> Question:
        question = self.crud.get(db, id=question_id)
        if not question:
            raise NotFoundError("Question not found")
        return self.crud.set_interpretation(db, db_obj=question, interpretation=interpretation)


question_service = QuestionService()
