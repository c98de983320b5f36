# api/routers/questions.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db
from lovejourney.core.security import get_current_user, get_current_admin_user
from lovejourney.models.user import User
from lovejourney.schemas.question import (
    QuestionCreate,
    QuestionInterpretationUpdate,
    QuestionOut,
)
from lovejourney.services.question import question_service

router = APIRouter(prefix="/questions", tags=["Questions"])


# =====================================================================
# USER ENDPOINTS
# =====================================================================

@router.post(
    "",
    response_model=QuestionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Ask a relationship question"
)
def ask_question(
    data: QuestionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return question_service.ask(db=db, user=current_user, content=data.content)


@router.get(
    "/me",
    response_model=List[QuestionOut],
    summary="Get my questions"
)
def get_my_questions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Questions asked by the caller, newest first, with any interpretation."""
    return question_service.get_my_questions(db=db, user=current_user)


# =====================================================================
# ADMIN ENDPOINTS
# =====================================================================

@router.put(
    "/{question_id}/interpretation",
    response_model=QuestionOut,
    summary="Answer a question (Admin only)"
)
def interpret_question(
    question_id: UUID,
    data: QuestionInterpretationUpdate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return question_service.interpret(
        db=db, question_id=question_id, interpretation=data.interpretation
    )
