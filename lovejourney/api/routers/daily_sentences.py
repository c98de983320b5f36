# api/routers/daily_sentences.py
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db
from lovejourney.core.security import get_current_admin_user
from lovejourney.models.user import User
from lovejourney.schemas.journal import DailySentenceCreate, DailySentenceOut
from lovejourney.services.journal import journal_service

router = APIRouter(prefix="/daily-sentences", tags=["Daily Sentences"])


# =====================================================================
# ADMIN ENDPOINTS - Manage journaling prompts
# =====================================================================

@router.post(
    "",
    response_model=DailySentenceOut,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a daily sentence (Admin only)"
)
def create_daily_sentence(
    data: DailySentenceCreate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Schedule the prompt shown on a given date.

    - **content**: Prompt text
    - **active_date**: Date the prompt is shown (one prompt per date)
    """
    return journal_service.create_daily_sentence(db=db, data=data)


@router.get(
    "",
    response_model=List[DailySentenceOut],
    summary="List daily sentences (Admin only)"
)
def list_daily_sentences(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return journal_service.list_daily_sentences(db=db, skip=skip, limit=limit)
