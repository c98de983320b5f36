# api/routers/practices.py
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db
from lovejourney.core.security import get_current_user
from lovejourney.models.user import User
from lovejourney.schemas.practice import PracticeCreate, PracticeOut
from lovejourney.services.practice import practice_service

router = APIRouter(prefix="/practices", tags=["Practices"])


@router.post(
    "",
    response_model=PracticeOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record a practice reflection"
)
def create_practice(
    data: PracticeCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    - **action_taken**: What the user did
    - **reflection**: How it went
    """
    return practice_service.create_practice(db=db, user=current_user, data=data)


@router.get(
    "",
    response_model=List[PracticeOut],
    summary="Get my practices for a day"
)
def get_practices(
    on: Optional[date] = Query(None, description="Local date (defaults to today)"),
    tz: Optional[str] = Query(None, description="IANA timezone"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return practice_service.get_practices_for_day(db=db, user=current_user, day=on, tz_name=tz)


@router.get(
    "/dates",
    response_model=List[date],
    summary="Get dates with practices"
)
def get_practice_dates(
    tz: Optional[str] = Query(None, description="IANA timezone"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return practice_service.get_practice_dates(db=db, user=current_user, tz_name=tz)
