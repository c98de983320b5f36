# services/practice.py
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from lovejourney.core.config import settings
from lovejourney.core.dates import (
    distinct_local_dates,
    local_day_bounds,
    local_today,
    resolve_timezone,
)
from lovejourney.crud.practice import crud_practice
from lovejourney.models.practice import Practice
from lovejourney.models.user import User
from lovejourney.schemas.practice import PracticeCreate


class PracticeService:
    """Service layer for practice reflections."""

    def __init__(self):
        self.crud = crud_practice

    def create_practice(self, db: Session, user: User, data: PracticeCreate) -> Practice:
        return self.crud.create(db, user_id=user.id, obj_in=data)

    def get_practices_for_day(
        self, db: Session, user: User, day: Optional[date], tz_name: Optional[str] = None
    ) -> List[Practice]:
        tz = resolve_timezone(tz_name or user.timezone, settings.DEFAULT_TIMEZONE)
        start, end = local_day_bounds(day or local_today(tz), tz)
        return self.crud.get_in_range(db, user_id=user.id, start=start, end=end)

    def get_practice_dates(
        self, db: Session, user: User, tz_name: Optional[str] = None
    ) -> List[date]:
        tz = resolve_timezone(tz_name or user.timezone, settings.DEFAULT_TIMEZONE)
        return distinct_local_dates(self.crud.get_timestamps(db, user_id=user.id), tz)


practice_service = PracticeService()
