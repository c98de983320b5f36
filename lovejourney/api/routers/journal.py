# api/routers/journal.py
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db, settings
from lovejourney.core.dates import local_today, resolve_timezone
from lovejourney.core.security import get_current_user
from lovejourney.models.user import User
from lovejourney.schemas.journal import (
    DailySentenceOut,
    JournalDatesOut,
    JournalEntryCreate,
    JournalEntryOut,
    JournalTodayStatus,
)
from lovejourney.services.journal import journal_service
from lovejourney.services.notification import milestone_notifier

router = APIRouter(prefix="/journal", tags=["Journal"])


# =====================================================================
# JOURNAL ENTRIES
# =====================================================================

@router.post(
    "/entries",
    response_model=JournalEntryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Write today's journal entry"
)
def create_entry(
    entry_data: JournalEntryCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Save a journal entry for the caller's local day.

    - **content**: Reflection text (required)
    - **daily_sentence**: Prompt answered (defaults to today's daily sentence)
    - **timezone**: Writer's IANA timezone (defaults to the profile timezone)

    Only one entry per local calendar day is accepted; a second one is
    rejected with 409. The client triggers analysis separately via
    `POST /functions/analyze-entries`.
    """
    entry, milestone_reached = journal_service.create_entry(
        db=db, user=current_user, entry_data=entry_data
    )
    if milestone_reached:
        background_tasks.add_task(milestone_notifier.notify, current_user.id)
    return entry


@router.get(
    "/entries",
    response_model=List[JournalEntryOut],
    summary="Get my entries for a day"
)
def get_entries(
    on: Optional[date] = Query(None, description="Local date (defaults to today)"),
    tz: Optional[str] = Query(None, description="IANA timezone"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.get_entries_for_day(db=db, user=current_user, day=on, tz_name=tz)


@router.get(
    "/dates",
    response_model=JournalDatesOut,
    summary="Get dates with entries"
)
def get_entry_dates(
    tz: Optional[str] = Query(None, description="IANA timezone"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Distinct local dates with at least one entry, for calendar highlighting."""
    return journal_service.get_entry_dates(db=db, user=current_user, tz_name=tz)


@router.get(
    "/today",
    response_model=JournalTodayStatus,
    summary="Has the user written today?"
)
def get_today_status(
    tz: Optional[str] = Query(None, description="IANA timezone"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.get_today_status(db=db, user=current_user, tz_name=tz)


# =====================================================================
# DAILY SENTENCE
# =====================================================================

@router.get(
    "/daily-sentence",
    response_model=DailySentenceOut,
    summary="Get the daily sentence"
)
def get_daily_sentence(
    on: Optional[date] = Query(None, description="Date (defaults to today in the profile timezone)"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    day = on or local_today(resolve_timezone(current_user.timezone, settings.DEFAULT_TIMEZONE))
    return journal_service.get_daily_sentence(db=db, day=day)
