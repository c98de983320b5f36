# api/routers/analyses.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lovejourney.api.routers.functions import trigger_response
from lovejourney.core.config import get_db
from lovejourney.core.security import get_current_user
from lovejourney.models.user import User
from lovejourney.schemas.analysis import AnalysisOut
from lovejourney.services.journal_analysis import journal_analysis_service

router = APIRouter(prefix="/analyses", tags=["Journal Analyses"])


# =====================================================================
# USER ENDPOINTS - Own analyses only
# =====================================================================

@router.get(
    "/me",
    response_model=List[AnalysisOut],
    summary="Get my analyses"
)
def get_my_analyses(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    All analyses for the authenticated user, newest first.

    Deferred attempts are included with status `deferred`.
    """
    return journal_analysis_service.get_my_analyses(
        db=db, user_id=current_user.id, skip=skip, limit=limit
    )


@router.post(
    "/me/trigger",
    summary="Run the analysis trigger for myself"
)
def trigger_my_analysis(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Same as `POST /functions/analyze-entries` with the caller's id and email."""
    result = journal_analysis_service.run(db, user_id=current_user.id, email=current_user.email)
    return trigger_response(result)


@router.get(
    "/{analysis_id}",
    response_model=AnalysisOut,
    summary="Get analysis by ID"
)
def get_analysis(
    analysis_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_analysis_service.get_analysis(
        db=db, analysis_id=analysis_id, user_id=current_user.id
    )
