# api/routers/functions.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db
from lovejourney.schemas.analysis import (
    AnalysisOutcome,
    AnalysisTriggerRequest,
    AnalysisTriggerResult,
)
from lovejourney.services.journal_analysis import (
    TriggerValidationError,
    journal_analysis_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])


def trigger_response(result: AnalysisTriggerResult) -> JSONResponse:
    """Map a trigger outcome onto the client-facing response body."""
    if result.outcome == AnalysisOutcome.QUOTA_EXCEEDED:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "status": "error",
                "code": AnalysisOutcome.QUOTA_EXCEEDED.value,
                "error": result.message,
            },
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "success",
            "code": result.outcome.value,
            "message": result.message,
        },
    )


@router.post(
    "/analyze-entries",
    summary="Analyze recent journal entries if enough accumulated"
)
def analyze_entries(
    payload: Optional[AnalysisTriggerRequest] = None,
    db: Session = Depends(get_db)
):
    """
    Trigger sent by the client after each journal save.

    - **userId**: Id of the user whose entries to analyze
    - **email**: Email stored alongside the analysis

    Returns 200 whether or not an analysis was generated, 429 when the
    completion service is out of quota and 500 on unexpected failures.
    """
    payload = payload or AnalysisTriggerRequest()
    try:
        user_id, email = journal_analysis_service.validate_trigger(payload.user_id, payload.email)
    except TriggerValidationError as exc:
        logger.info("Rejected analysis trigger: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"status": "error", "code": exc.code, "error": str(exc)},
        )

    result = journal_analysis_service.run(db, user_id=user_id, email=email)
    return trigger_response(result)
