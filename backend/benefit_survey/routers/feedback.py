"""
Benefit Survey - Feedback API Router

Persistence endpoint for completed survey runs. The request is validated
against the same required-field table the client uses before anything is
written.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.db_models import Scheme
from ..models.feedback import FeedbackRequest, FeedbackCreatedResponse, SchemeSummary
from ..services.catalog import benefits_for, scheme_title
from ..services.contribution import default_monthly_contribution
from ..services.feedback_service import FeedbackService
from ..services.wizard import SELECTABLE_SCHEMES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post(
    "",
    status_code=201,
    response_model=FeedbackCreatedResponse,
    responses={400: {"description": "Missing required fields"}, 500: {"description": "Internal server error"}},
)
async def submit_feedback(
    request: FeedbackRequest,
    db: Session = Depends(get_db),
):
    """
    Store one survey submission.

    Returns 201 with the new record id, 400 with {"error"} when required
    fields for the scheme are missing, and 500 with {"error", "message"}
    on any other failure.
    """
    try:
        service = FeedbackService(db)
        record, validation = service.create_feedback(request)
        if record is None:
            return JSONResponse(status_code=400, content={"error": validation.error})

        db.commit()
        logger.info(f"Saved feedback {record.id}")
        return FeedbackCreatedResponse(id=record.id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving feedback: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e) or "Unknown error"},
        )


@router.get("/schemes", response_model=List[SchemeSummary])
async def list_schemes():
    """
    Get the schemes a respondent can belong to, with their benefits.
    """
    return [
        SchemeSummary(
            code=scheme.value,
            title=scheme_title(scheme),
            default_monthly_contribution=default_monthly_contribution(scheme),
            benefits=benefits_for(scheme),
            selectable=scheme in SELECTABLE_SCHEMES,
        )
        for scheme in Scheme
    ]
