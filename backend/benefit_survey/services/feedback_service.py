"""
Feedback Service

Server half of the submission pipeline. Re-applies the shared
required-field table to an incoming FeedbackRequest and writes the
SubmissionRecord. Records are append-only: this service never updates
or deletes them.
"""
import logging
from typing import Optional, Tuple
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.db_models import Scheme, UserFeedbackDB
from ..models.feedback import FeedbackRequest
from .validation import ValidationResult, validate_feedback

logger = logging.getLogger(__name__)


class FeedbackService:
    """Validates and persists survey feedback."""

    def __init__(self, db: Session):
        self.db = db

    def validate(self, request: FeedbackRequest) -> ValidationResult:
        wire = request.to_wire()
        return validate_feedback(request.section_type, wire["userData"], wire["suggestedBenefits"])

    def create_feedback(self, request: FeedbackRequest) -> Tuple[Optional[UserFeedbackDB], ValidationResult]:
        """
        Validate and stage a new feedback record.

        Returns (record, validation). record is None when validation failed.
        The caller commits.
        """
        validation = self.validate(request)
        if not validation.ok:
            logger.warning(
                f"Rejected feedback for scheme={request.section_type}: "
                f"{validation.error} (missing: {validation.missing_fields})"
            )
            return None, validation

        wire = request.to_wire()
        record = UserFeedbackDB(
            id=str(uuid4()),
            section_type=request.section_type or Scheme.NOT_REGISTERED,
            user_data=wire["userData"],
            suggested_benefits=wire["suggestedBenefits"],
        )
        self.db.add(record)
        logger.info(f"Staged feedback {record.id} for scheme={record.section_type.value}")
        return record, validation

    def get_feedback(self, feedback_id: str) -> Optional[UserFeedbackDB]:
        return self.db.query(UserFeedbackDB).filter(UserFeedbackDB.id == feedback_id).first()
