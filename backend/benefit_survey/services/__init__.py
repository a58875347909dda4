"""
Survey Services

- Benefit catalog and contribution calculator (static data, pure functions)
- WizardStateMachine: screen flow for one survey run
- FeedbackSubmissionClient: client half of the submission pipeline
- FeedbackService: server half, validates and persists feedback
"""

from .catalog import BenefitDetail, benefits_for, detail_for, scheme_title
from .contribution import (
    total_contribution,
    total_contribution_dual_regime,
    default_monthly_contribution,
    format_amount,
    VOLUNTARY_MONTHLY_RATE,
)
from .validation import Bucket, ValidationResult, classify_bucket, validate_feedback
from .submission import FeedbackSubmissionClient, SubmissionResult, FailureKind, build_payload
from .wizard import WizardStateMachine
from .feedback_service import FeedbackService

__all__ = [
    'BenefitDetail',
    'benefits_for',
    'detail_for',
    'scheme_title',
    'total_contribution',
    'total_contribution_dual_regime',
    'default_monthly_contribution',
    'format_amount',
    'VOLUNTARY_MONTHLY_RATE',
    'Bucket',
    'ValidationResult',
    'classify_bucket',
    'validate_feedback',
    'FeedbackSubmissionClient',
    'SubmissionResult',
    'FailureKind',
    'build_payload',
    'WizardStateMachine',
    'FeedbackService',
]
