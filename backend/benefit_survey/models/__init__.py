"""Benefit Survey - Data Models"""
from .db_models import (
    Scheme, SELF_EMPLOYED_SCHEMES, SELF_EMPLOYED_OPTIONS,
    UserFeedbackDB,
)
from .feedback import (
    UserDataPayload, SuggestedBenefitsPayload, FeedbackRequest,
    FeedbackCreatedResponse, SchemeSummary,
)
from .wizard import (
    Screen, SubmissionStatus,
    Respondent, Suggestions, Session,
    RespondentPatch, SuggestionsPatch,
    merge_respondent, merge_suggestions,
)

__all__ = [
    "Scheme", "SELF_EMPLOYED_SCHEMES", "SELF_EMPLOYED_OPTIONS",
    "UserFeedbackDB",
    "UserDataPayload", "SuggestedBenefitsPayload", "FeedbackRequest",
    "FeedbackCreatedResponse", "SchemeSummary",
    "Screen", "SubmissionStatus",
    "Respondent", "Suggestions", "Session",
    "RespondentPatch", "SuggestionsPatch",
    "merge_respondent", "merge_suggestions",
]
