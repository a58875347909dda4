"""
Feedback Validation

The single required-field table for feedback submissions. The submission
client runs it before any network call and the feedback endpoint runs it
again before persisting, so both layers always agree on what "complete"
means for each scheme.

Both callers pass wire-shaped (camelCase) dicts.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..models.db_models import Scheme, SELF_EMPLOYED_SCHEMES


class Bucket(str, Enum):
    """Required-field classes."""
    NOT_REGISTERED = "not_registered"
    VOLUNTARY_CONTINUATION = "voluntary_continuation"
    SELF_EMPLOYED = "self_employed"
    DEFAULT = "default"


# =============================================================================
# REQUIRED-FIELD TABLE
# =============================================================================

IDENTITY_FIELDS = ["age", "occupation"]
IDENTITY_ERROR = "Missing required user data"

SUGGESTION_FLAGS = ["healthcare", "retirement", "unemployment", "disability", "childSupport"]
SUGGESTION_TEXTS = ["other", "userIdea"]

BUCKET_RULES: Dict[Bucket, Dict[str, Any]] = {
    Bucket.NOT_REGISTERED: {
        "required": [],
        "null_only": [],
        "error": "Please choose or describe at least one benefit you would like to see",
    },
    Bucket.VOLUNTARY_CONTINUATION: {
        "required": [
            "yearsSection33", "monthsSection33", "monthlySection33",
            "yearsSection39", "monthsSection39",
        ],
        "null_only": [],
        "error": "Missing required Section 39 data",
    },
    Bucket.SELF_EMPLOYED: {
        "required": ["yearsContributing", "monthlyContribution"],
        # Zero months is a valid answer; only an absent value is missing
        "null_only": ["monthsContributing"],
        "error": "Missing required Section 40 data",
    },
    Bucket.DEFAULT: {
        "required": ["yearsContributing", "monthlyContribution"],
        "null_only": [],
        "error": "Missing required contribution data",
    },
}


@dataclass
class ValidationResult:
    bucket: Bucket
    missing_fields: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def classify_bucket(scheme: Optional[Scheme]) -> Bucket:
    """Map a scheme to its required-field bucket. No scheme means not registered."""
    if scheme is None or scheme == Scheme.NOT_REGISTERED:
        return Bucket.NOT_REGISTERED
    if scheme == Scheme.VOLUNTARY_CONTINUATION:
        return Bucket.VOLUNTARY_CONTINUATION
    if scheme in SELF_EMPLOYED_SCHEMES:
        return Bucket.SELF_EMPLOYED
    return Bucket.DEFAULT


def is_present(value: Any) -> bool:
    """None and blank strings are missing. Numeric 0 and "0" are present."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _has_suggestion(suggestions: Mapping[str, Any]) -> bool:
    if any(bool(suggestions.get(flag)) for flag in SUGGESTION_FLAGS):
        return True
    return any(is_present(suggestions.get(text)) for text in SUGGESTION_TEXTS)


def validate_feedback(
    scheme: Optional[Scheme],
    user_data: Mapping[str, Any],
    suggestions: Mapping[str, Any],
) -> ValidationResult:
    """
    Check a submission against the required-field table.

    Returns a ValidationResult; error is None when the submission is complete.
    """
    bucket = classify_bucket(scheme)
    rules = BUCKET_RULES[bucket]

    if bucket == Bucket.NOT_REGISTERED:
        if _has_suggestion(suggestions):
            return ValidationResult(bucket=bucket)
        return ValidationResult(
            bucket=bucket,
            missing_fields=SUGGESTION_FLAGS + SUGGESTION_TEXTS,
            error=rules["error"],
        )

    missing_identity = [name for name in IDENTITY_FIELDS if not is_present(user_data.get(name))]
    if missing_identity:
        return ValidationResult(bucket=bucket, missing_fields=missing_identity, error=IDENTITY_ERROR)

    missing = [name for name in rules["required"] if not is_present(user_data.get(name))]
    missing += [name for name in rules["null_only"] if user_data.get(name) is None]
    if missing:
        return ValidationResult(bucket=bucket, missing_fields=missing, error=rules["error"])

    return ValidationResult(bucket=bucket)
