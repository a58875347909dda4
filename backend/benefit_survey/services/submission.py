"""
Feedback Submission Client

Client half of the submission pipeline: checks a wizard Session against the
shared required-field table, builds the immutable request payload, sends it
to POST /feedback and maps the response into a SubmissionResult.

Nothing in here raises to the caller. Every failure, including transport
errors and unreadable responses, comes back as a SubmissionResult so the
wizard can keep the respondent's data and let them retry.
"""
import logging
import os
from dataclasses import asdict, dataclass
from enum import Enum
from typing import List, Optional, Tuple

import httpx

from ..models.db_models import Scheme
from ..models.feedback import FeedbackRequest, SuggestedBenefitsPayload, UserDataPayload
from ..models.wizard import Session
from .contribution import total_contribution, total_contribution_dual_regime
from .validation import Bucket, classify_bucket, validate_feedback

logger = logging.getLogger(__name__)

# Configuration
FEEDBACK_API_URL = os.getenv("FEEDBACK_API_URL", "http://localhost:8000")
FEEDBACK_API_TIMEOUT = float(os.getenv("FEEDBACK_API_TIMEOUT", "30"))
FEEDBACK_PATH = "/feedback"

NO_SCHEME_ERROR = "Please select your social security scheme"
GENERIC_SAVE_ERROR = "Failed to save feedback"
CONNECTION_ERROR = "Could not connect to the server. Please try again."
UNEXPECTED_ERROR = "An unexpected error occurred"


class FailureKind(str, Enum):
    MISSING_REQUIRED_FIELDS = "missing-required-fields"
    NETWORK_OR_SERVER_ERROR = "network-or-server-error"
    VALIDATION_REJECTED_BY_SERVER = "validation-rejected-by-server"


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission attempt."""
    success: bool
    error: Optional[str] = None
    failure: Optional[FailureKind] = None
    record_id: Optional[str] = None
    missing_fields: Tuple[str, ...] = ()

    @classmethod
    def failed(cls, failure: FailureKind, error: str, missing_fields: Optional[List[str]] = None) -> "SubmissionResult":
        return cls(
            success=False,
            error=error,
            failure=failure,
            missing_fields=tuple(missing_fields or ()),
        )


# =============================================================================
# PAYLOAD
# =============================================================================

def session_total_contribution(session: Session) -> Optional[float]:
    """Total paid in according to the session's scheme. None for unregistered respondents."""
    r = session.respondent
    bucket = classify_bucket(session.scheme)
    if bucket == Bucket.NOT_REGISTERED:
        return None
    if bucket == Bucket.VOLUNTARY_CONTINUATION:
        return total_contribution_dual_regime(
            r.years_section33, r.months_section33, r.monthly_section33,
            r.years_section39, r.months_section39,
        )
    return total_contribution(r.years_contributing, r.months_contributing, r.monthly_contribution)


def build_payload(session: Session) -> FeedbackRequest:
    """Snapshot the session into an immutable request payload."""
    respondent = asdict(session.respondent)
    return FeedbackRequest(
        section_type=session.scheme,
        user_data=UserDataPayload(
            **respondent,
            total_contribution=session_total_contribution(session),
        ),
        suggested_benefits=SuggestedBenefitsPayload(**asdict(session.suggestions)),
    )


def check_session(session: Session) -> Optional[SubmissionResult]:
    """Local validation. Returns a failed result, or None when the session may be sent."""
    if session.scheme is None:
        return SubmissionResult.failed(FailureKind.MISSING_REQUIRED_FIELDS, NO_SCHEME_ERROR, ["sectionType"])

    wire = build_payload(session).to_wire()
    result = validate_feedback(session.scheme, wire["userData"], wire["suggestedBenefits"])
    if not result.ok:
        return SubmissionResult.failed(FailureKind.MISSING_REQUIRED_FIELDS, result.error, result.missing_fields)
    return None


# =============================================================================
# CLIENT
# =============================================================================

class FeedbackSubmissionClient:
    """
    Sends validated sessions to the feedback endpoint.

    A custom httpx transport can be injected, e.g. httpx.ASGITransport to
    talk to the FastAPI app in-process or httpx.MockTransport in tests.
    """

    def __init__(
        self,
        base_url: str = FEEDBACK_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = FEEDBACK_API_TIMEOUT,
    ):
        self.base_url = base_url
        self.transport = transport
        self.timeout = timeout

    async def submit(self, session: Session) -> SubmissionResult:
        """Validate, send and interpret one submission."""
        try:
            local_failure = check_session(session)
            if local_failure is not None:
                logger.info(f"Submission blocked locally: {local_failure.error}")
                return local_failure

            payload = build_payload(session)
            return await self._post(payload)
        except Exception as e:
            logger.error(f"Unexpected error while submitting feedback: {e}")
            return SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, UNEXPECTED_ERROR)

    async def _post(self, payload: FeedbackRequest) -> SubmissionResult:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self.transport,
                timeout=httpx.Timeout(self.timeout, connect=10.0),
            ) as client:
                response = await client.post(FEEDBACK_PATH, json=payload.to_wire())
        except httpx.TimeoutException:
            logger.error("Feedback request timed out")
            return SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, CONNECTION_ERROR)
        except httpx.HTTPError as e:
            logger.error(f"Feedback request failed: {e}")
            return SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, CONNECTION_ERROR)

        return self._interpret(response)

    @staticmethod
    def _interpret(response: httpx.Response) -> SubmissionResult:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success and body.get("success"):
            record_id = body.get("id")
            logger.info(f"Feedback saved with id={record_id}")
            return SubmissionResult(success=True, record_id=str(record_id) if record_id is not None else None)

        error = body.get("error") or GENERIC_SAVE_ERROR
        if response.status_code == 400:
            logger.warning(f"Feedback rejected by server: {error}")
            return SubmissionResult.failed(FailureKind.VALIDATION_REJECTED_BY_SERVER, error)

        logger.error(f"Feedback endpoint returned {response.status_code}: {error}")
        return SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, error)
