"""
Survey Wizard State Machine

Deterministic screen-to-screen flow for one survey run.
The machine owns its Session exclusively; presentation code calls the
transition methods below and renders whatever current_screen says.

Every synchronous transition returns (success, message) and leaves the
session untouched when it is refused. Only submit() is asynchronous.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models.db_models import Scheme, SELF_EMPLOYED_OPTIONS, SELF_EMPLOYED_SCHEMES
from ..models.wizard import (
    Screen, SubmissionStatus, Session,
    RespondentPatch, SuggestionsPatch,
    merge_respondent, merge_suggestions,
)
from .catalog import benefits_for
from .contribution import default_monthly_contribution, SELF_EMPLOYED_OPTION_RATES
from .submission import FeedbackSubmissionClient, SubmissionResult, UNEXPECTED_ERROR, FailureKind, session_total_contribution
from .validation import Bucket, classify_bucket, is_present

logger = logging.getLogger(__name__)


# =============================================================================
# SCREEN CONFIGURATION
# =============================================================================

SCREEN_CONFIG: Dict[Screen, Dict[str, Any]] = {
    Screen.HOME: {
        "description": "Landing page",
        "allowed_transitions": [Screen.SELECTION],
        "back": None,
    },
    Screen.SELECTION: {
        "description": "Respondent picks their scheme",
        "allowed_transitions": [
            Screen.SCHEME_SUB_OPTIONS,
            Screen.CURRENT_BENEFITS,
            Screen.SUGGEST_BENEFITS,
        ],
        "back": Screen.HOME,
    },
    Screen.SCHEME_SUB_OPTIONS: {
        "description": "Self-employed respondent picks a contribution option",
        "allowed_transitions": [Screen.CURRENT_BENEFITS],
        "back": Screen.SELECTION,
    },
    Screen.CURRENT_BENEFITS: {
        "description": "Benefits of the chosen scheme, with already-used checkboxes",
        "allowed_transitions": [Screen.USER_INPUT],
        "back": Screen.SELECTION,  # SCHEME_SUB_OPTIONS for self-employed, see back_target()
    },
    Screen.USER_INPUT: {
        "description": "Age, occupation and contribution history",
        "allowed_transitions": [Screen.SUGGEST_BENEFITS],
        "back": Screen.CURRENT_BENEFITS,
    },
    Screen.SUGGEST_BENEFITS: {
        "description": "Benefit-improvement suggestions and submit",
        "allowed_transitions": [Screen.END],
        "back": Screen.USER_INPUT,  # SELECTION for unregistered respondents
    },
    Screen.END: {
        "description": "Thank-you page",
        "allowed_transitions": [Screen.HOME],
        "back": None,
    },
}

# Schemes offered on the selection screen; self-employed options come later
SELECTABLE_SCHEMES = (
    Scheme.MANDATORY_EMPLOYEE,
    Scheme.VOLUNTARY_CONTINUATION,
    Scheme.SELF_EMPLOYED,
    Scheme.NOT_REGISTERED,
)

SCHEME_ROUTES = {
    Scheme.SELF_EMPLOYED: Screen.SCHEME_SUB_OPTIONS,
    Scheme.NOT_REGISTERED: Screen.SUGGEST_BENEFITS,
}

# Inputs marked required on the contribution form. This is only the UI gate;
# the authoritative check runs at submit time.
FORM_REQUIRED_FIELDS: Dict[Bucket, List[str]] = {
    Bucket.VOLUNTARY_CONTINUATION: [
        "age", "occupation",
        "years_section33", "months_section33", "monthly_section33",
        "years_section39", "months_section39",
    ],
    Bucket.SELF_EMPLOYED: [
        "age", "occupation",
        "years_contributing", "months_contributing", "monthly_contribution",
    ],
    Bucket.DEFAULT: [
        "age", "occupation",
        "years_contributing", "monthly_contribution",
    ],
    Bucket.NOT_REGISTERED: [],
}


# =============================================================================
# STATE MACHINE
# =============================================================================

class WizardStateMachine:
    """
    Survey wizard controller.

    Core rules:
    - Self-employed respondents always pass through the option screen
    - Unregistered respondents skip straight to suggestions
    - Going back never discards entered data
    - At most one submission in flight per session
    """

    def __init__(self, session: Optional[Session] = None):
        self.session = session or Session()

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_screen_config(self, screen: Screen) -> Dict[str, Any]:
        return SCREEN_CONFIG.get(screen, {})

    def can_transition(self, from_screen: Screen, to_screen: Screen) -> Tuple[bool, str]:
        """
        Check if a forward transition is allowed.

        Returns (allowed, reason)
        """
        allowed_transitions = self.get_screen_config(from_screen).get("allowed_transitions", [])
        if to_screen in allowed_transitions:
            return True, "Transition allowed"
        return False, f"Cannot transition from {from_screen.value} to {to_screen.value}"

    def back_target(self, screen: Screen) -> Optional[Screen]:
        """Screen reached by going back from `screen`, or None if there is none."""
        scheme = self.session.scheme
        if screen == Screen.CURRENT_BENEFITS and scheme in SELF_EMPLOYED_SCHEMES:
            return Screen.SCHEME_SUB_OPTIONS
        if screen == Screen.SUGGEST_BENEFITS and scheme == Scheme.NOT_REGISTERED:
            return Screen.SELECTION
        return self.get_screen_config(screen).get("back")

    def is_terminal_screen(self) -> bool:
        return self.session.current_screen == Screen.END

    def available_benefits(self) -> List[str]:
        return benefits_for(self.session.scheme)

    def total_contribution(self) -> float:
        return session_total_contribution(self.session) or 0.0

    def missing_form_fields(self) -> List[str]:
        """Required contribution-form inputs that are still empty."""
        bucket = classify_bucket(self.session.scheme)
        respondent = self.session.respondent
        return [name for name in FORM_REQUIRED_FIELDS[bucket] if not is_present(getattr(respondent, name))]

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _set_screen(self, to_screen: Screen, trigger: str) -> Tuple[bool, str]:
        from_screen = self.session.current_screen
        self.session.current_screen = to_screen
        self.session.navigation_count += 1
        logger.info(f"Wizard moved from {from_screen.value} to {to_screen.value} (trigger: {trigger})")
        return True, f"Moved to {to_screen.value}"

    def _advance(self, to_screen: Screen, trigger: str) -> Tuple[bool, str]:
        allowed, reason = self.can_transition(self.session.current_screen, to_screen)
        if not allowed:
            return False, reason
        return self._set_screen(to_screen, trigger)

    def _require_screen(self, screen: Screen, action: str) -> Tuple[bool, str]:
        current = self.session.current_screen
        if current != screen:
            return False, f"Cannot {action} on the {current.value} screen"
        return True, ""

    def _fill_default_contribution(self, scheme: Scheme) -> None:
        if is_present(self.session.respondent.monthly_contribution):
            return
        default = default_monthly_contribution(scheme)
        if default is not None:
            self.session.respondent = merge_respondent(
                self.session.respondent, RespondentPatch(monthly_contribution=str(default))
            )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self) -> Tuple[bool, str]:
        """Home -> Selection."""
        return self._advance(Screen.SELECTION, "start")

    def select_scheme(self, scheme: Scheme) -> Tuple[bool, str]:
        """Selection -> option screen, current benefits, or suggestions depending on scheme."""
        ok, reason = self._require_screen(Screen.SELECTION, "select a scheme")
        if not ok:
            return False, reason
        if scheme not in SELECTABLE_SCHEMES:
            return False, f"Scheme {scheme.value} cannot be selected directly"

        target = SCHEME_ROUTES.get(scheme, Screen.CURRENT_BENEFITS)
        allowed, reason = self.can_transition(Screen.SELECTION, target)
        if not allowed:
            return False, reason

        self.session.scheme = scheme
        if scheme != Scheme.NOT_REGISTERED:
            self._fill_default_contribution(scheme)
        return self._set_screen(target, f"select_scheme:{scheme.value}")

    def select_sub_option(self, option: Scheme) -> Tuple[bool, str]:
        """Option screen -> current benefits. The option becomes the session's scheme."""
        ok, reason = self._require_screen(Screen.SCHEME_SUB_OPTIONS, "select a contribution option")
        if not ok:
            return False, reason
        if option not in SELF_EMPLOYED_OPTIONS:
            return False, f"{option.value} is not a self-employed contribution option"

        allowed, reason = self.can_transition(Screen.SCHEME_SUB_OPTIONS, Screen.CURRENT_BENEFITS)
        if not allowed:
            return False, reason

        self.session.scheme = option
        # Each option has a fixed monthly rate
        self.session.respondent = merge_respondent(
            self.session.respondent,
            RespondentPatch(monthly_contribution=str(SELF_EMPLOYED_OPTION_RATES[option])),
        )
        return self._set_screen(Screen.CURRENT_BENEFITS, f"select_sub_option:{option.value}")

    def toggle_used_benefit(self, benefit: str) -> Tuple[bool, str]:
        """Add the benefit to used_benefits, or remove it if already there."""
        ok, reason = self._require_screen(Screen.CURRENT_BENEFITS, "mark used benefits")
        if not ok:
            return False, reason

        used = list(self.session.respondent.used_benefits)
        if benefit in used:
            used = [item for item in used if item != benefit]
            message = f"Removed {benefit}"
        else:
            used.append(benefit)
            message = f"Added {benefit}"
        self.session.respondent = merge_respondent(self.session.respondent, RespondentPatch(used_benefits=used))
        return True, message

    def continue_to_user_input(self) -> Tuple[bool, str]:
        """Current benefits -> contribution form."""
        return self._advance(Screen.USER_INPUT, "continue_to_user_input")

    def continue_to_suggestions(self) -> Tuple[bool, str]:
        """Contribution form -> suggestions, once every required input is filled."""
        ok, reason = self._require_screen(Screen.USER_INPUT, "continue to suggestions")
        if not ok:
            return False, reason
        missing = self.missing_form_fields()
        if missing:
            return False, f"Please fill in: {', '.join(missing)}"
        return self._advance(Screen.SUGGEST_BENEFITS, "continue_to_suggestions")

    def go_back(self) -> Tuple[bool, str]:
        """Return to the previous screen. Entered data is kept."""
        current = self.session.current_screen
        target = self.back_target(current)
        if target is None:
            return False, f"Cannot go back from {current.value}"
        return self._set_screen(target, "go_back")

    def restart(self, clear_data: bool = False) -> Tuple[bool, str]:
        """
        End -> Home.

        By default the previous answers stay in place and are overwritten
        as the respondent goes through the wizard again.
        """
        allowed, reason = self.can_transition(self.session.current_screen, Screen.HOME)
        if not allowed:
            return False, reason
        if clear_data:
            self.session = Session(
                current_screen=self.session.current_screen,
                navigation_count=self.session.navigation_count,
            )
        self.session.submission_status = SubmissionStatus.IDLE
        self.session.submission_error = None
        return self._set_screen(Screen.HOME, "restart")

    # -------------------------------------------------------------------------
    # Form updates (legal on any screen)
    # -------------------------------------------------------------------------

    def update_respondent(self, patch: RespondentPatch) -> None:
        self.session.respondent = merge_respondent(self.session.respondent, patch)

    def update_suggestions(self, patch: SuggestionsPatch) -> None:
        self.session.suggestions = merge_suggestions(self.session.suggestions, patch)

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def submit(self, client: FeedbackSubmissionClient) -> SubmissionResult:
        """
        Suggestions -> End on success.

        On failure the wizard stays on the suggestions screen with
        submission_status FAILED and the reason in submission_error.
        A result that arrives after the respondent navigated elsewhere is
        discarded and the status returns to IDLE.
        """
        session = self.session
        ok, reason = self._require_screen(Screen.SUGGEST_BENEFITS, "submit feedback")
        if not ok:
            return SubmissionResult(success=False, error=reason)
        if session.submission_status == SubmissionStatus.IN_FLIGHT:
            return SubmissionResult(success=False, error="A submission is already in progress")

        session.submission_status = SubmissionStatus.IN_FLIGHT
        ticket = session.navigation_count

        try:
            result = await client.submit(session)
        except Exception as e:
            logger.error(f"Submission client raised: {e}")
            result = SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, UNEXPECTED_ERROR)

        if self.session is not session or session.navigation_count != ticket:
            logger.info("Discarding submission result for a session that has moved on")
            session.submission_status = SubmissionStatus.IDLE
            return result

        if result.success:
            session.submission_status = SubmissionStatus.SUCCEEDED
            session.submission_error = None
            self._advance(Screen.END, "submission_succeeded")
        else:
            session.submission_status = SubmissionStatus.FAILED
            session.submission_error = result.error
        return result
