"""
Benefit Survey - Wizard Session Models

In-memory state of one interactive survey run. A Session is created when the
wizard starts and is owned by exactly one WizardStateMachine; nothing here is
persisted until the feedback endpoint stores a snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import List, Optional

from .db_models import Scheme


# =============================================================================
# ENUMS
# =============================================================================

class Screen(str, Enum):
    """Wizard steps, in the order a respondent normally visits them."""
    HOME = "home"
    SELECTION = "selection"
    SCHEME_SUB_OPTIONS = "schemeSubOptions"
    CURRENT_BENEFITS = "currentBenefits"
    USER_INPUT = "userInput"
    SUGGEST_BENEFITS = "suggestBenefits"
    END = "end"


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# =============================================================================
# SESSION DATA
# =============================================================================

@dataclass
class Respondent:
    """
    Self-reported respondent data, kept as the raw form strings.

    None means the field was never entered; "" means it was cleared.
    The dual-regime fields are only used by voluntary-continuation
    respondents, whose second regime has a fixed monthly rate.
    """
    name: Optional[str] = None
    age: Optional[str] = None
    occupation: Optional[str] = None
    years_contributing: Optional[str] = None
    months_contributing: Optional[str] = None
    monthly_contribution: Optional[str] = None
    used_benefits: List[str] = field(default_factory=list)

    years_section33: Optional[str] = None
    months_section33: Optional[str] = None
    monthly_section33: Optional[str] = None
    years_section39: Optional[str] = None
    months_section39: Optional[str] = None


@dataclass
class Suggestions:
    """Benefit-improvement flags plus free text."""
    healthcare: bool = False
    retirement: bool = False
    unemployment: bool = False
    disability: bool = False
    child_support: bool = False
    other: str = ""
    user_idea: str = ""


@dataclass
class Session:
    """Mutable state of one wizard run."""
    current_screen: Screen = Screen.HOME
    scheme: Optional[Scheme] = None
    respondent: Respondent = field(default_factory=Respondent)
    suggestions: Suggestions = field(default_factory=Suggestions)
    submission_status: SubmissionStatus = SubmissionStatus.IDLE
    submission_error: Optional[str] = None

    # Bumped on every screen change so late submission results can be detected
    navigation_count: int = 0


# =============================================================================
# PARTIAL UPDATES
# =============================================================================
#
# A patch field left as None is "not specified" and keeps the current value.
# To blank a text input, patch it with "".
#

@dataclass(frozen=True)
class RespondentPatch:
    name: Optional[str] = None
    age: Optional[str] = None
    occupation: Optional[str] = None
    years_contributing: Optional[str] = None
    months_contributing: Optional[str] = None
    monthly_contribution: Optional[str] = None
    used_benefits: Optional[List[str]] = None
    years_section33: Optional[str] = None
    months_section33: Optional[str] = None
    monthly_section33: Optional[str] = None
    years_section39: Optional[str] = None
    months_section39: Optional[str] = None


@dataclass(frozen=True)
class SuggestionsPatch:
    healthcare: Optional[bool] = None
    retirement: Optional[bool] = None
    unemployment: Optional[bool] = None
    disability: Optional[bool] = None
    child_support: Optional[bool] = None
    other: Optional[str] = None
    user_idea: Optional[str] = None


def _specified(patch) -> dict:
    return {f.name: getattr(patch, f.name) for f in fields(patch) if getattr(patch, f.name) is not None}


def merge_respondent(current: Respondent, patch: RespondentPatch) -> Respondent:
    """Return a new Respondent with the patch's specified fields applied."""
    changes = _specified(patch)
    if "used_benefits" in changes:
        changes["used_benefits"] = list(changes["used_benefits"])
    return replace(current, **changes)


def merge_suggestions(current: Suggestions, patch: SuggestionsPatch) -> Suggestions:
    """Return a new Suggestions with the patch's specified fields applied."""
    return replace(current, **_specified(patch))
