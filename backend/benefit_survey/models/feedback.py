"""
Benefit Survey - Feedback Wire Models

Pydantic models for the POST /feedback body. Field names are snake_case in
Python and camelCase on the wire, so the same model is used by the submission
client to build the payload and by the router to parse it.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .db_models import Scheme


class WireModel(BaseModel):
    """Immutable camelCase model shared by client and server."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class UserDataPayload(WireModel):
    """Respondent snapshot. Every field is optional so partial flows still parse."""
    name: Optional[str] = None
    age: Optional[str] = None
    occupation: Optional[str] = None
    years_contributing: Optional[str] = None
    months_contributing: Optional[str] = None
    monthly_contribution: Optional[str] = None
    used_benefits: List[str] = Field(default_factory=list)

    # Voluntary-continuation respondents report both regimes separately
    years_section33: Optional[str] = None
    months_section33: Optional[str] = None
    monthly_section33: Optional[str] = None
    years_section39: Optional[str] = None
    months_section39: Optional[str] = None

    total_contribution: Optional[float] = None

    @field_validator(
        "name", "age", "occupation",
        "years_contributing", "months_contributing", "monthly_contribution",
        "years_section33", "months_section33", "monthly_section33",
        "years_section39", "months_section39",
        mode="before",
    )
    @classmethod
    def numbers_as_text(cls, value):
        # Form inputs arrive as strings, but clients may send raw numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SuggestedBenefitsPayload(WireModel):
    """Benefit-improvement choices."""
    healthcare: bool = False
    retirement: bool = False
    unemployment: bool = False
    disability: bool = False
    child_support: bool = False
    other: str = ""
    user_idea: str = ""

    @field_validator(
        "healthcare", "retirement", "unemployment", "disability", "child_support",
        "other", "user_idea",
        mode="before",
    )
    @classmethod
    def null_as_default(cls, value, info):
        # Partial flows may send explicit nulls for untouched choices
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class FeedbackRequest(WireModel):
    """Request body for POST /feedback."""
    section_type: Optional[Scheme] = None
    user_data: UserDataPayload
    suggested_benefits: SuggestedBenefitsPayload


class FeedbackCreatedResponse(BaseModel):
    """Success body for POST /feedback."""
    success: bool = True
    id: str


class SchemeSummary(BaseModel):
    """One entry of GET /feedback/schemes."""
    code: str
    title: str
    default_monthly_contribution: Optional[float]
    benefits: List[str]
    selectable: bool
