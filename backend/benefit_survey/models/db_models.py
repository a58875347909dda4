"""
Benefit Survey - SQLAlchemy ORM Models
Persistent storage for submitted feedback
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, DateTime, JSON, Enum as SQLEnum
from ..database import Base


# =============================================================================
# ENUMS
# =============================================================================

class Scheme(str, Enum):
    """Social-insurance schemes a respondent can belong to."""
    MANDATORY_EMPLOYEE = "33"
    VOLUNTARY_CONTINUATION = "39"
    SELF_EMPLOYED = "40"  # Routing parent, replaced by one of the options below
    SELF_EMPLOYED_OPTION_1 = "40-1"
    SELF_EMPLOYED_OPTION_2 = "40-2"
    SELF_EMPLOYED_OPTION_3 = "40-3"
    NOT_REGISTERED = "notRegYet"


SELF_EMPLOYED_SCHEMES = (
    Scheme.SELF_EMPLOYED,
    Scheme.SELF_EMPLOYED_OPTION_1,
    Scheme.SELF_EMPLOYED_OPTION_2,
    Scheme.SELF_EMPLOYED_OPTION_3,
)

SELF_EMPLOYED_OPTIONS = (
    Scheme.SELF_EMPLOYED_OPTION_1,
    Scheme.SELF_EMPLOYED_OPTION_2,
    Scheme.SELF_EMPLOYED_OPTION_3,
)


# =============================================================================
# SUBMISSION RECORD
# =============================================================================

class UserFeedbackDB(Base):
    """
    One completed survey run.

    Written once by the feedback endpoint and never updated or deleted.
    Everything except the scheme is loosely typed JSON so that partial
    flows (e.g. unregistered respondents) can be stored as-is.
    """
    __tablename__ = "user_feedback"

    id = Column(String(36), primary_key=True)  # UUID
    section_type = Column(
        SQLEnum(Scheme, values_callable=lambda e: [m.value for m in e], native_enum=False, length=16),
        nullable=False,
        default=Scheme.NOT_REGISTERED,
        index=True,
    )

    # Format: {"age": "30", "occupation": "...", "yearsContributing": "5", "usedBenefits": [...], ...}
    user_data = Column(JSON, nullable=False, default=dict)

    # Format: {"healthcare": false, ..., "other": "", "userIdea": ""}
    suggested_benefits = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
