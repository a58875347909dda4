"""
Contribution Calculator

Pure functions turning self-reported contribution history into a total
paid-in amount. Inputs are raw form values, so anything missing or
non-numeric counts as no contribution instead of raising.
"""
import math
from typing import Optional, Union

from ..models.db_models import Scheme

Number = Union[int, float]
RawInput = Union[str, int, float, None]

# Fixed monthly rate for the voluntary-continuation regime
VOLUNTARY_MONTHLY_RATE = 432

# Fixed monthly rate per self-employed option
SELF_EMPLOYED_OPTION_RATES = {
    Scheme.SELF_EMPLOYED_OPTION_1: 70,
    Scheme.SELF_EMPLOYED_OPTION_2: 100,
    Scheme.SELF_EMPLOYED_OPTION_3: 300,
}

DEFAULT_MONTHLY_CONTRIBUTION = {
    Scheme.MANDATORY_EMPLOYEE: 750,  # For salary above 15,000 baht
    Scheme.VOLUNTARY_CONTINUATION: VOLUNTARY_MONTHLY_RATE,
    Scheme.SELF_EMPLOYED: 100,  # Middle option until a sub-option is chosen
    **SELF_EMPLOYED_OPTION_RATES,
}


def _is_blank(value: RawInput) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_number(value: RawInput) -> Optional[float]:
    """Parse a form value. Returns None for anything that is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except (TypeError, ValueError):
            return None
    if not math.isfinite(number):
        return None
    return number


def total_contribution(years: RawInput, months: RawInput, monthly_amount: RawInput) -> float:
    """
    (years * 12 + months) * monthly_amount.

    Missing years or monthly amount give 0. Missing months count as 0 months.
    Any input that is present but not numeric gives 0.
    """
    if _is_blank(years) or _is_blank(monthly_amount):
        return 0.0

    years_n = _to_number(years)
    months_n = 0.0 if _is_blank(months) else _to_number(months)
    monthly_n = _to_number(monthly_amount)
    if years_n is None or months_n is None or monthly_n is None:
        return 0.0

    return (years_n * 12 + months_n) * monthly_n


def total_contribution_dual_regime(
    years1: RawInput,
    months1: RawInput,
    monthly1: RawInput,
    years2: RawInput,
    months2: RawInput,
    fixed_monthly2: Number = VOLUNTARY_MONTHLY_RATE,
) -> float:
    """
    Total for a respondent who moved from one regime to another.

    The second regime's monthly amount is a fixed rate, never user input.
    """
    return total_contribution(years1, months1, monthly1) + total_contribution(years2, months2, fixed_monthly2)


def default_monthly_contribution(scheme: Optional[Scheme]) -> Optional[int]:
    if scheme is None:
        return None
    return DEFAULT_MONTHLY_CONTRIBUTION.get(scheme)


def format_amount(amount: Number) -> str:
    """Thousands-separated display string, e.g. 45000 -> "45,000"."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"
