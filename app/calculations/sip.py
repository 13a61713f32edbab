"""
SIP (Systematic Investment Plan) Calculations

Future value of a fixed monthly investment, contributed at the start of
each month and compounded monthly.
"""

from typing import List
from dataclasses import dataclass, field

from app.calculations.validation import (
    require_finite,
    require_finite_inputs,
    require_whole_years,
)


@dataclass
class SIPInputs:
    """Terms of a systematic investment plan."""

    monthly_amount: float
    annual_return: float  # Expected annual return in percent
    tenure_years: int


@dataclass
class SIPYearEntry:
    """Investment position at the end of a year."""

    year: int
    invested_amount: float  # Cumulative contributions
    interest_earned: float
    total_value: float


@dataclass
class SIPResult:
    """Maturity value of the plan and its yearly growth."""

    future_value: float
    total_investment: float
    total_returns: float
    yearly_breakdown: List[SIPYearEntry] = field(default_factory=list)


def sip_future_value(monthly_amount: float, monthly_return: float, months: int) -> float:
    """
    Future value of an annuity-due.

    FV = PMT * (((1 + r)^n - 1) / r) * (1 + r)

    With a zero return the plan is worth exactly what was put in.

    Raises:
        ValueError: If the value does not fit in a float
    """
    if monthly_return == 0:
        return require_finite(monthly_amount * months, "future_value")

    try:
        growth = (1 + monthly_return) ** months
    except OverflowError:
        raise ValueError("future_value is too large to calculate for these inputs")

    return require_finite(
        monthly_amount * ((growth - 1) / monthly_return) * (1 + monthly_return),
        "future_value",
    )


def validate_sip_inputs(inputs: SIPInputs) -> None:
    """Raise ValueError if the plan terms are invalid."""
    require_finite_inputs(
        monthly_amount=inputs.monthly_amount,
        annual_return=inputs.annual_return,
        tenure_years=inputs.tenure_years,
    )
    if inputs.monthly_amount <= 0:
        raise ValueError("monthly_amount must be greater than 0")
    if inputs.annual_return < 0:
        raise ValueError("annual_return must not be negative")
    require_whole_years(inputs.tenure_years, "tenure_years")


def calculate_sip(inputs: SIPInputs) -> SIPResult:
    """
    Calculate SIP maturity value with a year-by-year breakdown.

    The value at each year end is recomputed from the closed form rather
    than accumulated, so entries do not carry rounding from earlier years.

    Raises:
        ValueError: If the plan terms are invalid
    """
    validate_sip_inputs(inputs)

    tenure_years = int(inputs.tenure_years)
    monthly_return = inputs.annual_return / 100 / 12
    total_months = tenure_years * 12

    future_value = sip_future_value(inputs.monthly_amount, monthly_return, total_months)
    total_investment = inputs.monthly_amount * total_months

    yearly_breakdown = []
    invested = 0.0
    for year in range(1, tenure_years + 1):
        invested += inputs.monthly_amount * 12
        value = sip_future_value(inputs.monthly_amount, monthly_return, year * 12)
        yearly_breakdown.append(
            SIPYearEntry(
                year=year,
                invested_amount=invested,
                interest_earned=value - invested,
                total_value=value,
            )
        )

    return SIPResult(
        future_value=future_value,
        total_investment=total_investment,
        total_returns=future_value - total_investment,
        yearly_breakdown=yearly_breakdown,
    )
