"""
Compound Interest Calculations

A = P * (1 + r/n)^(n*t)
"""

from typing import List
from dataclasses import dataclass, field

from app.calculations.validation import require_finite, require_finite_inputs

# Compounding periods per year offered by the calculator
COMPOUND_FREQUENCIES = {
    1: "Annually",
    2: "Semi-Annually",
    4: "Quarterly",
    12: "Monthly",
    365: "Daily",
}


@dataclass
class CompoundInterestYearEntry:
    year: int
    principal: float
    interest: float  # Interest accumulated since the start
    amount: float


@dataclass
class CompoundInterestResult:
    final_amount: float
    compound_interest: float
    yearly_breakdown: List[CompoundInterestYearEntry] = field(default_factory=list)


def compound_amount(principal: float, rate: float, years: float, compound_frequency: int) -> float:
    """Value of ``principal`` after ``years`` at ``rate`` percent a year."""
    try:
        growth = (1 + rate / 100 / compound_frequency) ** (compound_frequency * years)
    except OverflowError:
        raise ValueError("final_amount is too large to calculate for these inputs")
    return require_finite(principal * growth, "final_amount")


def calculate_compound_interest(
    principal: float,
    rate: float,
    time: float,
    compound_frequency: int = 1,
) -> CompoundInterestResult:
    """
    Calculate compound growth with a breakdown for every whole year.

    Args:
        principal: Initial amount
        rate: Annual interest rate in percent
        time: Investment period in years (fractions allowed)
        compound_frequency: Compounding periods per year

    Returns:
        CompoundInterestResult with the final amount and yearly values

    Raises:
        ValueError: If the inputs are invalid or the result overflows
    """
    require_finite_inputs(principal=principal, rate=rate, time=time)
    if principal < 0:
        raise ValueError("principal must not be negative")
    if rate < 0:
        raise ValueError("rate must not be negative")
    if time < 0:
        raise ValueError("time must not be negative")
    if compound_frequency <= 0:
        raise ValueError("compound_frequency must be greater than 0")

    final_amount = compound_amount(principal, rate, time, compound_frequency)

    yearly_breakdown = []
    for year in range(1, int(time) + 1):
        amount = compound_amount(principal, rate, year, compound_frequency)
        yearly_breakdown.append(
            CompoundInterestYearEntry(
                year=year,
                principal=principal,
                interest=amount - principal,
                amount=amount,
            )
        )

    return CompoundInterestResult(
        final_amount=final_amount,
        compound_interest=final_amount - principal,
        yearly_breakdown=yearly_breakdown,
    )
