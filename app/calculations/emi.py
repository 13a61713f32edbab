"""
EMI (Equated Monthly Installment) Calculations

Implements the monthly installment formula and the month-by-month
amortization schedule of a fixed-rate loan.
"""

from typing import List, Optional
from datetime import date
from dataclasses import dataclass, field
from dateutil.relativedelta import relativedelta

from app.calculations.validation import (
    require_finite,
    require_finite_inputs,
    require_whole_years,
)


@dataclass
class EMIInputs:
    """Loan terms for an EMI calculation."""

    loan_amount: float
    interest_rate: float  # Annual rate in percent (e.g., 8.5 for 8.5%)
    tenure_years: int
    start_date: Optional[date] = None  # Date of first payment, defaults to today


@dataclass
class AmortizationEntry:
    """A single monthly payment in the amortization schedule."""

    payment_number: int
    payment_date: str  # e.g. "Mar 2026"
    emi_amount: float
    principal_amount: float
    interest_amount: float
    remaining_balance: float


@dataclass
class EMIResult:
    """Monthly installment, totals and the full schedule."""

    monthly_emi: float
    total_interest: float
    total_amount: float
    amortization_schedule: List[AmortizationEntry] = field(default_factory=list)


@dataclass
class EMIYearSummary:
    """Amortization schedule aggregated over one loan year."""

    year: int
    principal_paid: float
    interest_paid: float
    closing_balance: float


def calculate_monthly_emi(principal: float, annual_rate: float, months: int) -> float:
    """
    Calculate the fixed monthly installment of a loan.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate in percent (e.g., 8.5 for 8.5%)
        months: Number of monthly installments

    Returns:
        Monthly installment (0.0 if there is nothing to repay)
    """
    if principal <= 0:
        return 0.0
    if months <= 0:
        return 0.0

    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return principal / months

    # P*r*(1+r)^n / ((1+r)^n - 1), divided through by (1+r)^n so that long
    # terms at high rates underflow to P*r instead of overflowing
    discount = (1 + monthly_rate) ** -months
    return principal * monthly_rate / (1 - discount)


def validate_emi_inputs(inputs: EMIInputs) -> None:
    """Raise ValueError if the loan terms cannot be amortized."""
    require_finite_inputs(
        loan_amount=inputs.loan_amount,
        interest_rate=inputs.interest_rate,
        tenure_years=inputs.tenure_years,
    )
    if inputs.loan_amount <= 0:
        raise ValueError("loan_amount must be greater than 0")
    if inputs.interest_rate < 0:
        raise ValueError("interest_rate must not be negative")
    require_whole_years(inputs.tenure_years, "tenure_years")


def calculate_emi(inputs: EMIInputs) -> EMIResult:
    """
    Calculate the EMI and the amortization schedule for a loan.

    Each month the interest is charged on the outstanding balance and the
    rest of the installment reduces the principal. The balance of the last
    entry is forced to zero to absorb floating point drift.

    Raises:
        ValueError: If the loan terms are invalid
    """
    validate_emi_inputs(inputs)

    total_months = int(inputs.tenure_years) * 12
    monthly_rate = inputs.interest_rate / 100 / 12
    monthly_emi = require_finite(
        calculate_monthly_emi(inputs.loan_amount, inputs.interest_rate, total_months),
        "monthly_emi",
    )

    total_amount = require_finite(monthly_emi * total_months, "total_amount")
    total_interest = total_amount - inputs.loan_amount

    start_date = inputs.start_date or date.today()
    schedule = []
    balance = inputs.loan_amount

    for payment_number in range(1, total_months + 1):
        payment_date = start_date + relativedelta(months=payment_number - 1)

        interest = balance * monthly_rate
        principal = monthly_emi - interest
        balance -= principal

        if payment_number == total_months:
            balance = 0.0

        schedule.append(
            AmortizationEntry(
                payment_number=payment_number,
                payment_date=payment_date.strftime("%b %Y"),
                emi_amount=monthly_emi,
                principal_amount=principal,
                interest_amount=interest,
                remaining_balance=max(0.0, balance),
            )
        )

    return EMIResult(
        monthly_emi=monthly_emi,
        total_interest=total_interest,
        total_amount=total_amount,
        amortization_schedule=schedule,
    )


def summarize_by_year(schedule: List[AmortizationEntry]) -> List[EMIYearSummary]:
    """Aggregate a monthly schedule into loan years of 12 payments."""
    summaries = []
    for start in range(0, len(schedule), 12):
        months = schedule[start:start + 12]
        summaries.append(
            EMIYearSummary(
                year=start // 12 + 1,
                principal_paid=sum(entry.principal_amount for entry in months),
                interest_paid=sum(entry.interest_amount for entry in months),
                closing_balance=months[-1].remaining_balance,
            )
        )
    return summaries
