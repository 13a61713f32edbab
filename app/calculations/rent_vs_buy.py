"""
Rent vs Buy Analysis

Compares the cumulative cost of buying a home with a loan against renting
and investing the down payment instead.

Buying cost per year:
1. Twelve EMI payments
2. Maintenance at 1% of the purchase price

Renting cost per year is twelve months of rent, escalated annually. The
growth the down payment would have earned if invested is credited against
the cumulative rent.
"""

from typing import List
from dataclasses import dataclass, field

from app.calculations.emi import calculate_monthly_emi
from app.calculations.validation import (
    require_finite,
    require_finite_inputs,
    require_whole_years,
)

MAINTENANCE_RATE = 0.01  # Annual maintenance as a share of the purchase price


@dataclass
class RentVsBuyInputs:
    property_price: float
    down_payment: float
    loan_interest_rate: float  # Annual percent
    loan_tenure: int  # Years
    monthly_rent: float
    property_appreciation: float  # Annual percent
    rent_increase_rate: float  # Annual percent
    investment_return: float  # Annual percent earned on the unspent down payment
    analysis_years: int


@dataclass
class RentVsBuyYearEntry:
    year: int
    buying_cost: float
    renting_cost: float
    cumulative_buying_cost: float
    cumulative_renting_cost: float  # Net of investment gains
    investment_gains: float
    property_value: float


@dataclass
class RentVsBuyResult:
    recommendation: str  # "buy" or "rent"
    buying_cost: float
    renting_cost: float
    savings: float
    break_even_year: int  # 0 if renting never costs more within the horizon
    monthly_emi: float
    loan_amount: float
    final_property_value: float
    yearly_comparison: List[RentVsBuyYearEntry] = field(default_factory=list)


def validate_rent_vs_buy_inputs(inputs: RentVsBuyInputs) -> None:
    """Raise ValueError if the scenario cannot be analysed."""
    require_finite_inputs(
        property_price=inputs.property_price,
        down_payment=inputs.down_payment,
        loan_interest_rate=inputs.loan_interest_rate,
        loan_tenure=inputs.loan_tenure,
        monthly_rent=inputs.monthly_rent,
        property_appreciation=inputs.property_appreciation,
        rent_increase_rate=inputs.rent_increase_rate,
        investment_return=inputs.investment_return,
        analysis_years=inputs.analysis_years,
    )
    if inputs.property_price <= 0:
        raise ValueError("property_price must be greater than 0")
    if inputs.down_payment < 0 or inputs.down_payment > inputs.property_price:
        raise ValueError("down_payment must be between 0 and property_price")
    require_whole_years(inputs.loan_tenure, "loan_tenure")
    if inputs.monthly_rent < 0:
        raise ValueError("monthly_rent must not be negative")
    require_whole_years(inputs.analysis_years, "analysis_years")
    for name in ("loan_interest_rate", "rent_increase_rate", "investment_return"):
        if getattr(inputs, name) < 0:
            raise ValueError(f"{name} must not be negative")
    if inputs.property_appreciation <= -100:
        raise ValueError("property_appreciation must be greater than -100")


def _grow(amount: float, annual_rate: float, years: int, name: str) -> float:
    try:
        growth = (1 + annual_rate / 100) ** years
    except OverflowError:
        raise ValueError(f"{name} is too large to calculate for these inputs")
    return require_finite(amount * growth, name)


def calculate_rent_vs_buy(inputs: RentVsBuyInputs) -> RentVsBuyResult:
    """
    Run the year-by-year rent vs buy comparison.

    The break-even year is the first year in which the adjusted cumulative
    renting cost strictly exceeds the cumulative buying cost. Buying is
    recommended only if it is strictly cheaper at the end of the horizon;
    equal costs recommend renting.

    Raises:
        ValueError: If the scenario inputs are invalid or the costs overflow
    """
    validate_rent_vs_buy_inputs(inputs)

    loan_amount = inputs.property_price - inputs.down_payment
    monthly_emi = calculate_monthly_emi(
        loan_amount, inputs.loan_interest_rate, int(inputs.loan_tenure) * 12
    )
    maintenance_cost = inputs.property_price * MAINTENANCE_RATE

    yearly_comparison = []
    cumulative_buying_cost = inputs.down_payment
    cumulative_rent = 0.0
    current_rent = inputs.monthly_rent
    break_even_year = 0

    for year in range(1, int(inputs.analysis_years) + 1):
        yearly_buying_cost = monthly_emi * 12 + maintenance_cost
        cumulative_buying_cost += yearly_buying_cost

        yearly_rent_cost = current_rent * 12
        cumulative_rent = require_finite(
            cumulative_rent + yearly_rent_cost, "renting_cost"
        )

        investment_gains = (
            _grow(inputs.down_payment, inputs.investment_return, year, "investment_gains")
            - inputs.down_payment
        )
        adjusted_renting_cost = cumulative_rent - investment_gains

        property_value = _grow(
            inputs.property_price, inputs.property_appreciation, year, "property_value"
        )

        yearly_comparison.append(
            RentVsBuyYearEntry(
                year=year,
                buying_cost=yearly_buying_cost,
                renting_cost=yearly_rent_cost,
                cumulative_buying_cost=cumulative_buying_cost,
                cumulative_renting_cost=adjusted_renting_cost,
                investment_gains=investment_gains,
                property_value=property_value,
            )
        )

        if break_even_year == 0 and adjusted_renting_cost > cumulative_buying_cost:
            break_even_year = year

        current_rent *= 1 + inputs.rent_increase_rate / 100

    final = yearly_comparison[-1]
    buying_cost = final.cumulative_buying_cost
    renting_cost = final.cumulative_renting_cost

    return RentVsBuyResult(
        recommendation="buy" if buying_cost < renting_cost else "rent",
        buying_cost=buying_cost,
        renting_cost=renting_cost,
        savings=abs(buying_cost - renting_cost),
        break_even_year=break_even_year,
        monthly_emi=monthly_emi,
        loan_amount=loan_amount,
        final_property_value=final.property_value,
        yearly_comparison=yearly_comparison,
    )
