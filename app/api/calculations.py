"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
Nothing is stored; use /api/calculations to save a result.
"""

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from app.calculations import emi, sip, gst, compound_interest, rent_vs_buy, units

router = APIRouter()


class EMIInput(BaseModel):
    """Input for EMI calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    loan_amount: float = Field(gt=0)
    interest_rate: float = Field(ge=0)
    tenure_years: int = Field(gt=0, le=100)
    start_date: Optional[date] = None


@router.post("/emi")
async def calculate_emi(inputs: EMIInput):
    """Calculate EMI and the amortization schedule."""
    try:
        result = emi.calculate_emi(emi.EMIInputs(**inputs.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = asdict(result)
    response["yearly_summary"] = [
        asdict(year) for year in emi.summarize_by_year(result.amortization_schedule)
    ]
    return response


class SIPInput(BaseModel):
    """Input for SIP calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    monthly_amount: float = Field(gt=0)
    annual_return: float = Field(ge=0)
    tenure_years: int = Field(gt=0, le=100)


@router.post("/sip")
async def calculate_sip(inputs: SIPInput):
    """Calculate SIP maturity value and yearly growth."""
    try:
        result = sip.calculate_sip(sip.SIPInputs(**inputs.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(result)


class GSTInput(BaseModel):
    """Input for GST calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    amount: float = Field(ge=0)
    gst_rate: float = Field(ge=0)
    is_inclusive: bool = False


@router.post("/gst")
async def calculate_gst(inputs: GSTInput):
    """Split an amount into base price and GST."""
    try:
        result = gst.calculate_gst(inputs.amount, inputs.gst_rate, inputs.is_inclusive)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(result)


@router.get("/gst/rates")
async def list_gst_rates():
    """List the standard GST slabs."""
    return {"rates": list(gst.STANDARD_GST_RATES)}


class CompoundInterestInput(BaseModel):
    """Input for compound interest calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    principal: float = Field(ge=0)
    rate: float = Field(ge=0)
    time: float = Field(ge=0, le=200)
    compound_frequency: int = Field(default=1, gt=0)


@router.post("/compound-interest")
async def calculate_compound_interest(inputs: CompoundInterestInput):
    """Calculate compound growth with a yearly breakdown."""
    try:
        result = compound_interest.calculate_compound_interest(
            principal=inputs.principal,
            rate=inputs.rate,
            time=inputs.time,
            compound_frequency=inputs.compound_frequency,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(result)


@router.get("/compound-interest/frequencies")
async def list_compound_frequencies():
    """List the supported compounding frequencies."""
    return {
        "frequencies": [
            {"value": value, "label": label}
            for value, label in compound_interest.COMPOUND_FREQUENCIES.items()
        ]
    }


class RentVsBuyInput(BaseModel):
    """Input for rent vs buy analysis."""

    model_config = ConfigDict(allow_inf_nan=False)

    property_price: float = Field(gt=0)
    down_payment: float = Field(ge=0)
    loan_interest_rate: float = Field(ge=0)
    loan_tenure: int = Field(gt=0, le=100)
    monthly_rent: float = Field(ge=0)
    property_appreciation: float = 0.0
    rent_increase_rate: float = Field(default=0.0, ge=0)
    investment_return: float = Field(default=0.0, ge=0)
    analysis_years: int = Field(gt=0, le=100)


@router.post("/rent-vs-buy")
async def calculate_rent_vs_buy(inputs: RentVsBuyInput):
    """Compare the cost of buying against renting."""
    try:
        result = rent_vs_buy.calculate_rent_vs_buy(
            rent_vs_buy.RentVsBuyInputs(**inputs.model_dump())
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(result)


class UnitConversionInput(BaseModel):
    """Input for unit conversion."""

    model_config = ConfigDict(allow_inf_nan=False)

    category: str
    from_unit: str
    to_unit: str
    value: float


@router.post("/unit-conversion")
async def convert_units(inputs: UnitConversionInput):
    """Convert a value between two units of a category."""
    try:
        result = units.convert(inputs.value, inputs.from_unit, inputs.to_unit, inputs.category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(result)


@router.get("/units")
async def list_unit_categories():
    """List supported unit categories and their units."""
    return {"categories": units.list_categories()}
