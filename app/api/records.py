"""
Saved calculation API endpoints.
"""

import logging
import math
from datetime import datetime
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator

from app.db.models import CalculationType
from app.services.storage import CalculationStorage, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_finite_json(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_is_finite_json(item) for item in value.values())
    if isinstance(value, list):
        return all(_is_finite_json(item) for item in value)
    return True


class CalculationCreate(BaseModel):
    """Schema for saving a calculation."""

    type: CalculationType
    inputs: Any
    results: Any

    @field_validator("inputs", "results")
    @classmethod
    def check_json_value(cls, value):
        if value is None:
            raise ValueError("must not be null")
        if not _is_finite_json(value):
            raise ValueError("must not contain Infinity or NaN")
        return value


class CalculationResponse(BaseModel):
    """Saved calculation."""

    id: str
    type: str
    inputs: Any
    results: Any
    created_at: datetime


@router.post("", response_model=CalculationResponse)
async def save_calculation(
    data: CalculationCreate,
    storage: CalculationStorage = Depends(get_storage),
):
    """Save the inputs and results of a calculator run."""
    try:
        record = storage.save_calculation(data.type.value, data.inputs, data.results)
    except StorageError:
        logger.exception(f"Failed to save {data.type.value} calculation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save calculation",
        )

    logger.info(f"Saved {record.type} calculation {record.id}")
    return record.to_dict()


@router.get("/type/{calc_type}", response_model=List[CalculationResponse])
async def get_calculations_by_type(
    calc_type: str,
    storage: CalculationStorage = Depends(get_storage),
):
    """List saved calculations of one type, oldest first."""
    try:
        records = storage.get_calculations_by_type(calc_type)
    except StorageError:
        logger.exception(f"Failed to fetch {calc_type} calculations")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch calculations",
        )
    return [record.to_dict() for record in records]


@router.get("/{calculation_id}", response_model=CalculationResponse)
async def get_calculation(
    calculation_id: str,
    storage: CalculationStorage = Depends(get_storage),
):
    """Get a saved calculation by ID."""
    try:
        record = storage.get_calculation(calculation_id)
    except StorageError:
        logger.exception(f"Failed to fetch calculation {calculation_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch calculation",
        )

    if not record:
        raise HTTPException(status_code=404, detail="Calculation not found")

    return record.to_dict()
