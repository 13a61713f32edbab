"""
API routes for the financial calculators.
"""

from fastapi import APIRouter

from app.api import calculations, records

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculate"])
router.include_router(records.router, prefix="/calculations", tags=["calculations"])
