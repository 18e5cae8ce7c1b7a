"""
Timeføring - Time Registration & Billing
Settings API Router - Application configuration and lookup tables
"""
from typing import Dict, List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.config import (
    ACTIVITY_TYPES,
    BILLING_PERIODS,
    INVOICE_STATUS_LABELS,
    SUGGESTION_CATEGORY_LABELS,
)
from app.core.config import settings

router = APIRouter()


# ============================================================================
# Pydantic Schemas
# ============================================================================

class AppSettings(BaseModel):
    """Application settings response"""
    app_name: str
    app_version: str
    hourly_rate: int
    currency: str
    payment_terms_days: int


class HoursInputSettings(BaseModel):
    """Bounds of the hours field"""
    min_hours: float = Field(..., description="Lowest accepted value after blur")
    max_hours: float = Field(..., description="Highest accepted value after blur")
    step: float = Field(..., description="Arrow key increment")
    default_hours: float


# ============================================================================
# Endpoints
# ============================================================================

@router.get("/app", response_model=AppSettings)
async def get_app_settings():
    """Get current application settings"""
    return AppSettings(
        app_name=settings.APP_NAME,
        app_version=settings.APP_VERSION,
        hourly_rate=settings.HOURLY_RATE,
        currency=settings.CURRENCY,
        payment_terms_days=settings.PAYMENT_TERMS_DAYS,
    )


@router.get("/hours", response_model=HoursInputSettings)
async def get_hours_settings():
    return HoursInputSettings(
        min_hours=settings.MIN_HOURS,
        max_hours=settings.MAX_HOURS,
        step=settings.HOURS_STEP,
        default_hours=settings.DEFAULT_HOURS,
    )


@router.get("/activity-types")
async def get_activity_types() -> Dict[str, List[str]]:
    """Get the predefined activity types"""
    return {"activity_types": ACTIVITY_TYPES}


@router.get("/labels")
async def get_labels():
    """Display labels for invoice statuses, suggestion groups and periods"""
    return {
        "invoice_statuses": INVOICE_STATUS_LABELS,
        "suggestion_categories": SUGGESTION_CATEGORY_LABELS,
        "billing_periods": BILLING_PERIODS,
    }
