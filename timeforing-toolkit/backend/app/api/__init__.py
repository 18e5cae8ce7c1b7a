"""
Timeføring - Time Registration & Billing
API Routers Module
"""
from app.api.cases import router as cases
from app.api.time_entries import router as time_entries
from app.api.suggestions import router as suggestions
from app.api.billing import router as billing
from app.api.settings import router as settings

__all__ = [
    "cases",
    "time_entries",
    "suggestions",
    "billing",
    "settings",
]
