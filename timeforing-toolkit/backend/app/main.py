"""
Timeføring - Time Registration & Billing - FastAPI Backend
Time registration, suggestion review and invoicing for a law firm
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.api import cases, time_entries, suggestions, billing, settings
from app.core.config import settings as app_settings
from app.db.seed_data import seed_services
from app.services.billing_service import billing_service
from app.services.time_tracking_service import time_tracking_service

logging.basicConfig(
    level=getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load demo data on startup"""
    if app_settings.SEED_DEMO_DATA:
        seed_services(time_tracking_service, billing_service)
    logger.info("%s %s started", app_settings.APP_NAME, app_settings.APP_VERSION)
    yield


app = FastAPI(
    title=app_settings.APP_NAME,
    description="""
    Time registration and billing for a law firm

    ## Features
    - Quick time registration with decimal-comma hours input
    - Weekly overview per case and day
    - Review of unconfirmed activity suggestions
    - Billing overview with billable hours per case
    - Invoices: draft, approve, delete, LEDES export
    """,
    version=app_settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(cases, prefix="/api/cases", tags=["Cases"])
app.include_router(time_entries, prefix="/api/time-entries", tags=["Time Entries"])
app.include_router(suggestions, prefix="/api/suggestions", tags=["Suggestions"])
app.include_router(billing, prefix="/api/billing", tags=["Billing"])
app.include_router(settings, prefix="/api/settings", tags=["Settings"])


@app.get("/")
async def root():
    return {
        "name": app_settings.APP_NAME,
        "version": app_settings.APP_VERSION,
        "status": "running",
        "modules": {
            "cases": "Case registry and search",
            "time_entries": "Time registration and weekly overview",
            "suggestions": "Review and confirmation of activity suggestions",
            "billing": "Billing overview, invoices and LEDES export",
        }
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "Timeføring",
        "version": app_settings.APP_VERSION,
        "components": {
            "time_tracking_service": "ready",
            "billing_service": "ready",
        }
    }
