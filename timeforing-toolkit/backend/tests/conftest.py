"""
Pytest Configuration File

Fixtures for a fresh, seeded time tracking session per test.
"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

from app.api.deps import get_billing_service, get_time_tracking_service
from app.core.config import settings
from app.db.seed_data import seed_services
from app.main import app
from app.services.billing_service import BillingService
from app.services.time_tracking_service import TimeTrackingService

# A Wednesday; the demo week runs 2024-03-11 .. 2024-03-17
TODAY = date(2024, 3, 13)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def tracker():
    """Empty time tracking session"""
    return TimeTrackingService()


@pytest.fixture
def seeded():
    """Tracker and billing service loaded with the demo data"""
    tracker = TimeTrackingService()
    billing = BillingService(tracker)
    seed_services(tracker, billing, today=TODAY)
    return tracker, billing


@pytest.fixture
def test_client(seeded, monkeypatch):
    """FastAPI test client bound to the seeded session"""
    tracker, billing = seeded
    # Startup must not reseed the module-level singletons
    monkeypatch.setattr(settings, "SEED_DEMO_DATA", False)
    app.dependency_overrides[get_time_tracking_service] = lambda: tracker
    app.dependency_overrides[get_billing_service] = lambda: billing
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
