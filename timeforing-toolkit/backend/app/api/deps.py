"""
Timeføring - Time Registration & Billing
API Dependencies
"""
from app.services.billing_service import BillingService, billing_service
from app.services.time_tracking_service import TimeTrackingService, time_tracking_service


def get_time_tracking_service() -> TimeTrackingService:
    """
    Returns the shared time tracking session.
    Overridden in tests with a fresh instance.
    """
    return time_tracking_service


def get_billing_service() -> BillingService:
    """
    Returns the shared billing service.
    It reads cases and hours from the same session as get_time_tracking_service.
    """
    return billing_service
