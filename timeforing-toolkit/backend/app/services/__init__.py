"""
Timeføring - Time Registration & Billing
Services Module
"""
from app.services.models import (
    Case,
    TimeEntry,
    UnconfirmedSuggestion,
    Invoice,
    InvoiceStatus,
    new_id
)
from app.services.suggestion_service import (
    SuggestionCategory,
    CategorizedSuggestions,
    suggestion_category,
    categorize_suggestions
)
from app.services.time_tracking_service import (
    time_tracking_service,
    TimeTrackingService,
    EntryForm,
    EntryResult,
    InlineEdit,
    SuggestionSelection
)
from app.services.billing_service import (
    billing_service,
    BillingService,
    CaseBillingSummary,
    InvoiceStateError,
    SortColumn,
    SortDirection,
    SortState,
    DEFAULT_HOURLY_RATE,
    total_hours,
    total_amount,
    period_range
)

__all__ = [
    # Records
    "Case",
    "TimeEntry",
    "UnconfirmedSuggestion",
    "Invoice",
    "InvoiceStatus",
    "new_id",

    # Suggestions
    "SuggestionCategory",
    "CategorizedSuggestions",
    "suggestion_category",
    "categorize_suggestions",

    # Time tracking
    "time_tracking_service",
    "TimeTrackingService",
    "EntryForm",
    "EntryResult",
    "InlineEdit",
    "SuggestionSelection",

    # Billing
    "billing_service",
    "BillingService",
    "CaseBillingSummary",
    "InvoiceStateError",
    "SortColumn",
    "SortDirection",
    "SortState",
    "DEFAULT_HOURLY_RATE",
    "total_hours",
    "total_amount",
    "period_range",
]
