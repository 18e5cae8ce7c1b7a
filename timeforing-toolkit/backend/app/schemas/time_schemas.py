"""
Timeføring - Time Registration & Billing
Pydantic Schemas for API Request/Response Validation
"""
from datetime import date as date_type
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ConfigDict

from app.services.models import InvoiceStatus


# ============================================================
# CASES
# ============================================================

class CaseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    case_number: str = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1)


class CaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    case_number: str
    client_name: str


# ============================================================
# TIME ENTRIES
# ============================================================

class TimeEntryCreate(BaseModel):
    """Quick registration form submission"""
    case_id: str = ""
    date: date_type
    hours: Optional[float] = None
    hours_input: Optional[str] = Field(
        default=None,
        description="Hours as typed, comma or dot decimal separator"
    )
    description: str = ""
    activity_type: str = ""
    billable: bool = True


class TimeEntryUpdate(BaseModel):
    """Complete replacement record; not re-validated"""
    case_id: str
    date: date_type
    hours: float
    description: str
    activity_type: str
    billable: bool
    from_suggestion: Optional[bool] = None


class TimeEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    case_name: str
    date: date_type
    hours: float
    description: str
    activity_type: str
    billable: bool
    from_suggestion: Optional[bool] = None


class FormErrorResponse(BaseModel):
    errors: Dict[str, str]


# ============================================================
# SUGGESTIONS
# ============================================================

class SuggestionUpdate(BaseModel):
    case_id: str = ""
    type: str = ""
    description: str = ""
    hours: float = 0
    important: Optional[bool] = None


class SuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    case_name: str
    type: str
    description: str
    hours: float
    date: date_type
    confirmed: bool
    important: Optional[bool] = None


class CategorizedSuggestionsResponse(BaseModel):
    completed: List[SuggestionResponse] = []
    partially_completed: List[SuggestionResponse] = []
    spam: List[SuggestionResponse] = []
    counts: Dict[str, int] = {}


class ConfirmSelectedRequest(BaseModel):
    suggestion_ids: List[str] = Field(default_factory=list)


class ConfirmSelectedResponse(BaseModel):
    confirmed: int
    entries: List[TimeEntryResponse] = []


# ============================================================
# BILLING
# ============================================================

class CaseBillingResponse(BaseModel):
    case_id: str
    case_name: str
    case_number: str
    client_name: str
    billable_hours: float
    amount: float
    hours_display: str
    amount_display: str


class InvoiceCreate(BaseModel):
    case_id: str
    date: Optional[date_type] = None


class InvoiceResponse(BaseModel):
    id: str
    case_id: str
    case_name: str
    status: InvoiceStatus
    status_label: str
    amount: float
    amount_display: str
    date: date_type
    due_date: date_type
    invoice_number: str


