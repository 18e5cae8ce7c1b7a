"""
Timeføring - Time Registration & Billing
Core Records

Cases, time entries, suggestions and invoices as held in memory by the
services. Records are replaced, never edited in place.
"""
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


def new_id(prefix: str) -> str:
    """Collision-free record id, e.g. "entry-3f2a..." """
    return f"{prefix}-{uuid.uuid4().hex}"


@dataclass
class Case:
    """A legal matter"""
    id: str
    name: str
    case_number: str
    client_name: str


@dataclass
class TimeEntry:
    """Confirmed hours worked on a case"""
    id: str
    case_id: str
    date: date
    hours: float
    description: str
    activity_type: str
    billable: bool = True
    from_suggestion: Optional[bool] = None


@dataclass
class UnconfirmedSuggestion:
    """Candidate time entry awaiting confirmation, possibly incomplete"""
    id: str
    case_id: str
    type: str
    description: str
    hours: float
    date: date
    confirmed: bool = False
    important: Optional[bool] = None


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


@dataclass
class Invoice:
    """Invoice for the billable hours of one case"""
    id: str
    case_id: str
    status: InvoiceStatus
    amount: float
    date: date
    due_date: date
    invoice_number: str

    # Snapshot of the entries billed, fixed when the invoice is created.
    # Empty for invoices that were issued without itemised entries.
    billed_entries: List[TimeEntry] = field(default_factory=list)
