"""
Timeføring - Time Registration & Billing
Demo Data

Initial cases, time entries, suggestions and invoices. Entry and
suggestion dates are placed in the week of `today` so the weekly overview
always has content.
"""
from datetime import date, timedelta
from typing import List, Optional

from app.services.models import (
    Case,
    Invoice,
    InvoiceStatus,
    TimeEntry,
    UnconfirmedSuggestion,
)
from app.utils.formatting import week_start


def demo_cases() -> List[Case]:
    return [
        Case(id="sak9", name="Drap", case_number="sak 9", client_name="Per Gunnar"),
        Case(id="sak33", name="Barnevern", case_number="sak 33", client_name="Fatima Khan"),
        Case(id="sak286", name="Mishandling i nære relasjoner", case_number="sak 286",
             client_name="Mads Thomassen"),
        Case(id="sak287", name="Omsorgsovertagelse", case_number="sak 287",
             client_name="Gunnar Aage"),
        Case(id="sak14", name="Skattesvik", case_number="sak 14", client_name="Abdi Mohammed"),
        Case(id="sak43", name="Foreldreansvar, samvær", case_number="sak 43",
             client_name="Aisha Hakeem"),
    ]


# (case, weekday offset, hours, description, activity type, billable)
_ENTRY_ROWS = [
    ("sak9", 0, 3.5, "Møte med klient", "Juridisk bistand", True),
    ("sak9", 0, 2.0, "Forberedelse til rettsmøte", "Juridisk bistand", True),
    ("sak33", 0, 1.5, "Gjennomgang av dokumenter", "Juridisk bistand", True),
    ("sak286", 1, 4.0, "Rettsmøte", "Juridisk bistand", True),
    ("sak286", 1, 2.0, "Etterarbeid rettsmøte", "Juridisk bistand", True),
    ("sak14", 1, 1.0, "Telefonsamtale med klient", "Mediakommunikasjon", True),
    ("sak287", 2, 3.0, "Møte med barnevernet", "Møte med skatt", True),
    ("sak287", 2, 1.5, "Notat fra møte", "Juridisk bistand", True),
    ("sak43", 2, 2.5, "Forberedelse til mekling", "Juridisk bistand", True),
    ("sak43", 3, 4.0, "Mekling", "Mekling", True),
    ("sak43", 3, 1.0, "Oppsummering etter mekling", "Juridisk bistand", True),
    ("sak9", 3, 2.0, "Gjennomgang av bevis", "Juridisk bistand", True),
    ("sak33", 4, 3.0, "Møte med klient", "Juridisk bistand", True),
    ("sak33", 4, 2.0, "Utarbeidelse av prosesskriv", "Juridisk bistand", True),
    ("sak33", 4, 1.5, "Korrespondanse med motpart", "Juridisk bistand", True),
    ("sak9", 5, 2.5, "Forberedelse til vitneforklaring", "Juridisk bistand", True),
    ("sak14", 5, 1.0, "Gjennomgang av dokumentasjon", "Undersøkelser", True),
    ("sak286", 6, 3.0, "Forberedelse til rettssak", "Juridisk bistand", False),
    ("sak287", 6, 2.0, "Gjennomgang av saksdokumenter", "Juridisk bistand", True),
]

# (case, type, description, hours, weekday offset, important)
_SUGGESTION_ROWS = [
    # Completed
    ("sak9", "Reisetid", "Sendt brev til motpart", 0.3, 0, True),
    ("sak33", "Juridisk bistand", "Brev til politiet", 2.0, 1, False),
    ("sak286", "Juridisk bistand", "Epost mottatt: Saksinfo", 1.0, 2, True),
    ("sak9", "Mediakommunikasjon", "Samtaler med klient", 4.0, 3, None),
    ("sak287", "Møte med skatt", "Korrespondanse", 7.0, 4, None),
    # Partially completed
    ("sak14", "", "Møte: Rettsmøte", 5.0, 0, None),
    ("sak287", "Forhandlinger", "", 2.0, 1, None),
    ("sak286", "Juridisk bistand", "Journalist", 0, 2, None),
    ("", "Mediakommunikasjon", "Epost sendt: Saksinfo", 0.5, 3, None),
    # Spam
    ("", "", "", 0, 4, None),
    ("", "", "", 0, 5, None),
    ("", "", "", 0, 6, None),
    ("", "", "", 0, 0, None),
]


def demo_time_entries(today: Optional[date] = None) -> List[TimeEntry]:
    monday = week_start(today or date.today())
    return [
        TimeEntry(
            id=f"entry-current-{n}",
            case_id=case_id,
            date=monday + timedelta(days=offset),
            hours=hours,
            description=description,
            activity_type=activity_type,
            billable=billable,
        )
        for n, (case_id, offset, hours, description, activity_type, billable)
        in enumerate(_ENTRY_ROWS, start=1)
    ]


def demo_suggestions(today: Optional[date] = None) -> List[UnconfirmedSuggestion]:
    monday = week_start(today or date.today())
    return [
        UnconfirmedSuggestion(
            id=f"sugg{n}",
            case_id=case_id,
            type=activity_type,
            description=description,
            hours=hours,
            date=monday + timedelta(days=offset),
            confirmed=False,
            important=important,
        )
        for n, (case_id, activity_type, description, hours, offset, important)
        in enumerate(_SUGGESTION_ROWS, start=1)
    ]


def demo_invoices() -> List[Invoice]:
    return [
        Invoice(id="inv1", case_id="sak9", status=InvoiceStatus.PAID, amount=25000,
                date=date(2024, 2, 15), due_date=date(2024, 3, 15), invoice_number="F-2024-001"),
        Invoice(id="inv2", case_id="sak33", status=InvoiceStatus.SENT, amount=12500,
                date=date(2024, 3, 1), due_date=date(2024, 4, 1), invoice_number="F-2024-002"),
        Invoice(id="inv3", case_id="sak286", status=InvoiceStatus.DRAFT, amount=18750,
                date=date(2024, 3, 10), due_date=date(2024, 4, 10), invoice_number="F-2024-003"),
        Invoice(id="inv4", case_id="sak14", status=InvoiceStatus.OVERDUE, amount=9000,
                date=date(2024, 2, 1), due_date=date(2024, 3, 1), invoice_number="F-2024-004"),
    ]


def seed_services(tracker, billing, today: Optional[date] = None) -> None:
    """Load the demo collections into a tracker/billing service pair"""
    tracker.load(demo_cases(), demo_time_entries(today), demo_suggestions(today))
    billing.load(demo_invoices())
