"""
Timeføring - Time Registration & Billing
Billing Service

Per-case aggregation of billable hours, the billing overview table and
invoice generation with its draft -> sent lifecycle.
"""
import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from app.core.config import settings
from app.services.models import Case, Invoice, InvoiceStatus, TimeEntry, new_id
from app.services.time_tracking_service import TimeTrackingService, time_tracking_service
from app.utils.formatting import format_hours, norwegian_sort_key

logger = logging.getLogger(__name__)


DEFAULT_HOURLY_RATE = 1500


class InvoiceStateError(Exception):
    """Raised for an invoice transition the lifecycle does not allow"""


class SortColumn(str, Enum):
    CASE = "case"
    CLIENT = "client"
    HOURS = "hours"
    AMOUNT = "amount"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class SortState:
    """Billing overview sort order"""
    column: SortColumn = SortColumn.CASE
    direction: SortDirection = SortDirection.ASC

    def toggle(self, column: SortColumn) -> None:
        """Same column flips direction; a new column starts ascending"""
        if self.column == column:
            self.direction = (
                SortDirection.DESC if self.direction == SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            self.column = column
            self.direction = SortDirection.ASC


@dataclass
class CaseBillingSummary:
    """One row of the billing overview"""
    case_id: str
    case_name: str
    case_number: str
    client_name: str
    billable_hours: float
    amount: Decimal


# ========================================
# AGGREGATION
# ========================================

def total_hours(
    entries: Iterable[TimeEntry],
    case_id: str,
    only_billable: bool = False
) -> float:
    """Sum of hours registered on a case"""
    return sum(
        (e.hours for e in entries
         if e.case_id == case_id and (not only_billable or e.billable)),
        0
    )


def total_amount(
    entries: Iterable[TimeEntry],
    case_id: str,
    hourly_rate: float = DEFAULT_HOURLY_RATE
) -> Decimal:
    """Billable hours on a case times the hourly rate, rounded to øre"""
    billable = total_hours(entries, case_id, only_billable=True)
    amount = Decimal(str(billable)) * Decimal(str(hourly_rate))
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _quarter_start(day: date) -> date:
    return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)


def _shift_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def period_range(period: str, today: Optional[date] = None) -> Optional[Tuple[date, date]]:
    """
    Inclusive date range for a billing period name.

    Returns None for "all". Raises ValueError for unknown names.
    """
    today = today or date.today()

    if period == "all":
        return None
    if period == "current-month":
        start = today.replace(day=1)
        return start, _shift_months(start, 1) - timedelta(days=1)
    if period == "last-month":
        start = _shift_months(today.replace(day=1), -1)
        return start, today.replace(day=1) - timedelta(days=1)
    if period == "current-quarter":
        start = _quarter_start(today)
        return start, _shift_months(start, 3) - timedelta(days=1)
    if period == "last-quarter":
        end = _quarter_start(today) - timedelta(days=1)
        return _quarter_start(end), end

    raise ValueError(f"Unknown billing period: {period}")


# ========================================
# SERVICE
# ========================================

class BillingService:
    """
    Billing for the firm's cases.

    Features:
    - Billable hours and amount per case
    - Billing overview with search and sorting
    - Invoice creation, approval and deletion
    - Invoice filtering by status, text and period
    - LEDES export
    """

    def __init__(
        self,
        tracker: Optional[TimeTrackingService] = None,
        invoices: Optional[List[Invoice]] = None,
        hourly_rate: Optional[float] = None,
    ):
        # Cases and hours are read from the time tracking session
        self.tracker = tracker if tracker is not None else TimeTrackingService()
        self.invoices: List[Invoice] = list(invoices or [])
        self.hourly_rate = hourly_rate if hourly_rate is not None else settings.HOURLY_RATE
        self.sort = SortState()

        # Running number for "F-<year>-<nnn>"
        self._invoice_counter = len(self.invoices)

    @property
    def cases(self) -> List[Case]:
        return self.tracker.cases

    @property
    def time_entries(self) -> List[TimeEntry]:
        return self.tracker.time_entries

    def load(self, invoices: List[Invoice]) -> None:
        self.invoices = list(invoices)
        self._invoice_counter = len(self.invoices)
        logger.info("Loaded %d invoices", len(self.invoices))

    def get_case(self, case_id: str) -> Optional[Case]:
        return next((c for c in self.cases if c.id == case_id), None)

    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    # ========================================
    # BILLING OVERVIEW
    # ========================================

    def case_summary(self, case: Case) -> CaseBillingSummary:
        return CaseBillingSummary(
            case_id=case.id,
            case_name=case.name,
            case_number=case.case_number,
            client_name=case.client_name,
            billable_hours=total_hours(self.time_entries, case.id, only_billable=True),
            amount=total_amount(self.time_entries, case.id, self.hourly_rate),
        )

    def filter_cases(self, query: str = "") -> List[Case]:
        if not query:
            return list(self.cases)

        needle = query.lower()
        return [
            c for c in self.cases
            if needle in c.name.lower()
            or needle in c.client_name.lower()
            or needle in c.case_number.lower()
        ]

    def sort_cases(
        self,
        cases: List[Case],
        column: SortColumn = SortColumn.CASE,
        direction: SortDirection = SortDirection.ASC
    ) -> List[Case]:
        keys = {
            SortColumn.CASE: lambda c: norwegian_sort_key(c.name),
            SortColumn.CLIENT: lambda c: norwegian_sort_key(c.client_name),
            SortColumn.HOURS: lambda c: total_hours(self.time_entries, c.id, only_billable=True),
            SortColumn.AMOUNT: lambda c: total_amount(self.time_entries, c.id, self.hourly_rate),
        }
        return sorted(
            cases,
            key=keys[SortColumn(column)],
            reverse=SortDirection(direction) == SortDirection.DESC
        )

    def case_summaries(
        self,
        query: str = "",
        column: Optional[SortColumn] = None,
        direction: Optional[SortDirection] = None
    ) -> List[CaseBillingSummary]:
        """
        Rows of the billing overview.

        Cases without billable hours are left out. Sorting defaults to the
        current SortState.
        """
        cases = self.sort_cases(
            self.filter_cases(query),
            column or self.sort.column,
            direction or self.sort.direction
        )
        summaries = [self.case_summary(c) for c in cases]
        return [s for s in summaries if s.billable_hours != 0]

    # ========================================
    # INVOICES
    # ========================================

    def _next_invoice_number(self, year: int) -> str:
        self._invoice_counter += 1
        return f"{settings.INVOICE_NUMBER_PREFIX}-{year}-{self._invoice_counter:03d}"

    def _line_total(self, hours: float) -> Decimal:
        return (Decimal(str(hours)) * Decimal(str(self.hourly_rate))).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

    def create_invoice(self, case_id: str, today: Optional[date] = None) -> Invoice:
        """
        Draft invoice for all billable hours registered on a case.

        The billed entries are stored on the invoice; its amount is the sum of
        their line totals, so later registrations do not change it.
        """
        if self.get_case(case_id) is None:
            raise KeyError(case_id)

        today = today or date.today()
        billed = [e for e in self.time_entries if e.case_id == case_id and e.billable]
        amount = sum((self._line_total(e.hours) for e in billed), Decimal("0.00"))

        invoice = Invoice(
            id=new_id("inv"),
            case_id=case_id,
            status=InvoiceStatus.DRAFT,
            amount=float(amount),
            date=today,
            due_date=today + timedelta(days=settings.PAYMENT_TERMS_DAYS),
            invoice_number=self._next_invoice_number(today.year),
            billed_entries=billed,
        )
        self.invoices = [*self.invoices, invoice]

        logger.info(
            "Created draft invoice %s for %s: %.2f",
            invoice.invoice_number, case_id, invoice.amount
        )
        return invoice

    def approve_invoice(self, invoice_id: str) -> Invoice:
        """Mark a draft invoice as sent"""
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise KeyError(invoice_id)
        if invoice.status != InvoiceStatus.DRAFT:
            logger.warning("Refused to approve %s invoice %s", invoice.status.value, invoice_id)
            raise InvoiceStateError(
                f"Only draft invoices can be approved (invoice is {invoice.status.value})"
            )

        approved = replace(invoice, status=InvoiceStatus.SENT)
        self.invoices = [approved if i.id == invoice_id else i for i in self.invoices]

        logger.info("Invoice %s sent", approved.invoice_number)
        return approved

    def delete_invoice(self, invoice_id: str) -> None:
        """Delete a draft invoice"""
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise KeyError(invoice_id)
        if invoice.status != InvoiceStatus.DRAFT:
            logger.warning("Refused to delete %s invoice %s", invoice.status.value, invoice_id)
            raise InvoiceStateError(
                f"Only draft invoices can be deleted (invoice is {invoice.status.value})"
            )

        self.invoices = [i for i in self.invoices if i.id != invoice_id]
        logger.info("Invoice %s deleted", invoice.invoice_number)

    def filter_invoices(
        self,
        query: str = "",
        statuses: Optional[List[InvoiceStatus]] = None,
        period: str = "all",
        today: Optional[date] = None
    ) -> List[Invoice]:
        """
        Invoices matching status, free text and billing period.

        The text query matches case name, client, case number and invoice
        number. Invoices pointing at an unknown case never match a query.
        """
        wanted = {InvoiceStatus(s) for s in statuses or []}
        date_range = period_range(period, today)
        needle = query.lower()

        result = []
        for invoice in self.invoices:
            if wanted and invoice.status not in wanted:
                continue
            if date_range and not (date_range[0] <= invoice.date <= date_range[1]):
                continue
            if needle:
                case = self.get_case(invoice.case_id)
                if case is None:
                    continue
                haystack = [case.name, case.client_name, case.case_number, invoice.invoice_number]
                if not any(needle in text.lower() for text in haystack):
                    continue
            result.append(invoice)

        return result

    def status_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in InvoiceStatus}
        for invoice in self.invoices:
            counts[invoice.status.value] += 1
        return counts

    # ========================================
    # EXPORT
    # ========================================

    def export_invoice(self, invoice_id: str) -> str:
        """
        Export invoice in LEDES 1998B format.

        Line items are the entries billed when the invoice was created. An
        invoice without itemised entries is exported as one fee line for its
        full amount on the invoice date.
        """
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise KeyError(invoice_id)

        case = self.get_case(invoice.case_id)
        client = case.client_name if case else ""
        rate = Decimal(str(self.hourly_rate)).quantize(Decimal("0.01"))

        # (date, units, total, activity, description)
        items = [
            (e.date, format_hours(e.hours), self._line_total(e.hours), e.activity_type, e.description)
            for e in sorted(invoice.billed_entries, key=lambda e: e.date)
        ]
        if not items:
            total = Decimal(str(invoice.amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            units = format_hours(total / rate) if rate else "0"
            items = [(invoice.date, units, total, "Juridisk bistand", invoice.invoice_number)]

        invoice_total = sum((item[2] for item in items), Decimal("0.00"))
        billing_start = min(item[0] for item in items)
        billing_end = max(item[0] for item in items)

        lines = []

        # Header
        lines.append("LEDES1998B[]")
        lines.append("INVOICE_DATE|INVOICE_NUMBER|CLIENT_ID|LAW_FIRM_MATTER_ID|INVOICE_TOTAL|"
                     "BILLING_START_DATE|BILLING_END_DATE|INVOICE_DESCRIPTION[]")
        lines.append(f"{invoice.date:%Y%m%d}|{invoice.invoice_number}|{client.replace('|', ' ')}|"
                     f"{invoice.case_id}|{invoice_total}|{billing_start:%Y%m%d}|"
                     f"{billing_end:%Y%m%d}|Juridisk bistand[]")

        # Line items header
        lines.append("LINE_ITEM_NUMBER|EXP/FEE/INV_ADJ_TYPE|LINE_ITEM_NUMBER_OF_UNITS|"
                     "LINE_ITEM_ADJUSTMENT_AMOUNT|LINE_ITEM_TOTAL|LINE_ITEM_DATE|"
                     "LINE_ITEM_TASK_CODE|LINE_ITEM_EXPENSE_CODE|LINE_ITEM_ACTIVITY_CODE|"
                     "TIMEKEEPER_ID|LINE_ITEM_DESCRIPTION|LAW_FIRM_ID|LINE_ITEM_UNIT_COST[]")

        for line_num, (day, units, line_total, activity, description) in enumerate(items, start=1):
            lines.append(
                f"{line_num}|F|{units}|0|{line_total}|{day:%Y%m%d}|"
                f"||{activity.replace('|', ' ')}||"
                f"{description.replace('|', ' ')}|{settings.FIRM_ID}|{rate}[]"
            )

        return "\n".join(lines)


# Singleton instance
billing_service = BillingService(time_tracking_service)
