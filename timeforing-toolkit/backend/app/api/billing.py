"""
Timeføring - Time Registration & Billing
Billing API Router - Billing overview, invoices and LEDES export

Invoice lifecycle:
- draft -> sent (approve)
- draft -> deleted
Any other transition is answered with 409.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_billing_service
from app.config import INVOICE_STATUS_LABELS
from app.schemas.time_schemas import CaseBillingResponse, InvoiceCreate, InvoiceResponse
from app.services.billing_service import (
    BillingService,
    CaseBillingSummary,
    InvoiceStateError,
    SortColumn,
    SortDirection,
)
from app.services.models import Invoice, InvoiceStatus
from app.utils.formatting import format_currency, format_hours

router = APIRouter()


def summary_response(summary: CaseBillingSummary) -> CaseBillingResponse:
    return CaseBillingResponse(
        case_id=summary.case_id,
        case_name=summary.case_name,
        case_number=summary.case_number,
        client_name=summary.client_name,
        billable_hours=summary.billable_hours,
        amount=float(summary.amount),
        hours_display=format_hours(summary.billable_hours, " t"),
        amount_display=format_currency(summary.amount),
    )


def invoice_response(invoice: Invoice, service: BillingService) -> InvoiceResponse:
    case = service.get_case(invoice.case_id)
    return InvoiceResponse(
        id=invoice.id,
        case_id=invoice.case_id,
        case_name=case.name if case else service.tracker.case_label(invoice.case_id),
        status=invoice.status,
        status_label=INVOICE_STATUS_LABELS[invoice.status.value],
        amount=invoice.amount,
        amount_display=format_currency(invoice.amount),
        date=invoice.date,
        due_date=invoice.due_date,
        invoice_number=invoice.invoice_number,
    )


# ============================================================
# BILLING OVERVIEW
# ============================================================

@router.get("/cases", response_model=List[CaseBillingResponse])
async def billing_overview(
    q: str = Query("", description="Matches case name, client or case number"),
    sort: SortColumn = SortColumn.CASE,
    direction: SortDirection = SortDirection.ASC,
    service: BillingService = Depends(get_billing_service)
):
    """Billable hours and amount per case"""
    return [summary_response(s) for s in service.case_summaries(q, sort, direction)]


# ============================================================
# INVOICES
# ============================================================

@router.get("/invoices", response_model=List[InvoiceResponse])
async def list_invoices(
    q: str = "",
    status: Optional[List[InvoiceStatus]] = Query(None),
    period: str = "all",
    service: BillingService = Depends(get_billing_service)
):
    """Invoices filtered by text, status and billing period"""
    try:
        invoices = service.filter_invoices(q, status, period)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [invoice_response(i, service) for i in invoices]


@router.get("/invoices/status-counts")
async def invoice_status_counts(service: BillingService = Depends(get_billing_service)):
    return service.status_counts()


@router.post("/invoices", response_model=InvoiceResponse)
async def create_invoice(
    request: InvoiceCreate,
    service: BillingService = Depends(get_billing_service)
):
    """Create a draft invoice for the billable hours of a case"""
    try:
        invoice = service.create_invoice(request.case_id, request.date)
    except KeyError:
        raise HTTPException(status_code=404, detail="Case not found")
    return invoice_response(invoice, service)


@router.post("/invoices/{invoice_id}/approve", response_model=InvoiceResponse)
async def approve_invoice(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service)
):
    """Approve a draft invoice; it becomes sent"""
    try:
        invoice = service.approve_invoice(invoice_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Invoice not found")
    except InvoiceStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return invoice_response(invoice, service)


@router.delete("/invoices/{invoice_id}")
async def delete_invoice(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service)
):
    """Delete a draft invoice"""
    try:
        service.delete_invoice(invoice_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Invoice not found")
    except InvoiceStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"message": "Invoice deleted", "invoice_id": invoice_id}


@router.get("/invoices/{invoice_id}/export")
async def export_invoice(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service)
):
    """Export an invoice in LEDES 1998B format"""
    try:
        content = service.export_invoice(invoice_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return {
        "invoice_id": invoice_id,
        "format": "LEDES1998B",
        "content": content,
    }
