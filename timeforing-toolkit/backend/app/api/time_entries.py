"""
Timeføring - Time Registration & Billing
Time Entries API Router - Registration, editing and weekly overview
"""
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_time_tracking_service
from app.schemas.time_schemas import (
    FormErrorResponse,
    TimeEntryCreate,
    TimeEntryResponse,
    TimeEntryUpdate,
)
from app.services.models import TimeEntry
from app.services.time_tracking_service import EntryForm, TimeTrackingService
from app.utils.decimal_input import HoursInput

router = APIRouter()


def entry_response(entry: TimeEntry, service: TimeTrackingService) -> TimeEntryResponse:
    return TimeEntryResponse(**asdict(entry), case_name=service.case_label(entry.case_id))


def _form_from_request(request: TimeEntryCreate) -> EntryForm:
    """Rebuild the entry form as it stands when the user leaves the hours field"""
    hours = HoursInput()
    if request.hours_input is not None:
        hours.type(request.hours_input)
    elif request.hours is not None:
        hours.set(request.hours)
    hours.blur()

    return EntryForm(
        selected_date=request.date,
        case_id=request.case_id,
        activity_type=request.activity_type,
        description=request.description,
        billable=request.billable,
        hours=hours,
    )


@router.get("/", response_model=List[TimeEntryResponse])
async def list_time_entries(
    case_id: Optional[str] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    billable: Optional[bool] = None,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """List time entries, optionally for one case, day or billable flag"""
    entries = service.time_entries
    if case_id:
        entries = [e for e in entries if e.case_id == case_id]
    if on_date:
        entries = [e for e in entries if e.date == on_date]
    if billable is not None:
        entries = [e for e in entries if e.billable == billable]
    return [entry_response(e, service) for e in entries]


@router.get("/week")
async def get_week(
    on_date: Optional[date] = Query(None, alias="date"),
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Weekly table: cases in rows, Monday-Sunday in columns"""
    return service.weekly_overview(on_date or date.today())


@router.post(
    "/",
    response_model=TimeEntryResponse,
    responses={422: {"model": FormErrorResponse, "description": "Missing required fields"}}
)
async def create_time_entry(
    request: TimeEntryCreate,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """
    Register time.

    Case, activity type and description are required. When any is missing
    nothing is saved and the field errors are returned with status 422.
    """
    result = service.create_entry(_form_from_request(request))
    if not result.ok:
        return JSONResponse(status_code=422, content={"errors": result.errors})
    return entry_response(result.entry, service)


@router.put("/{entry_id}", response_model=TimeEntryResponse)
async def update_time_entry(
    entry_id: str,
    request: TimeEntryUpdate,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Replace a time entry"""
    updated = service.update_entry(TimeEntry(id=entry_id, **request.model_dump()))
    if not updated:
        raise HTTPException(status_code=404, detail="Time entry not found")
    return entry_response(updated, service)


@router.delete("/{entry_id}")
async def delete_time_entry(
    entry_id: str,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Delete a time entry"""
    if not service.delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="Time entry not found")
    return {"message": "Time entry deleted", "entry_id": entry_id}
