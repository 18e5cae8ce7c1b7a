"""
Timeføring - Time Registration & Billing
Suggestions API Router - Review of unconfirmed activity suggestions

Suggestions are grouped for review:
- completed: ready to confirm
- partially_completed: missing case, activity type, description or hours
- spam: nothing usable
"""
from dataclasses import asdict, replace
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_time_tracking_service
from app.api.time_entries import entry_response
from app.schemas.time_schemas import (
    CategorizedSuggestionsResponse,
    ConfirmSelectedRequest,
    ConfirmSelectedResponse,
    SuggestionResponse,
    SuggestionUpdate,
    TimeEntryResponse,
)
from app.services.models import UnconfirmedSuggestion
from app.services.time_tracking_service import TimeTrackingService

router = APIRouter()


def suggestion_response(
    suggestion: UnconfirmedSuggestion,
    service: TimeTrackingService
) -> SuggestionResponse:
    return SuggestionResponse(
        **asdict(suggestion),
        case_name=service.case_label(suggestion.case_id)
    )


def _responses(
    suggestions: List[UnconfirmedSuggestion],
    service: TimeTrackingService
) -> List[SuggestionResponse]:
    return [suggestion_response(s, service) for s in suggestions]


@router.get("/", response_model=CategorizedSuggestionsResponse)
async def list_suggestions(service: TimeTrackingService = Depends(get_time_tracking_service)):
    """All unconfirmed suggestions, grouped by completeness"""
    grouped = service.categorized_suggestions()
    return CategorizedSuggestionsResponse(
        completed=_responses(grouped.completed, service),
        partially_completed=_responses(grouped.partially_completed, service),
        spam=_responses(grouped.spam, service),
        counts=grouped.counts(),
    )


@router.post("/confirm", response_model=ConfirmSelectedResponse)
async def confirm_selected_suggestions(
    request: ConfirmSelectedRequest,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Confirm several suggestions at once"""
    for suggestion_id in request.suggestion_ids:
        service.selection.toggle(suggestion_id, True)
    entries = service.confirm_selected()

    return ConfirmSelectedResponse(
        confirmed=len(entries),
        entries=[entry_response(e, service) for e in entries]
    )


@router.post("/{suggestion_id}/confirm", response_model=TimeEntryResponse)
async def confirm_suggestion(
    suggestion_id: str,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Turn a suggestion into a billable time entry"""
    entry = service.confirm_suggestion(suggestion_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return entry_response(entry, service)


@router.put("/{suggestion_id}", response_model=SuggestionResponse)
async def update_suggestion(
    suggestion_id: str,
    request: SuggestionUpdate,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Edit the fields of a suggestion; its date is kept"""
    suggestion = service.get_suggestion(suggestion_id)
    if not suggestion:
        raise HTTPException(status_code=404, detail="Suggestion not found")

    updated = service.update_suggestion(replace(suggestion, **request.model_dump()))
    return suggestion_response(updated, service)


@router.delete("/{suggestion_id}")
async def delete_suggestion(
    suggestion_id: str,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Discard a suggestion"""
    if not service.delete_suggestion(suggestion_id):
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return {"message": "Suggestion deleted", "suggestion_id": suggestion_id}
