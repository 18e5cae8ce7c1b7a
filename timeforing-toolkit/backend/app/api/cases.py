"""
Timeføring - Time Registration & Billing
Cases API Router - Case registry and search
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_time_tracking_service
from app.schemas.time_schemas import CaseCreate, CaseResponse
from app.services.time_tracking_service import TimeTrackingService

router = APIRouter()


@router.get("/", response_model=List[CaseResponse])
async def list_cases(service: TimeTrackingService = Depends(get_time_tracking_service)):
    """List all cases"""
    return [CaseResponse.model_validate(c) for c in service.cases]


@router.get("/search", response_model=List[CaseResponse])
async def search_cases(
    q: str = Query("", description="Matches case name, case number or client"),
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Search cases for the case picker"""
    return [CaseResponse.model_validate(c) for c in service.search_cases(q)]


@router.post("/", response_model=CaseResponse)
async def create_case(
    case_data: CaseCreate,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Create a new case and select it in the entry form"""
    case = service.add_case(
        name=case_data.name,
        case_number=case_data.case_number,
        client_name=case_data.client_name
    )
    return CaseResponse.model_validate(case)


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: str,
    service: TimeTrackingService = Depends(get_time_tracking_service)
):
    """Get a specific case by ID"""
    case = service.get_case(case_id)
    if not case:
        raise HTTPException(status_code=404, detail="Case not found")
    return CaseResponse.model_validate(case)
