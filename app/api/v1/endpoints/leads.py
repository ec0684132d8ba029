from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.core.exceptions import LeadNotFoundError
from app.schemas.common import LeadStatus
from app.schemas.lead import (
    LeadOut,
    LeadStatusUpdate,
    LeadSubmission,
    LeadSubmissionResponse,
)
from app.services.lead_submission_service import LeadSubmissionService
from app.services.lead_status_service import LeadStatusService
from app.repositories.lead_repository import LeadRepository
from app.repositories.va_repository import VARepository
from app.repositories.settings_repository import SettingsRepository
from app.api.deps import (
    get_lead_submission_service,
    get_lead_status_service,
    get_lead_repo,
    get_va_repo,
    get_settings_repo,
)

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get("", response_model=List[LeadOut])
async def list_leads(
    status: Optional[LeadStatus] = Query(None),
    va_name: Optional[str] = Query(None, alias="vaName"),
    search: Optional[str] = Query(None, description="Make, model, seller or location"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    lead_repo: LeadRepository = Depends(get_lead_repo),
) -> List[LeadOut]:
    """List leads, newest first, with optional filters."""
    leads = await lead_repo.list_leads(
        status=status.value if status else None,
        va_name=va_name,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )
    return [LeadOut.model_validate(lead) for lead in leads]


@router.post(
    "",
    response_model=LeadSubmissionResponse,
    status_code=201,
)
async def submit_lead(
    submission: LeadSubmission,
    service: LeadSubmissionService = Depends(get_lead_submission_service),
    lead_repo: LeadRepository = Depends(get_lead_repo),
    va_repo: VARepository = Depends(get_va_repo),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
) -> LeadSubmissionResponse:
    """Submit a new lead from the public VA form.

    Business logic is delegated to :class:`LeadSubmissionService`.
    """
    result = await service.submit_lead(
        submission=submission,
        lead_repo=lead_repo,
        va_repo=va_repo,
        settings_repo=settings_repo,
    )
    return LeadSubmissionResponse(
        lead=LeadOut.model_validate(result["lead"]),
        estimated_profit=result["estimated_profit"],
        estimated_commission=result["estimated_commission"],
    )


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(
    lead_id: UUID,
    lead_repo: LeadRepository = Depends(get_lead_repo),
) -> LeadOut:
    lead = await lead_repo.get_by_id(lead_id)
    if not lead:
        raise LeadNotFoundError(f"Lead {lead_id} not found")
    return LeadOut.model_validate(lead)


@router.patch("/{lead_id}/status", response_model=LeadOut)
async def update_lead_status(
    lead_id: UUID,
    update: LeadStatusUpdate,
    service: LeadStatusService = Depends(get_lead_status_service),
    lead_repo: LeadRepository = Depends(get_lead_repo),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
) -> LeadOut:
    """Move a lead to a new status.

    Marking a lead SOLD requires ``actualSalePrice`` and recomputes the
    actual profit and commission.  Business logic is delegated to
    :class:`LeadStatusService`.
    """
    lead = await service.update_status(
        lead_id=lead_id,
        update=update,
        lead_repo=lead_repo,
        settings_repo=settings_repo,
    )
    return LeadOut.model_validate(lead)
