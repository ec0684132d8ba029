from fastapi import APIRouter, Depends

from app.schemas.kpi import KPISummary
from app.services.kpi_service import KPIService
from app.api.deps import get_kpi_service

router = APIRouter(prefix="/kpis", tags=["KPIs"])


@router.get("", response_model=KPISummary)
async def get_kpis(
    service: KPIService = Depends(get_kpi_service),
) -> KPISummary:
    """Pipeline counts and average profits for the admin dashboard."""
    return KPISummary(**await service.get_summary())
