from fastapi import APIRouter, Depends

from app.schemas.settings import SettingsOut, SettingsUpdate
from app.services.settings_service import SettingsService
from app.repositories.settings_repository import SettingsRepository
from app.api.deps import get_settings_service, get_settings_repo

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsOut)
async def get_settings(
    service: SettingsService = Depends(get_settings_service),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
) -> SettingsOut:
    """Current regions, commission tiers and training links."""
    return SettingsOut.model_validate(await service.get_settings(settings_repo))


@router.patch("", response_model=SettingsOut)
async def update_settings(
    update: SettingsUpdate,
    service: SettingsService = Depends(get_settings_service),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
) -> SettingsOut:
    """Partially update the settings; omitted fields keep their value."""
    updated = await service.update_settings(update, settings_repo)
    return SettingsOut.model_validate(updated)
