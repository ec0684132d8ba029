import logging

from app.core.exceptions import InvalidSettingsError
from app.models.settings import AppSettings
from app.repositories.settings_repository import SettingsRepository
from app.schemas.settings import SettingsUpdate
from app.services.condition_validator import parse_allowed_regions

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending null
_NULLABLE_FIELDS = frozenset(
    {"video_intro_url", "video_find_url", "video_price_url", "video_use_url"}
)


class SettingsService:
    """Reads and validates changes to the singleton settings record.

    Bad tier configurations are rejected at write time so the commission
    estimator never has to cope with them.
    """

    async def get_settings(self, settings_repo: SettingsRepository) -> AppSettings:
        return await settings_repo.get_settings()

    async def update_settings(
        self, update: SettingsUpdate, settings_repo: SettingsRepository
    ) -> AppSettings:
        """Merge *update* into the stored settings and persist them.

        Raises:
            InvalidSettingsError: A required field was nulled, the
                merged tiers have ``small_max > medium_max``, or the
                allowed regions name no region.
        """
        changes = update.model_dump(exclude_unset=True)

        nulled = sorted(
            name
            for name, value in changes.items()
            if value is None and name not in _NULLABLE_FIELDS
        )
        if nulled:
            raise InvalidSettingsError(f"Fields cannot be null: {', '.join(nulled)}")

        current = await settings_repo.get_settings()
        small_max = changes.get("small_max", current.small_max)
        medium_max = changes.get("medium_max", current.medium_max)
        if small_max > medium_max:
            raise InvalidSettingsError(
                f"smallMax ({small_max}) must not exceed mediumMax ({medium_max})"
            )

        # An empty region list would let any location through
        if "allowed_regions" in changes and not parse_allowed_regions(
            changes["allowed_regions"]
        ):
            raise InvalidSettingsError(
                "allowedRegions must name at least one region"
            )

        updated = await settings_repo.update_settings(**changes)
        await settings_repo.commit()
        logger.info("Settings updated: %s", ", ".join(sorted(changes)) or "no changes")
        return updated
