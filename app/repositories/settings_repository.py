import logging
from typing import Any

from sqlalchemy import select

from app.core.constants import SETTINGS_ROW_ID
from app.models.settings import AppSettings
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository):
    """Reads and writes the singleton ``app_settings`` row."""

    async def get_settings(self) -> AppSettings:
        """Return the settings row, inserting the defaults if it is missing.

        Column defaults on :class:`AppSettings` are the single source of
        the default values, so the inserted row matches a fresh install.
        """
        result = await self._db.execute(
            select(AppSettings)
            .where(AppSettings.id == SETTINGS_ROW_ID)
            .execution_options(populate_existing=True)
        )
        current = result.scalar_one_or_none()
        if current is not None:
            return current

        logger.info("app_settings row missing, creating defaults")
        current = AppSettings(id=SETTINGS_ROW_ID)
        self._db.add(current)
        await self._db.flush()
        return current

    async def update_settings(self, **fields: Any) -> AppSettings:
        """Apply *fields* to the settings row in place and flush."""
        current = await self.get_settings()
        for name, value in fields.items():
            setattr(current, name, value)
        await self._db.flush()
        return current
