"""Repository layer – all database access goes through here.

Repositories encapsulate SQLAlchemy queries so that the service layer
only contains business logic.
"""

from app.repositories.lead_repository import LeadRepository
from app.repositories.va_repository import VARepository
from app.repositories.settings_repository import SettingsRepository
from app.repositories.kpi_repository import KPIRepository

__all__ = [
    "LeadRepository",
    "VARepository",
    "SettingsRepository",
    "KPIRepository",
]
