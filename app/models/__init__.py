from app.models.base import Base
from app.models.va import VA
from app.models.lead import Lead
from app.models.settings import AppSettings

# Import event listeners to register them
from app.models import listeners  # noqa: F401

__all__ = [
    "Base",
    "VA",
    "Lead",
    "AppSettings",
]
