import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from redis.asyncio import Redis

from app.core.config import settings
from app.core.database import get_db

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Redis client factory
# ---------------------------------------------------------------------------


async def get_redis_client() -> Optional[Redis]:
    """Get an async Redis client, or ``None`` when Redis is unreachable."""
    try:
        client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
        )
        await client.ping()
        return client
    except Exception:
        logger.warning("Redis unavailable, caching disabled for this request")
        return None


# ---------------------------------------------------------------------------
# Repository factory functions (one per repository, each gets the shared db)
# ---------------------------------------------------------------------------


async def get_lead_repo(
    db: AsyncSession = Depends(get_db),
):
    from app.repositories.lead_repository import LeadRepository

    return LeadRepository(db)


async def get_va_repo(
    db: AsyncSession = Depends(get_db),
):
    from app.repositories.va_repository import VARepository

    return VARepository(db)


async def get_settings_repo(
    db: AsyncSession = Depends(get_db),
):
    from app.repositories.settings_repository import SettingsRepository

    return SettingsRepository(db)


async def get_kpi_repo(
    db: AsyncSession = Depends(get_db),
):
    from app.repositories.kpi_repository import KPIRepository

    return KPIRepository(db)


# ---------------------------------------------------------------------------
# Cache service factory
# ---------------------------------------------------------------------------


async def get_cache_service(
    redis_client: Optional[Redis] = Depends(get_redis_client),
):
    """Build a :class:`CacheService` backed by the shared Redis client."""
    from app.core.cache import CacheService

    return CacheService(redis_client=redis_client)


# ---------------------------------------------------------------------------
# Service factory functions
# ---------------------------------------------------------------------------


async def get_lead_submission_service(
    cache=Depends(get_cache_service),
):
    """Build a :class:`LeadSubmissionService` with injected dependencies."""
    from app.services.lead_submission_service import LeadSubmissionService

    return LeadSubmissionService(cache=cache)


async def get_lead_status_service(
    cache=Depends(get_cache_service),
):
    """Build a :class:`LeadStatusService` with injected dependencies."""
    from app.services.lead_status_service import LeadStatusService

    return LeadStatusService(cache=cache)


async def get_settings_service():
    from app.services.settings_service import SettingsService

    return SettingsService()


async def get_kpi_service(
    kpi_repo=Depends(get_kpi_repo),
    cache=Depends(get_cache_service),
):
    """Build a :class:`KPIService` with injected repository and cache."""
    from app.services.kpi_service import KPIService

    return KPIService(repo=kpi_repo, cache=cache)
