import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from app.core.cache import CacheService
from app.core.config import settings
from app.core.constants import KPI_CACHE_KEY
from app.repositories.kpi_repository import KPIRepository
from app.services.commission import round_half_up

logger = logging.getLogger(__name__)


class KPIService:
    """Builds the admin KPI summary with Redis caching.

    The cached copy is dropped whenever a lead is submitted or changes
    status, so the TTL only bounds how stale ``new_this_week`` can get.
    """

    def __init__(
        self, repo: KPIRepository, cache: Optional[CacheService] = None
    ) -> None:
        self._repo = repo
        self._cache: CacheService = cache or CacheService()

    async def get_summary(self) -> Dict[str, Any]:
        cached = await self._cache.get_json(KPI_CACHE_KEY)
        if cached is not None:
            return cached

        since = datetime.now(timezone.utc) - timedelta(
            days=settings.KPI_NEW_LEAD_WINDOW_DAYS
        )
        row = await self._repo.get_summary_row(since)
        summary = {
            "new_this_week": row.new_this_week,
            "approved": row.approved,
            "bought": row.bought,
            "sold": row.sold,
            "avg_estimated_profit": self._rounded_average(row.avg_estimated_profit),
            "avg_actual_profit": self._rounded_average(row.avg_actual_profit),
        }

        await self._cache.set_json(KPI_CACHE_KEY, summary, ttl=settings.REDIS_CACHE_TTL)
        return summary

    @staticmethod
    def _rounded_average(value: Any) -> int:
        return 0 if value is None else round_half_up(value)
