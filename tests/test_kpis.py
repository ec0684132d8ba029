import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.core.config import settings
from app.core.constants import KPI_CACHE_KEY
from app.services.kpi_service import KPIService


def _row(**overrides) -> SimpleNamespace:
    row = {
        "new_this_week": 3,
        "approved": 5,
        "bought": 2,
        "sold": 1,
        "avg_estimated_profit": 612.5,
        "avg_actual_profit": None,
    }
    row.update(overrides)
    return SimpleNamespace(**row)


@pytest.fixture
def kpi_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_summary_row = AsyncMock(return_value=_row())
    return repo


class TestKPIService:
    @pytest.mark.asyncio
    async def test_cache_miss_queries_and_stores(self, kpi_repo, mock_cache, mock_redis):
        summary = await KPIService(kpi_repo, mock_cache).get_summary()

        assert summary == {
            "new_this_week": 3,
            "approved": 5,
            "bought": 2,
            "sold": 1,
            "avg_estimated_profit": 613,
            "avg_actual_profit": 0,
        }
        kpi_repo.get_summary_row.assert_awaited_once()
        key, ttl, payload = mock_redis.setex.await_args.args
        assert key == KPI_CACHE_KEY
        assert ttl == settings.REDIS_CACHE_TTL
        assert json.loads(payload) == summary

    @pytest.mark.asyncio
    async def test_cache_hit_skips_database(self, kpi_repo, mock_cache, mock_redis):
        cached = {
            "new_this_week": 1,
            "approved": 0,
            "bought": 0,
            "sold": 0,
            "avg_estimated_profit": 250,
            "avg_actual_profit": 0,
        }
        mock_redis.get = AsyncMock(return_value=json.dumps(cached))

        summary = await KPIService(kpi_repo, mock_cache).get_summary()

        assert summary == cached
        kpi_repo.get_summary_row.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_lead_window_uses_configured_days(self, kpi_repo):
        before = datetime.now(timezone.utc)
        await KPIService(kpi_repo).get_summary()
        since = kpi_repo.get_summary_row.await_args.args[0]

        expected = before - timedelta(days=settings.KPI_NEW_LEAD_WINDOW_DAYS)
        assert abs((since - expected).total_seconds()) < 5

    @pytest.mark.asyncio
    async def test_empty_database_gives_zeros(self, kpi_repo):
        kpi_repo.get_summary_row = AsyncMock(
            return_value=_row(
                new_this_week=0,
                approved=0,
                bought=0,
                sold=0,
                avg_estimated_profit=None,
                avg_actual_profit=None,
            )
        )

        summary = await KPIService(kpi_repo).get_summary()

        assert summary["avg_estimated_profit"] == 0
        assert summary["avg_actual_profit"] == 0

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_database(
        self, kpi_repo, mock_cache, mock_redis
    ):
        mock_redis.get = AsyncMock(side_effect=ConnectionError("redis down"))
        mock_redis.setex = AsyncMock(side_effect=ConnectionError("redis down"))

        summary = await KPIService(kpi_repo, mock_cache).get_summary()

        assert summary["approved"] == 5
