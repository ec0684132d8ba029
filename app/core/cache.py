import json
import logging
from typing import Any, Dict, Optional

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class CacheService:
    """Best-effort JSON cache on top of an async Redis client.

    The cache never decides correctness: when *redis_client* is ``None``
    or Redis errors out, reads miss and writes are dropped, and the
    caller recomputes from the database.
    """

    def __init__(self, redis_client: Optional[Redis] = None) -> None:
        self._redis: Optional[Redis] = redis_client

    @property
    def is_available(self) -> bool:
        return self._redis is not None

    async def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the decoded dict stored under *key*, or ``None`` on a miss."""
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(key)
        except Exception:
            logger.warning("Redis GET failed for key %s", key)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    async def set_json(
        self, key: str, data: Dict[str, Any], ttl: Optional[int] = None
    ) -> None:
        if self._redis is None:
            return
        try:
            payload = json.dumps(data, default=str)
        except (TypeError, ValueError):
            logger.warning("Failed to serialise data for cache key %s", key)
            return
        try:
            if ttl:
                await self._redis.setex(key, ttl, payload)
            else:
                await self._redis.set(key, payload)
        except Exception:
            logger.warning("Redis SET failed for key %s", key)

    async def invalidate(self, key: str) -> None:
        """Drop *key* so the next read recomputes it."""
        if self._redis is None:
            return
        try:
            await self._redis.delete(key)
        except Exception:
            logger.warning("Redis DELETE failed for key %s", key)
