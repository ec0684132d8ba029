import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateVAError
from app.models.va import VA
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VARepository(BaseRepository):
    """Encapsulates every SQL query that touches the ``vas`` table."""

    async def list_all(self) -> List[VA]:
        """Return every VA ordered by name."""
        result = await self._db.execute(select(VA).order_by(VA.name))
        return list(result.scalars().all())

    async def get_by_id(self, va_id: UUID) -> Optional[VA]:
        result = await self._db.execute(select(VA).where(VA.id == va_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[VA]:
        """Return the VA with exactly this name (case-sensitive), or ``None``."""
        result = await self._db.execute(select(VA).where(VA.name == name))
        return result.scalar_one_or_none()

    async def create(self, name: str) -> VA:
        """Insert a VA and flush so its id is available immediately.

        The insert runs in a SAVEPOINT.  If another transaction registered
        the same name first, only the savepoint is rolled back and
        :class:`DuplicateVAError` is raised, leaving the caller's
        transaction usable.
        """
        va = VA(name=name)
        try:
            async with self._db.begin_nested():
                self._db.add(va)
        except IntegrityError:
            logger.info("VA %s was registered concurrently", name)
            raise DuplicateVAError(f"VA with name {name!r} already exists")
        return va
