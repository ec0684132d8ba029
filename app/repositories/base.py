from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """Holds the request-scoped database session.

    Repositories built from the same ``AsyncSession`` share one
    transaction, so a service can read settings, write a lead and commit
    them as a single unit of work.  Repositories never commit on their
    own; the service that owns the workflow does.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def flush(self) -> None:
        """Flush pending changes without committing."""
        await self._db.flush()

    async def commit(self) -> None:
        await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()
