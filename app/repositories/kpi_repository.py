from datetime import datetime
from typing import Any

from sqlalchemy import select, func, case

from app.core.constants import APPROVED_OR_LATER, BOUGHT_OR_LATER, SOLD_OR_LATER
from app.models.lead import Lead
from app.repositories.base import BaseRepository


class KPIRepository(BaseRepository):
    """Aggregate queries behind the admin KPI cards."""

    async def get_summary_row(self, since: datetime) -> Any:
        """Return stage counts and profit averages in one query.

        ``AVG`` skips NULLs, so ``avg_actual_profit`` only covers leads
        that have been settled.  Both averages are ``None`` when there is
        nothing to average.
        """

        def reached(stage):
            return func.count(case((Lead.status.in_(sorted(stage)), Lead.id)))

        query = select(
            func.count(case((Lead.created_at >= since, Lead.id))).label(
                "new_this_week"
            ),
            reached(APPROVED_OR_LATER).label("approved"),
            reached(BOUGHT_OR_LATER).label("bought"),
            reached(SOLD_OR_LATER).label("sold"),
            func.avg(Lead.estimated_profit).label("avg_estimated_profit"),
            func.avg(Lead.actual_profit).label("avg_actual_profit"),
        ).select_from(Lead)
        return (await self._db.execute(query)).one()
