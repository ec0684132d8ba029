from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import select, or_

from app.models.lead import Lead
from app.models.va import VA
from app.repositories.base import BaseRepository


class LeadRepository(BaseRepository):
    """Encapsulates every SQL query that touches the ``leads`` table.

    Leads are always returned with their VA eagerly joined, so callers
    can read ``lead.va.name`` without another round trip.
    """

    async def get_by_id(
        self, lead_id: UUID, *, for_update: bool = False
    ) -> Optional[Lead]:
        """Return a single lead by primary key, or ``None``.

        With ``for_update=True`` the lead row is locked until the current
        transaction ends, which serialises concurrent status changes on
        the same lead.  Only ``leads`` is locked, not the joined VA.
        """
        query = (
            select(Lead)
            .where(Lead.id == lead_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update(of=Lead)
        result = await self._db.execute(query)
        return result.unique().scalar_one_or_none()

    async def list_leads(
        self,
        *,
        status: Optional[str] = None,
        va_name: Optional[str] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Lead]:
        """Return leads matching every given filter, newest first.

        ``va_name`` and ``search`` are case-insensitive substring
        matches; ``search`` looks at make, model, seller name and
        location.
        """
        query = select(Lead).join(VA, Lead.va_id == VA.id)
        if status:
            query = query.where(Lead.status == status)
        if va_name:
            query = query.where(VA.name.ilike(f"%{va_name}%"))
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Lead.make.ilike(pattern),
                    Lead.model.ilike(pattern),
                    Lead.seller_name.ilike(pattern),
                    Lead.location.ilike(pattern),
                )
            )
        if start_date:
            query = query.where(Lead.created_at >= start_date)
        if end_date:
            query = query.where(Lead.created_at <= end_date)
        result = await self._db.execute(query.order_by(Lead.created_at.desc()))
        return list(result.unique().scalars().all())

    async def create(self, **kwargs: Any) -> Lead:
        """Insert a new lead and return the model instance."""
        lead = Lead(**kwargs)
        self._db.add(lead)
        await self._db.flush()
        return lead

    async def update_status(
        self,
        lead: Lead,
        new_status: str,
        *,
        actual_sale_price: Optional[int] = None,
        actual_expenses: Optional[int] = None,
        actual_profit: Optional[int] = None,
        actual_commission: Optional[int] = None,
    ) -> Lead:
        """Set the status and, for a settlement, the four actual figures.

        The actual figures are only touched when all four are supplied;
        a plain relabel leaves them as they are.  Everything lands in one
        UPDATE at the next flush.
        """
        lead.status = new_status
        actuals = (actual_sale_price, actual_expenses, actual_profit, actual_commission)
        if all(value is not None for value in actuals):
            lead.actual_sale_price = actual_sale_price
            lead.actual_expenses = actual_expenses
            lead.actual_profit = actual_profit
            lead.actual_commission = actual_commission
        await self._db.flush()
        return lead
