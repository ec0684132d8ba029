import logging
from typing import List, Optional
from uuid import UUID

from app.core.cache import CacheService
from app.core.config import settings
from app.core.constants import (
    ALLOWED_TRANSITIONS,
    KPI_CACHE_KEY,
    SETTLEMENT_STATUS,
)
from app.core.exceptions import InvalidStatusTransitionError, LeadNotFoundError
from app.models.lead import Lead
from app.repositories.lead_repository import LeadRepository
from app.repositories.settings_repository import SettingsRepository
from app.schemas.lead import LeadStatusUpdate
from app.schemas.settings import CommissionTiers
from app.services.commission import calculate_profit, estimate_commission

logger = logging.getLogger(__name__)


def allowed_next_statuses(current_status: str) -> List[str]:
    """Statuses reachable in one step from *current_status*."""
    return list(ALLOWED_TRANSITIONS.get(current_status, []))


def validate_status_transition(
    current_status: str, new_status: str, *, enforce: bool = True
) -> None:
    """Raise unless *current_status* -> *new_status* is a legal move.

    ``SOLD -> SOLD`` is always accepted: it re-settles the lead with new
    actual figures.  With ``enforce=False`` any move is accepted, which
    reproduces the legacy behaviour where only the admin UI limited the
    choices.
    """
    if current_status == new_status == SETTLEMENT_STATUS:
        return
    if not enforce:
        return
    if new_status not in ALLOWED_TRANSITIONS.get(current_status, []):
        raise InvalidStatusTransitionError(
            f"Cannot transition from {current_status} to {new_status}"
        )


class LeadStatusService:
    """Moves a lead through the sale pipeline.

    Every transition except the move into SOLD is a plain relabel.  The
    SOLD transition requires the actual sale price, recomputes profit
    against the lead's original asking price and the current commission
    tiers, and writes the status plus all four actual figures in one
    transaction.
    """

    def __init__(
        self,
        cache: Optional[CacheService] = None,
        enforce_transitions: Optional[bool] = None,
    ) -> None:
        self._cache: CacheService = cache or CacheService()
        self._enforce = (
            settings.ENFORCE_STATUS_TRANSITIONS
            if enforce_transitions is None
            else enforce_transitions
        )

    async def update_status(
        self,
        lead_id: UUID,
        update: LeadStatusUpdate,
        lead_repo: LeadRepository,
        settings_repo: SettingsRepository,
    ) -> Lead:
        """Apply *update* to the lead and return the persisted lead.

        Raises:
            InvalidStatusTransitionError: SOLD without an actual sale
                price, or a move not allowed from the current status.
            LeadNotFoundError: No lead with *lead_id*.
        """
        new_status = update.status.value
        settling = new_status == SETTLEMENT_STATUS

        # 1. Fail fast before touching the database; a zero price counts as missing
        if settling and not update.actual_sale_price:
            raise InvalidStatusTransitionError(
                "Actual sale price is required when marking as sold"
            )

        # 2. Fetch and lock the lead
        lead = await lead_repo.get_by_id(lead_id, for_update=True)
        if not lead:
            raise LeadNotFoundError(f"Lead {lead_id} not found")
        old_status = lead.status

        # 3. Adjacency check
        validate_status_transition(old_status, new_status, enforce=self._enforce)

        # 4. Relabel, or settle with recomputed actual figures
        if settling:
            tiers = CommissionTiers.model_validate(await settings_repo.get_settings())
            actual_expenses = update.actual_expenses or 0
            actual_profit = calculate_profit(
                update.actual_sale_price, lead.asking_price, actual_expenses
            )
            actual_commission = estimate_commission(actual_profit, tiers)
            await lead_repo.update_status(
                lead,
                new_status,
                actual_sale_price=update.actual_sale_price,
                actual_expenses=actual_expenses,
                actual_profit=actual_profit,
                actual_commission=actual_commission,
            )
            logger.info(
                "Lead %s settled: sale=%s expenses=%s profit=%s commission=%s",
                lead_id,
                update.actual_sale_price,
                actual_expenses,
                actual_profit,
                actual_commission,
            )
        else:
            if update.actual_sale_price is not None or update.actual_expenses is not None:
                logger.warning(
                    "Ignoring actual figures sent with %s -> %s for lead %s",
                    old_status,
                    new_status,
                    lead_id,
                )
            await lead_repo.update_status(lead, new_status)

        await lead_repo.commit()
        logger.info("Lead %s status %s -> %s", lead_id, old_status, new_status)

        await self._cache.invalidate(KPI_CACHE_KEY)

        # Re-fetch so the response reflects exactly what was persisted
        return await lead_repo.get_by_id(lead_id)
