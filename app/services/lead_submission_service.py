import logging
from typing import Any, Dict, Optional

from app.core.cache import CacheService
from app.core.constants import INITIAL_STATUS, KPI_CACHE_KEY, NEW_VA_SENTINEL
from app.core.exceptions import (
    DuplicateVAError,
    InvalidLeadDataError,
    MajorConditionIssueError,
    SpamDetectedError,
    VANotFoundError,
)
from app.models.va import VA
from app.repositories.lead_repository import LeadRepository
from app.repositories.settings_repository import SettingsRepository
from app.repositories.va_repository import VARepository
from app.schemas.lead import LeadSubmission
from app.schemas.settings import CommissionTiers
from app.services.commission import calculate_profit, estimate_commission
from app.services.condition_validator import (
    is_honeypot_clean,
    location_in_regions,
    parse_allowed_regions,
    validate_conditions,
)

logger = logging.getLogger(__name__)


class LeadSubmissionService:
    """Orchestrates the public lead-submission workflow.

    Dependencies are injected via the constructor so the class remains
    stateless and easily testable.
    """

    def __init__(self, cache: Optional[CacheService] = None) -> None:
        self._cache: CacheService = cache or CacheService()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def submit_lead(
        self,
        submission: LeadSubmission,
        lead_repo: LeadRepository,
        va_repo: VARepository,
        settings_repo: SettingsRepository,
    ) -> Dict[str, Any]:
        """Execute the complete submission pipeline.

        Steps:
        1. Spam check (honeypot)
        2. Condition check (major issues reject the lead)
        3. Location check against the configured regions
        4. Resolve or create the submitting VA
        5. Compute estimated profit and commission
        6. Persist the lead as PENDING

        Returns a dict suitable for building ``LeadSubmissionResponse``.

        Raises:
            SpamDetectedError: The honeypot field was filled in.
            MajorConditionIssueError: A disqualifying condition was reported.
            InvalidLeadDataError: Location outside the allowed regions, or
                no VA name given.
            VANotFoundError: The selected existing VA does not exist.
        """
        # 1. Honeypot
        if not is_honeypot_clean(submission.honeypot):
            logger.warning("Submission rejected by honeypot check")
            raise SpamDetectedError()

        # 2. Major condition issues
        condition_result = validate_conditions(submission.conditions)
        if not condition_result.valid:
            logger.warning("Submission rejected: %s", condition_result.errors)
            raise MajorConditionIssueError(condition_result.errors)

        # 3. One settings snapshot for both the region check and the tiers
        current_settings = await settings_repo.get_settings()
        regions = parse_allowed_regions(current_settings.allowed_regions)
        if not location_in_regions(submission.location, regions):
            raise InvalidLeadDataError(
                f"Location must include {' or '.join(regions)}"
            )
        tiers = CommissionTiers.model_validate(current_settings)

        # 4. Submitting VA
        va = await self._resolve_va(submission, va_repo)

        # 5. Estimates
        estimated_profit = calculate_profit(
            submission.estimated_sale_price,
            submission.asking_price,
            submission.estimated_expenses,
        )
        estimated_commission = estimate_commission(estimated_profit, tiers)

        # 6. Persist
        lead = await lead_repo.create(
            va_id=va.id,
            va=va,
            make=submission.make,
            model=submission.model,
            year=submission.year,
            mileage=submission.mileage,
            asking_price=submission.asking_price,
            estimated_sale_price=submission.estimated_sale_price,
            estimated_expenses=submission.estimated_expenses,
            estimated_profit=estimated_profit,
            estimated_commission=estimated_commission,
            seller_name=submission.seller_name,
            location=submission.location,
            listing_url=submission.listing_url,
            condition_notes=submission.condition_notes,
            good_deal_reason=submission.good_deal_reason,
            conditions=list(submission.conditions or []),
            status=INITIAL_STATUS,
        )
        lead_id = lead.id
        await lead_repo.commit()
        logger.info(
            "Lead %s submitted by VA %s: est. profit=%s commission=%s",
            lead_id,
            va.name,
            estimated_profit,
            estimated_commission,
        )

        await self._cache.invalidate(KPI_CACHE_KEY)

        return {
            "lead": await lead_repo.get_by_id(lead_id),
            "estimated_profit": estimated_profit,
            "estimated_commission": estimated_commission,
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _resolve_va(
        self, submission: LeadSubmission, va_repo: VARepository
    ) -> VA:
        """Return the VA named by the submission, creating a new one if asked.

        An existing-VA selection must match exactly; a new VA name is
        reused if someone already registered it.
        """
        va_name = (submission.va_name or "").strip()
        new_va_name = (submission.new_va_name or "").strip()

        if va_name and va_name != NEW_VA_SENTINEL:
            va = await va_repo.get_by_name(va_name)
            if not va:
                raise VANotFoundError(f"Selected VA not found: {va_name}")
            return va

        if new_va_name:
            va = await va_repo.get_by_name(new_va_name)
            if va:
                return va
            logger.info("Registering new VA %s", new_va_name)
            try:
                return await va_repo.create(new_va_name)
            except DuplicateVAError:
                # Lost the race to a concurrent submission with the same name
                va = await va_repo.get_by_name(new_va_name)
                if not va:
                    raise
                return va

        raise InvalidLeadDataError("VA name is required")
