from decimal import Decimal

import pytest

from app.schemas.settings import CommissionTiers
from app.services.commission import (
    calculate_profit,
    estimate_commission,
    round_half_up,
)

from tests.factories import DEFAULT_TIERS, make_settings_row


@pytest.fixture
def tiers() -> CommissionTiers:
    return CommissionTiers(**DEFAULT_TIERS)


class TestCalculateProfit:
    def test_profit_is_sale_minus_asking_minus_expenses(self):
        assert calculate_profit(3500, 3000, 250) == 250

    def test_loss_is_floored_at_zero(self):
        assert calculate_profit(1000, 2000, 0) == 0

    def test_expenses_can_wipe_out_profit(self):
        assert calculate_profit(2000, 1500, 600) == 0

    def test_break_even_is_zero(self):
        assert calculate_profit(1600, 1500, 100) == 0

    @pytest.mark.parametrize(
        "sale,asking,expenses",
        [(1, 3000, 0), (5000, 1, 4999), (2200, 1500, 100), (0, 0, 0)],
    )
    def test_never_negative(self, sale, asking, expenses):
        result = calculate_profit(sale, asking, expenses)
        assert result >= 0
        assert result == max(0, sale - asking - expenses)


class TestEstimateCommission:
    """Tier selection and rounding with the shipped default tiers."""

    def test_below_small_max_is_flat(self, tiers: CommissionTiers):
        assert estimate_commission(399, tiers) == 40

    def test_flat_fee_ignores_profit_size(self, tiers: CommissionTiers):
        assert estimate_commission(0, tiers) == 40
        assert estimate_commission(1, tiers) == 40
        assert estimate_commission(350, tiers) == 40

    def test_equal_to_small_max_is_medium_tier(self, tiers: CommissionTiers):
        assert estimate_commission(400, tiers) == 40

    def test_equal_to_medium_max_stays_medium_tier(self, tiers: CommissionTiers):
        assert estimate_commission(800, tiers) == 80

    def test_above_medium_max_is_large_tier(self, tiers: CommissionTiers):
        assert estimate_commission(801, tiers) == 120

    def test_medium_tier_mid_band(self, tiers: CommissionTiers):
        assert estimate_commission(600, tiers) == 60

    def test_flat_tier_differs_from_percentage(self):
        """Boundary behaviour is visible when the flat fee is distinctive."""
        tiers = CommissionTiers(**{**DEFAULT_TIERS, "flat_small": 55})
        assert estimate_commission(399, tiers) == 55
        assert estimate_commission(400, tiers) == 40

    def test_rounds_half_up_in_medium_tier(self, tiers: CommissionTiers):
        # 405 * 0.10 = 40.5
        assert estimate_commission(405, tiers) == 41

    def test_rounds_half_up_in_large_tier(self, tiers: CommissionTiers):
        # 830 * 0.15 = 124.5; banker's rounding would give 124
        assert estimate_commission(830, tiers) == 125

    def test_rounds_down_below_half(self, tiers: CommissionTiers):
        # 801 * 0.15 = 120.15
        assert estimate_commission(801, tiers) == 120

    def test_degenerate_tiers_are_evaluated_as_given(self):
        """small_max > medium_max: anything >= small_max lands in the large tier."""
        tiers = CommissionTiers(**{**DEFAULT_TIERS, "small_max": 900, "medium_max": 500})
        assert estimate_commission(899, tiers) == 40
        assert estimate_commission(900, tiers) == 135

    def test_tiers_built_from_settings_row(self):
        row = make_settings_row(percent_medium=0.2)
        tiers = CommissionTiers.model_validate(row)
        assert estimate_commission(500, tiers) == 100

    def test_tiers_snapshot_is_immutable(self, tiers: CommissionTiers):
        with pytest.raises(Exception):
            tiers.small_max = 1


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0), (0.5, 1), (1.49, 1), (2.5, 3), (Decimal("599.5"), 600), (60, 60)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestFullScenario:
    def test_estimate_then_settlement(self, tiers: CommissionTiers):
        estimated_profit = calculate_profit(2200, 1500, 100)
        assert estimated_profit == 600
        assert estimate_commission(estimated_profit, tiers) == 60

        actual_profit = calculate_profit(2000, 1500, 150)
        assert actual_profit == 350
        assert estimate_commission(actual_profit, tiers) == 40
