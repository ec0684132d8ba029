"""
Profit and commission calculation for vehicle flips.

Rules:
- Profit = sale price - asking price - expenses, floored at zero
- Profit below ``small_max``            -> flat ``flat_small`` fee
- Profit from ``small_max`` to ``medium_max`` (inclusive) -> ``percent_medium`` of profit
- Profit above ``medium_max``           -> ``percent_large`` of profit

Both functions are pure: the tier values arrive as a
:class:`CommissionTiers` snapshot and nothing is read from the database
or global state.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from app.schemas.settings import CommissionTiers

Number = Union[int, float, Decimal]

_WHOLE_UNIT = Decimal("1")


def _to_decimal(value: Number) -> Decimal:
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(_to_decimal(value).quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP))


def calculate_profit(sale_price: Number, asking_price: Number, expenses: Number) -> Number:
    """Return ``max(0, sale_price - asking_price - expenses)``.

    A loss-making deal reports zero profit, never a negative figure,
    because profit feeds straight into tier selection.  Callers validate
    input ranges before calling.
    """
    return max(0, sale_price - asking_price - expenses)


def estimate_commission(profit: Number, tiers: CommissionTiers) -> int:
    """Return the VA commission for *profit* under *tiers*.

    Tiers are checked in order and the first match wins.  A profit equal
    to ``small_max`` is already in the medium tier, and a profit equal
    to ``medium_max`` is still in it.  The percentage result is rounded
    once, half-up, to a whole unit.  Inconsistent tiers (e.g.
    ``small_max > medium_max``) are evaluated as given.
    """
    if profit < tiers.small_max:
        return tiers.flat_small
    if profit <= tiers.medium_max:
        rate = tiers.percent_medium
    else:
        rate = tiers.percent_large
    return round_half_up(_to_decimal(profit) * _to_decimal(rate))
