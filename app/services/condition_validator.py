import re
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from app.core.constants import MAJOR_CONDITION_ISSUES


class ConditionValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


def validate_conditions(
    conditions: Optional[Sequence[str]] = None,
) -> ConditionValidationResult:
    """Reject submissions that report a major vehicle issue.

    Minor flags such as ``dead_battery`` or ``flat_tyre`` are tolerated.
    The error names every major issue found, in the order the caller
    listed them.
    """
    found = [c for c in conditions or [] if c in MAJOR_CONDITION_ISSUES]
    if found:
        return ConditionValidationResult(
            valid=False,
            errors=[
                f"Major issues detected: {', '.join(found)}. "
                "These cannot be accepted."
            ],
        )
    return ConditionValidationResult(valid=True, errors=[])


def is_honeypot_clean(value: Optional[str]) -> bool:
    """Return ``True`` if the hidden form field was left empty."""
    return not value or not value.strip()


_REGION_SEPARATORS = re.compile(r"\s*(?:,|;|/|\bor\b)\s*", re.IGNORECASE)
_COUNTRY_CODE = re.compile(r"^[A-Z]{1,3}$")


def parse_allowed_regions(allowed_regions: Optional[str]) -> List[str]:
    """Split the free-text region setting into matchable names.

    ``"Hereford or Worcester, UK"`` becomes ``["Hereford", "Worcester"]``;
    short all-caps tokens are country qualifiers and are dropped.  When
    every token is that short (``"NY or LA"``) they are the region names
    themselves and all are kept.
    """
    tokens = [t.strip() for t in _REGION_SEPARATORS.split(allowed_regions or "")]
    tokens = [t for t in tokens if t]
    names = [t for t in tokens if not _COUNTRY_CODE.match(t)]
    return names or tokens


def location_in_regions(location: str, regions: Sequence[str]) -> bool:
    """Case-insensitive substring match of *location* against *regions*.

    An empty region list places no restriction.
    """
    if not regions:
        return True
    haystack = location.lower()
    return any(region.lower() in haystack for region in regions)
