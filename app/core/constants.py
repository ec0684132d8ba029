from typing import Any, Dict, FrozenSet, List

LEAD_STATUSES: FrozenSet[str] = frozenset(
    {"PENDING", "APPROVED", "REJECTED", "CONTACTED", "BOUGHT", "SOLD", "PAID"}
)

INITIAL_STATUS: str = "PENDING"

# Terminal states: no further transitions allowed
TERMINAL_STATUSES: FrozenSet[str] = frozenset({"REJECTED", "PAID"})

ACTIVE_STATUSES: FrozenSet[str] = LEAD_STATUSES - TERMINAL_STATUSES

ALLOWED_TRANSITIONS: Dict[str, List[str]] = {
    "PENDING": ["APPROVED", "REJECTED"],
    "APPROVED": ["CONTACTED", "REJECTED"],
    "CONTACTED": ["BOUGHT", "REJECTED"],
    "BOUGHT": ["SOLD"],
    "SOLD": ["PAID"],
    "REJECTED": [],  # terminal
    "PAID": [],  # terminal
}

# The only transition that carries numeric side effects
SETTLEMENT_STATUS: str = "SOLD"

# KPI buckets: a lead counts towards a bucket once it has reached that stage
APPROVED_OR_LATER: FrozenSet[str] = frozenset(
    {"APPROVED", "CONTACTED", "BOUGHT", "SOLD", "PAID"}
)
BOUGHT_OR_LATER: FrozenSet[str] = frozenset({"BOUGHT", "SOLD", "PAID"})
SOLD_OR_LATER: FrozenSet[str] = frozenset({"SOLD", "PAID"})


MAJOR_CONDITION_ISSUES: FrozenSet[str] = frozenset(
    {"engine_knock", "gearbox_failure", "severe_rust", "accident_damage"}
)

MIN_VEHICLE_YEAR: int = 2010
MIN_ASKING_PRICE: int = 1
MAX_ASKING_PRICE: int = 3000

# Sentinel sent by the submission form when the VA is typing a new name
NEW_VA_SENTINEL: str = "_new"

SETTINGS_ROW_ID: int = 1

DEFAULT_SETTINGS: Dict[str, Any] = {
    "radius_miles": 30,
    "allowed_regions": "Hereford or Worcester, UK",
    "flat_small": 40,
    "small_max": 400,
    "medium_max": 800,
    "percent_medium": 0.10,
    "percent_large": 0.15,
}

KPI_CACHE_KEY: str = "kpis:summary"
