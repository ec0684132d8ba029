"""Lead-specific Pydantic schemas (submission, status update, response)."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from app.core.constants import MAX_ASKING_PRICE, MIN_ASKING_PRICE, MIN_VEHICLE_YEAR
from app.schemas.common import CamelModel, LeadStatus
from app.schemas.va import VAOut

_HTTP_URL = TypeAdapter(HttpUrl)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LeadSubmission(CamelModel):
    """Body of the public submission form (POST /api/v1/leads).

    Range checks that need no database state happen here; the location
    check depends on the configured regions and runs in
    :class:`LeadSubmissionService`.  ``estimated_profit`` and
    ``estimated_commission`` are deliberately absent: they are always
    computed server-side.
    """

    # VA selection: an existing name, or "_new" plus ``new_va_name``
    va_name: Optional[str] = None
    new_va_name: Optional[str] = None

    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int
    mileage: int = Field(..., ge=0)

    asking_price: int
    estimated_sale_price: int = Field(..., ge=1)
    estimated_expenses: int = Field(0, ge=0)

    seller_name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    listing_url: str
    condition_notes: str = Field(..., min_length=1)
    good_deal_reason: str = Field(..., min_length=1)

    conditions: Optional[List[str]] = None
    honeypot: Optional[str] = None

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: int) -> int:
        if value < MIN_VEHICLE_YEAR:
            raise ValueError(f"Year must be {MIN_VEHICLE_YEAR} or newer")
        return value

    @field_validator("asking_price")
    @classmethod
    def validate_asking_price(cls, value: int) -> int:
        if value < MIN_ASKING_PRICE:
            raise ValueError(f"Asking price must be at least £{MIN_ASKING_PRICE}")
        if value > MAX_ASKING_PRICE:
            raise ValueError(f"Asking price must be £{MAX_ASKING_PRICE:,} or less")
        return value

    @field_validator("listing_url")
    @classmethod
    def validate_listing_url(cls, value: str) -> str:
        """Accept only http(s) URLs but keep the text exactly as sent."""
        value = value.strip()
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError:
            raise ValueError("Listing URL must be a valid http or https URL")
        return value


class LeadStatusUpdate(CamelModel):
    """Request body for PATCH /api/v1/leads/{lead_id}/status.

    Whether ``actual_sale_price`` is required depends on the target
    status, so that rule is enforced by :class:`LeadStatusService`.  A
    zero sale price counts as missing there.
    """

    status: LeadStatus
    actual_sale_price: Optional[int] = Field(None, ge=0)
    actual_expenses: Optional[int] = Field(None, ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeadOut(CamelModel):
    """A lead together with the VA who submitted it."""

    id: UUID
    created_at: datetime
    va_id: UUID
    va: VAOut

    make: str
    model: str
    year: int
    mileage: int

    asking_price: int
    estimated_sale_price: int
    estimated_expenses: int
    estimated_profit: int
    estimated_commission: int

    seller_name: str
    location: str
    listing_url: str
    condition_notes: str
    good_deal_reason: str
    conditions: List[str] = Field(default_factory=list)

    status: LeadStatus
    actual_sale_price: Optional[int] = None
    actual_expenses: Optional[int] = None
    actual_profit: Optional[int] = None
    actual_commission: Optional[int] = None

    @field_validator("conditions", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []


class LeadSubmissionResponse(CamelModel):
    """Response body returned after a successful submission."""

    lead: LeadOut
    estimated_profit: int
    estimated_commission: int
