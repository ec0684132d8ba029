"""Schemas for the singleton settings record and the tier snapshot."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import CamelModel


class CommissionTiers(BaseModel):
    """Immutable snapshot of the commission tier fields.

    Built from one settings row before any arithmetic runs, so a single
    calculation never mixes values from two settings revisions.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    flat_small: int
    small_max: int
    medium_max: int
    percent_medium: float
    percent_large: float


class SettingsOut(CamelModel):
    """Settings as stored; field names and numeric types round-trip exactly."""

    radius_miles: int
    allowed_regions: str
    flat_small: int
    small_max: int
    medium_max: int
    percent_medium: float
    percent_large: float
    video_intro_url: Optional[str] = None
    video_find_url: Optional[str] = None
    video_price_url: Optional[str] = None
    video_use_url: Optional[str] = None


class SettingsUpdate(CamelModel):
    """Partial update for PATCH /api/v1/settings.

    Per-field ranges are checked here.  The cross-field rule
    ``small_max <= medium_max`` needs the merged result of this patch
    and the stored row, so :class:`SettingsService` enforces it.
    """

    radius_miles: Optional[int] = Field(None, ge=0)
    allowed_regions: Optional[str] = Field(None, min_length=1)
    flat_small: Optional[int] = Field(None, ge=0)
    small_max: Optional[int] = Field(None, ge=0)
    medium_max: Optional[int] = Field(None, ge=0)
    percent_medium: Optional[float] = Field(None, ge=0, le=1)
    percent_large: Optional[float] = Field(None, ge=0, le=1)
    video_intro_url: Optional[str] = None
    video_find_url: Optional[str] = None
    video_price_url: Optional[str] = None
    video_use_url: Optional[str] = None
