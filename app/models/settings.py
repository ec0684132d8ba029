from sqlalchemy import Column, Integer, Float, Text, DateTime, CheckConstraint
from app.models.base import Base
from sqlalchemy.sql import func

from app.core.constants import DEFAULT_SETTINGS, SETTINGS_ROW_ID


class AppSettings(Base):
    """Singleton business configuration (always row ``id = 1``).

    Holds the allowed regions used to vet submission locations, the
    commission tier boundaries and rates, and the training video links
    shown to VAs.  Created with defaults on first read and updated in
    place afterwards.
    """

    __tablename__ = "app_settings"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    radius_miles = Column(
        Integer, nullable=False, default=DEFAULT_SETTINGS["radius_miles"]
    )
    allowed_regions = Column(
        Text, nullable=False, default=DEFAULT_SETTINGS["allowed_regions"]
    )
    flat_small = Column(Integer, nullable=False, default=DEFAULT_SETTINGS["flat_small"])
    small_max = Column(Integer, nullable=False, default=DEFAULT_SETTINGS["small_max"])
    medium_max = Column(Integer, nullable=False, default=DEFAULT_SETTINGS["medium_max"])
    percent_medium = Column(
        Float, nullable=False, default=DEFAULT_SETTINGS["percent_medium"]
    )
    percent_large = Column(
        Float, nullable=False, default=DEFAULT_SETTINGS["percent_large"]
    )
    video_intro_url = Column(Text)
    video_find_url = Column(Text)
    video_price_url = Column(Text)
    video_use_url = Column(Text)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint(f"id = {SETTINGS_ROW_ID}", name="ck_settings_singleton"),
    )
