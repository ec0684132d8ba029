from uuid import uuid4

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Index,
    ARRAY,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.base import Base
from sqlalchemy.sql import func

from app.core.constants import (
    INITIAL_STATUS,
    LEAD_STATUSES,
    MAX_ASKING_PRICE,
    MIN_ASKING_PRICE,
    MIN_VEHICLE_YEAR,
)

_STATUS_CHECK_CLAUSE: str = (
    f"status IN ({', '.join(repr(s) for s in sorted(LEAD_STATUSES))})"
)

# The four settlement figures are written together on SOLD, never partially
_ACTUALS_ALL_OR_NONE_CLAUSE: str = (
    "(actual_sale_price IS NULL AND actual_expenses IS NULL "
    "AND actual_profit IS NULL AND actual_commission IS NULL) OR "
    "(actual_sale_price IS NOT NULL AND actual_expenses IS NOT NULL "
    "AND actual_profit IS NOT NULL AND actual_commission IS NOT NULL)"
)


class Lead(Base):
    """Candidate vehicle purchase submitted by a VA.

    Holds the listing facts, the VA's price estimates, and the derived
    estimated profit/commission computed at submission time.  The
    ``actual_*`` columns stay NULL until the lead is marked SOLD, when
    all four are written in the same transaction as the status change.
    All money columns are whole currency units.
    """

    __tablename__ = "leads"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        server_default=func.gen_random_uuid(),
    )
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    va_id = Column(
        UUID(as_uuid=True), ForeignKey("vas.id"), nullable=False, index=True
    )

    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    mileage = Column(Integer, nullable=False)

    asking_price = Column(Integer, nullable=False)
    estimated_sale_price = Column(Integer, nullable=False)
    estimated_expenses = Column(Integer, nullable=False, server_default="0")
    estimated_profit = Column(Integer, nullable=False)
    estimated_commission = Column(Integer, nullable=False)

    seller_name = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    listing_url = Column(Text, nullable=False)
    condition_notes = Column(Text, nullable=False)
    good_deal_reason = Column(Text, nullable=False)
    conditions = Column(ARRAY(String))

    status = Column(String(20), nullable=False, server_default=INITIAL_STATUS)
    actual_sale_price = Column(Integer)
    actual_expenses = Column(Integer)
    actual_profit = Column(Integer)
    actual_commission = Column(Integer)

    va = relationship("VA", back_populates="leads", lazy="joined")

    __table_args__ = (
        Index("idx_leads_status_created", "status", "created_at"),
        CheckConstraint(_STATUS_CHECK_CLAUSE, name="ck_lead_status"),
        CheckConstraint(f"year >= {MIN_VEHICLE_YEAR}", name="ck_lead_year_min"),
        CheckConstraint("mileage >= 0", name="ck_lead_mileage_nonneg"),
        CheckConstraint(
            f"asking_price BETWEEN {MIN_ASKING_PRICE} AND {MAX_ASKING_PRICE}",
            name="ck_lead_asking_price_range",
        ),
        CheckConstraint(
            "estimated_sale_price >= 1", name="ck_lead_estimated_sale_price_min"
        ),
        CheckConstraint(
            "estimated_expenses >= 0", name="ck_lead_estimated_expenses_nonneg"
        ),
        CheckConstraint("estimated_profit >= 0", name="ck_lead_estimated_profit_nonneg"),
        CheckConstraint(
            "actual_profit IS NULL OR actual_profit >= 0",
            name="ck_lead_actual_profit_nonneg",
        ),
        CheckConstraint(_ACTUALS_ALL_OR_NONE_CLAUSE, name="ck_lead_actuals_all_or_none"),
    )
