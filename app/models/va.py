from uuid import uuid4

from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.base import Base
from sqlalchemy.sql import func


class VA(Base):
    """Virtual assistant who sources and submits vehicle leads.

    Names are unique and matched case-sensitively.  A VA is created the
    first time a submission references a new name and is never deleted,
    so every lead keeps a resolvable owner.
    """

    __tablename__ = "vas"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        server_default=func.gen_random_uuid(),
    )
    name = Column(String(200), unique=True, nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    leads = relationship("Lead", back_populates="va")
