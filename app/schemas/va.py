from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


class VACreate(CamelModel):
    """Request body for POST /api/v1/vas."""

    name: str = Field(..., min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("VA name must not be blank")
        return value


class VAOut(CamelModel):
    id: UUID
    name: str
    created_at: datetime
