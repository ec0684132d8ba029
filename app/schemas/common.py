from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LeadStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CONTACTED = "CONTACTED"
    BOUGHT = "BOUGHT"
    SOLD = "SOLD"
    PAID = "PAID"


class CamelModel(BaseModel):
    """Base for every wire schema.

    Fields are declared in snake_case and exchanged as camelCase
    (``askingPrice``, ``percentMedium``), which is the format the admin
    client and the stored settings record use.  Snake_case input is
    accepted too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class HealthResponse(BaseModel):
    status: str = "ok"
