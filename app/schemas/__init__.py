"""Pydantic schemas package – re-exports for convenience."""

# Common
from app.schemas.common import (
    LeadStatus as LeadStatus,
    CamelModel as CamelModel,
    HealthResponse as HealthResponse,
)

# Lead schemas
from app.schemas.lead import (
    LeadSubmission as LeadSubmission,
    LeadStatusUpdate as LeadStatusUpdate,
    LeadOut as LeadOut,
    LeadSubmissionResponse as LeadSubmissionResponse,
)

# VA schemas
from app.schemas.va import (
    VACreate as VACreate,
    VAOut as VAOut,
)

# Settings schemas
from app.schemas.settings import (
    CommissionTiers as CommissionTiers,
    SettingsOut as SettingsOut,
    SettingsUpdate as SettingsUpdate,
)

# KPI schemas
from app.schemas.kpi import KPISummary as KPISummary
