"""API-layer dependency functions.

Re-exports all dependency factories from ``app.dependencies`` so that
endpoint modules only need to import from ``app.api.deps``.
"""

from app.dependencies import (
    # Repository factories
    get_lead_repo,
    get_va_repo,
    get_settings_repo,
    get_kpi_repo,
    # Service factories
    get_lead_submission_service,
    get_lead_status_service,
    get_settings_service,
    get_kpi_service,
    get_cache_service,
    # Redis
    get_redis_client,
)

__all__ = [
    "get_lead_repo",
    "get_va_repo",
    "get_settings_repo",
    "get_kpi_repo",
    "get_lead_submission_service",
    "get_lead_status_service",
    "get_settings_service",
    "get_kpi_service",
    "get_cache_service",
    "get_redis_client",
]
