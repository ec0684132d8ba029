from fastapi import APIRouter

from app.api.v1.endpoints import leads, vas, settings, kpis, health

router = APIRouter(prefix="/api/v1")

router.include_router(leads.router)
router.include_router(vas.router)
router.include_router(settings.router)
router.include_router(kpis.router)
router.include_router(health.router)
