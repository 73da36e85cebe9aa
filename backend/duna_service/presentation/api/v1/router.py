"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from duna_service.presentation.api.v1.endpoints.health import router as health_router
from duna_service.presentation.api.v1.endpoints.duna_records import router as duna_records_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(duna_records_router)
