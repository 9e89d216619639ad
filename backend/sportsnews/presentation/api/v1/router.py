"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from sportsnews.presentation.api.v1.endpoints.health import router as health_router
from sportsnews.presentation.api.v1.endpoints.articles import router as articles_router
from sportsnews.presentation.api.v1.endpoints.admin import router as admin_router
from sportsnews.presentation.api.v1.endpoints.auth import router as auth_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(admin_router)
router.include_router(auth_router)
