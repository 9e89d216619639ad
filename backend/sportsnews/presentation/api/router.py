"""API root: the sports news endpoints are served under ``/api/v1``."""

from fastapi import APIRouter

from sportsnews.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
