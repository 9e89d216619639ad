"""Health check plus the settings that shape how likes and auth behave."""

from fastapi import APIRouter

from sportsnews.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Answers without touching Supabase; reports whether it is configured."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "supabase": {
            "url": settings.supabase_url,
            "anon_key_configured": bool(settings.supabase_anon_key),
        },
        "likes": {
            "toggle_policy": settings.like_toggle_policy,
            "optimistic_updates": settings.like_optimistic_updates,
        },
    }
