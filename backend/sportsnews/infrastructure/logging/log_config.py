"""Logging setup for the API process.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides levels and, when nothing else has, where records go. Levels are
grouped by concern so the Supabase adapters can be turned up to DEBUG while
httpx request lines stay quiet.

    from sportsnews.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from sportsnews.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# ── Settings field → logger names ───────────────────────────────────

_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_gateway": (
        "sportsnews.infrastructure.supabase",
        "sportsnews.infrastructure.repositories",
    ),
}


def setup_logging() -> dict[str, int]:
    """Apply the configured levels. Returns the level set per logger name ("" is root)."""
    settings = get_settings()
    applied: dict[str, int] = {}

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    applied[""] = root.level

    # Under uvicorn a handler is already installed; plain scripts and tests get stderr.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Log levels: root=%s http=%s uvicorn=%s gateway=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_gateway,
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name to its numeric value; unknown names mean INFO."""
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
