"""Helpers shared by the row ↔ entity mappers."""

from datetime import datetime


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse the store's ISO-8601 timestamps (``Z`` suffix included)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
