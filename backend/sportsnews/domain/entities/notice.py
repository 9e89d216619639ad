"""Transient user-visible notices (the site's toasts)."""

from dataclasses import dataclass
from enum import Enum


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str
