"""Notice board — collects the transient messages a handler wants to show the user."""

import logging

from sportsnews.domain.entities import Notice, NoticeLevel

logger = logging.getLogger(__name__)


class NoticeBoard:
    """Append-only list of notices, drained by whoever renders them."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    def push(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self._notices.append(notice)
        log = logger.warning if level == NoticeLevel.ERROR else logger.info
        log("Notice [%s]: %s", level.value, message)
        return notice

    def success(self, message: str) -> Notice:
        return self.push(NoticeLevel.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.push(NoticeLevel.ERROR, message)

    def info(self, message: str) -> Notice:
        return self.push(NoticeLevel.INFO, message)

    @property
    def last(self) -> Notice | None:
        return self._notices[-1] if self._notices else None

    def drain(self) -> list[Notice]:
        """Return and forget every pending notice."""
        notices, self._notices = self._notices, []
        return notices
