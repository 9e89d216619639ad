"""Domain entities for likes and the per-viewer like toggle state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class LikeKey(NamedTuple):
    """Identity of a like relation — at most one like per (article, user)."""

    article_id: str
    user_id: str


@dataclass
class Like:
    """A persisted like row."""

    article_id: str
    user_id: str

    @property
    def key(self) -> LikeKey:
        return LikeKey(self.article_id, self.user_id)


class ToggleStatus(str, Enum):
    """Lifecycle of a like toggle for one (article, user) pair."""

    IDLE = "idle"
    PENDING = "pending"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass
class LikeState:
    """What a viewer sees for one article: the liked flag and the like count.

    ``count`` is a derived aggregate (number of like rows for the article),
    never a stored field, so it only ever moves together with ``liked``.

    Transitions: idle/settled/failed → pending → settled | failed. The values
    held when the toggle went pending are restored on failure, which also
    undoes a speculative (optimistic) update.

    ``loaded`` stays False until ``liked`` and ``count`` come from a read of
    the store; until then they are placeholders and must not be toggled from.
    """

    article_id: str
    liked: bool = False
    count: int = 0
    status: ToggleStatus = ToggleStatus.IDLE
    error: str | None = None
    loaded: bool = False
    _before: tuple[bool, int] | None = field(default=None, repr=False, compare=False)

    def _apply(self, liked: bool) -> None:
        if liked != self.liked:
            self.count = self.count + 1 if liked else max(self.count - 1, 0)
        self.liked = liked

    def mark_pending(self, speculative: bool | None = None) -> None:
        """Transition to pending, optionally showing ``speculative`` right away."""
        self._before = (self.liked, self.count)
        self.status = ToggleStatus.PENDING
        self.error = None
        if speculative is not None:
            self._apply(speculative)

    def mark_settled(self, liked: bool) -> None:
        """The remote write succeeded — ``liked`` is now the stored relation."""
        if self._before is not None:
            self.liked, self.count = self._before
            self._before = None
        self._apply(liked)
        self.status = ToggleStatus.SETTLED

    def mark_failed(self, error: str) -> None:
        """The remote write failed — back to the values from before the toggle."""
        if self._before is not None:
            self.liked, self.count = self._before
            self._before = None
        self.status = ToggleStatus.FAILED
        self.error = error
