"""Like toggle synchronizer — keeps a viewer's liked flag and count in step with the store.

A toggle is a check-then-write against a shared remote relation with no
transaction around it. Two toggles for the same (article, user) issued
before the first settles could both be applied and push the displayed count
away from the real row count, so every toggle runs under an in-flight guard
keyed by that pair.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

from sportsnews.application.interfaces import LikeRepository
from sportsnews.domain.entities import Like, LikeKey, LikeState, User
from sportsnews.domain.exceptions import ToggleInFlightError, UnauthenticatedError

logger = logging.getLogger(__name__)

TogglePolicy = Literal["reject", "queue"]


class InFlightGuard:
    """At most one outstanding operation per key.

    ``reject``: a second caller for a held key gets ``ToggleInFlightError``.
    ``queue``:  a second caller waits and runs once the first has finished.
    Keys with no holder and no waiter are dropped from the mapping.
    """

    def __init__(self, policy: TogglePolicy = "reject") -> None:
        if policy not in ("reject", "queue"):
            raise ValueError(f"Unknown in-flight policy: {policy!r}")
        self._policy = policy
        self._locks: dict[LikeKey, asyncio.Lock] = {}
        self._users: dict[LikeKey, int] = {}

    @property
    def policy(self) -> TogglePolicy:
        return self._policy

    def is_held(self, key: LikeKey) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @property
    def active_keys(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: LikeKey) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        if lock.locked() and self._policy == "reject":
            raise ToggleInFlightError(key.article_id, key.user_id)

        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                self._locks.pop(key, None)


class LikeToggleSynchronizer:
    """Reads and toggles the (article, user) like relation for one viewer.

    Without ``optimistic`` the local delta is applied only once the store has
    confirmed the write. With it, the delta shows immediately and is rolled
    back if the write fails.
    """

    def __init__(
        self,
        likes: LikeRepository,
        guard: InFlightGuard | None = None,
        *,
        optimistic: bool = False,
    ) -> None:
        self._likes = likes
        self._guard = guard or InFlightGuard()
        self._optimistic = optimistic

    async def load(self, article_id: str, user: User | None) -> LikeState:
        """Initial state from a single read of the article's likers.

        Count and flag come from the same response, so they agree with each
        other. A failed read raises instead of reporting "not liked".
        """
        likers = await self._likes.likers(article_id)
        return LikeState(
            article_id=article_id,
            liked=user is not None and user.id in likers,
            count=len(likers),
            loaded=True,
        )

    async def count(self, article_id: str) -> int:
        return await self._likes.count_for_article(article_id)

    async def toggle(self, state: LikeState, user: User | None) -> LikeState:
        """Flip the relation for ``user`` and move ``state`` accordingly.

        A state that was never loaded (or whose load failed) is read from the
        store first, under the same guard, so the flip starts from real values.

        Raises UnauthenticatedError (nothing sent), ToggleInFlightError
        (reject policy), or the repository's error after restoring ``state``.
        """
        if user is None:
            raise UnauthenticatedError("liking an article")

        like = Like(article_id=state.article_id, user_id=user.id)
        async with self._guard.hold(like.key):
            if not state.loaded:
                await self._reload(state, user)
            return await self._apply(state, like)

    async def toggle_current(self, article_id: str, user: User | None) -> LikeState:
        """Read the relation and flip it, both under the guard.

        For callers holding no state of their own: a queued toggle then acts
        on what the previous one left behind.
        """
        if user is None:
            raise UnauthenticatedError("liking an article")

        like = Like(article_id=article_id, user_id=user.id)
        async with self._guard.hold(like.key):
            state = await self.load(article_id, user)
            return await self._apply(state, like)

    async def _reload(self, state: LikeState, user: User) -> None:
        try:
            fresh = await self.load(state.article_id, user)
        except Exception as exc:
            state.mark_failed(str(exc))
            raise
        state.liked, state.count, state.loaded = fresh.liked, fresh.count, True

    async def _apply(self, state: LikeState, like: Like) -> LikeState:
        target = not state.liked
        state.mark_pending(target if self._optimistic else None)
        try:
            if target:
                await self._likes.add(like)
            else:
                await self._likes.remove(like)
        except asyncio.CancelledError:
            state.mark_failed("cancelled")
            raise
        except Exception as exc:
            state.mark_failed(str(exc))
            logger.warning(
                "Like toggle failed for article %s by %s: %s", like.article_id, like.user_id, exc
            )
            raise

        state.mark_settled(target)
        logger.debug(
            "Like toggle settled: article=%s user=%s liked=%s count=%d",
            like.article_id,
            like.user_id,
            state.liked,
            state.count,
        )
        return state
