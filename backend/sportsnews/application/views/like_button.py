"""Like button shared by the home page cards and the article page."""

import logging
from dataclasses import replace

from sportsnews.application.services import LikeToggleSynchronizer, NoticeBoard
from sportsnews.application.views.view_scope import ViewScope
from sportsnews.domain.entities import LikeState, User
from sportsnews.domain.exceptions import RemoteOperationFailedError, ToggleInFlightError

logger = logging.getLogger(__name__)

IN_FLIGHT_NOTICE = "Your previous like is still being saved"


class LikeButton:
    """Liked flag and count for one article inside a mounted view.

    A toggle works on a copy of ``state`` and the copy replaces it once the
    store has answered, so a view that unmounted meanwhile is left as it was.
    Only one toggle runs at a time; a click while ``pending`` shows a notice.
    """

    def __init__(
        self,
        article_id: str,
        *,
        likes: LikeToggleSynchronizer,
        notices: NoticeBoard,
        scope: ViewScope,
    ) -> None:
        self._likes = likes
        self._notices = notices
        self._scope = scope
        self.state = LikeState(article_id=article_id)
        self.pending = False

    async def load(self, user: User | None) -> None:
        article_id = self.state.article_id
        try:
            state = await self._likes.load(article_id, user)
        except RemoteOperationFailedError as exc:
            # Shown as an error state, not as "not liked".
            logger.warning("Error fetching likes for %s: %s", article_id, exc)
            if self._scope.alive and not self.state.loaded:
                self.state.mark_failed(str(exc))
            return

        # A toggle that settled first already holds newer values.
        if self._scope.alive and not self.state.loaded:
            self.state = state

    async def toggle(self, user: User) -> None:
        if self.pending:
            self._notices.info(IN_FLIGHT_NOTICE)
            return

        self.pending = True
        draft = replace(self.state)
        try:
            await self._scope.gather(self._likes.toggle(draft, user))
        except ToggleInFlightError:
            self._notices.info(IN_FLIGHT_NOTICE)
            return
        except RemoteOperationFailedError:
            if self._scope.alive:
                self._notices.error("Could not update the like")
        finally:
            if self._scope.alive:
                self.pending = False

        if self._scope.alive:
            self.state = draft
