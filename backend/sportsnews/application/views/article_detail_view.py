"""Article page view model: the article, its comments and the like button."""

import logging

from sportsnews.application.services import (
    ArticleService,
    CommentService,
    LikeToggleSynchronizer,
    NoticeBoard,
    SessionStateHolder,
)
from sportsnews.application.views.like_button import LikeButton
from sportsnews.application.views.view_scope import ViewScope
from sportsnews.domain.entities import Article, Comment, LikeState
from sportsnews.domain.exceptions import EntityNotFoundError, RemoteOperationFailedError

logger = logging.getLogger(__name__)

HOME_PATH = "/"
SIGN_IN_PATH = "/auth"


class ArticleDetailView:
    """View state for a single article.

    On mount the article, its comments and the like state are fetched
    concurrently as scoped tasks, cancelled if the view unmounts first. A
    missing article leaves ``article`` unset, posts an error notice and asks
    for a redirect to the home page.
    """

    def __init__(
        self,
        article_id: str,
        *,
        articles: ArticleService,
        comments: CommentService,
        likes: LikeToggleSynchronizer,
        session: SessionStateHolder,
        notices: NoticeBoard,
        scope: ViewScope | None = None,
    ) -> None:
        self.article_id = article_id
        self._articles = articles
        self._comments = comments
        self._session = session
        self._notices = notices
        self._scope = scope or ViewScope()
        self._like = LikeButton(article_id, likes=likes, notices=notices, scope=self._scope)

        self.article: Article | None = None
        self.comments: list[Comment] = []
        self.comment_draft = ""
        self.loading = True
        self.redirect_to: str | None = None

    # ── Mount / unmount ──────────────────────────────────────────────

    async def mount(self) -> None:
        await self._scope.gather(
            self._load_article(),
            self._load_comments(),
            self._load_like_state(),
        )

    async def unmount(self) -> None:
        await self._scope.close()

    async def _load_article(self) -> None:
        try:
            article = await self._articles.get_article(self.article_id)
        except EntityNotFoundError:
            if self._scope.alive:
                self._notices.error("Article not found")
                self.redirect_to = HOME_PATH
                self.loading = False
            return
        except RemoteOperationFailedError as exc:
            logger.error("Error fetching article %s: %s", self.article_id, exc)
            if self._scope.alive:
                self._notices.error("Could not load the article")
                self.redirect_to = HOME_PATH
                self.loading = False
            return

        if self._scope.alive:
            self.article = article
            self.loading = False

    async def _load_comments(self) -> None:
        try:
            comments = await self._comments.list_for_article(self.article_id)
        except RemoteOperationFailedError as exc:
            logger.warning("Error fetching comments for %s: %s", self.article_id, exc)
            return
        if self._scope.alive:
            self.comments = comments

    async def _load_like_state(self) -> None:
        await self._session.ready()
        await self._like.load(self._session.user)

    @property
    def like_state(self) -> LikeState:
        return self._like.state

    # ── Actions ──────────────────────────────────────────────────────

    async def toggle_like(self) -> None:
        if not self._scope.alive:
            return
        user = self._session.user
        if user is None:
            self._notices.error("You need to sign in to like articles")
            self.redirect_to = SIGN_IN_PATH
            return
        await self._like.toggle(user)

    async def submit_comment(self, content: str | None = None) -> Comment | None:
        """Post ``content`` (or the current draft). Blank text sends nothing."""
        if content is not None:
            self.comment_draft = content

        user = self._session.user
        if user is None:
            self._notices.error("You need to sign in to comment")
            self.redirect_to = SIGN_IN_PATH
            return None
        if not self.comment_draft.strip():
            return None

        try:
            comment = await self._comments.add_comment(self.article_id, user, self.comment_draft)
        except RemoteOperationFailedError:
            if self._scope.alive:
                self._notices.error("Could not add the comment")
            return None

        if not self._scope.alive:
            return comment
        self._notices.success("Comment added!")
        self.comment_draft = ""
        await self._load_comments()
        return comment
