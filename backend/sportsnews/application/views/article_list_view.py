"""Home page view models: the filtered article list and its cards."""

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
from sportsnews.domain.entities import ALL_CATEGORIES, CATEGORY_FILTERS, Article, LikeState
from sportsnews.domain.exceptions import RemoteOperationFailedError, ValidationFailedError

logger = logging.getLogger(__name__)


class ArticleListView:
    """Published articles, newest first, narrowed by the selected category.

    Fetch failures are only logged: the list is emptied and ``load_failed``
    is set, but no notice is shown.
    """

    categories = CATEGORY_FILTERS

    def __init__(self, articles: ArticleService, scope: ViewScope | None = None) -> None:
        self._articles = articles
        self._scope = scope or ViewScope()
        self._generation = 0
        self.category: str = ALL_CATEGORIES
        self.articles: list[Article] = []
        self.loading = True
        self.load_failed = False

    async def mount(self) -> None:
        await self.refresh()

    async def unmount(self) -> None:
        await self._scope.close()

    async def select_category(self, category: str) -> None:
        if category not in CATEGORY_FILTERS:
            raise ValidationFailedError(["category"], f"Unknown category '{category}'")
        self.category = category
        await self.refresh()

    async def refresh(self) -> None:
        # Only the most recently started fetch may write the list.
        self._generation += 1
        await self._scope.gather(self._fetch(self.category, self._generation))

    async def _fetch(self, category: str, generation: int) -> None:
        self.loading = True
        try:
            articles = await self._articles.list_published(category)
        except RemoteOperationFailedError as exc:
            logger.error("Error fetching articles (category=%s): %s", category, exc)
            if self._scope.alive and generation == self._generation:
                self.articles = []
                self.load_failed = True
                self.loading = False
            return

        if self._scope.alive and generation == self._generation:
            self.articles = articles
            self.load_failed = False
            self.loading = False


class ArticleCardView:
    """One card on the home page: counters plus an inline like button."""

    def __init__(
        self,
        article: Article,
        *,
        likes: LikeToggleSynchronizer,
        comments: CommentService,
        session: SessionStateHolder,
        notices: NoticeBoard,
        scope: ViewScope | None = None,
    ) -> None:
        self.article = article
        self._comments = comments
        self._session = session
        self._notices = notices
        self._scope = scope or ViewScope()
        self._like = LikeButton(str(article.id), likes=likes, notices=notices, scope=self._scope)
        self.comments_count = 0

    @property
    def excerpt(self) -> str:
        return self.article.excerpt()

    @property
    def like_state(self) -> LikeState:
        return self._like.state

    async def load(self) -> None:
        await self._scope.gather(self._load_like_state(), self._load_comments_count())

    async def _load_like_state(self) -> None:
        await self._session.ready()
        await self._like.load(self._session.user)

    async def _load_comments_count(self) -> None:
        article_id = str(self.article.id)
        try:
            comments_count = await self._comments.count_for_article(article_id)
        except RemoteOperationFailedError as exc:
            logger.warning("Could not count comments for article %s: %s", article_id, exc)
            return
        if self._scope.alive:
            self.comments_count = comments_count

    async def toggle_like(self) -> None:
        if not self._scope.alive:
            return
        user = self._session.user
        if user is None:
            self._notices.error("You need to sign in to like articles")
            return
        await self._like.toggle(user)

    async def unmount(self) -> None:
        await self._scope.close()
