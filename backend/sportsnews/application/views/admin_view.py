"""Admin page view models: the publish form and the article management list."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from enum import Enum

from pydantic import ValidationError

from sportsnews.application.schemas import ArticleCreate
from sportsnews.application.services import ArticleService, NoticeBoard, SessionStateHolder
from sportsnews.application.views.view_scope import ViewScope
from sportsnews.domain.entities import Article, ArticleCategory, ArticleStatus
from sportsnews.domain.exceptions import (
    RemoteOperationFailedError,
    UnauthenticatedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth"
DELETE_PROMPT = "Are you sure you want to delete this article?"

Confirm = Callable[[str], bool | Awaitable[bool]]


class FormState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
    SUBMITTING = "submitting"


@dataclass
class ArticleFormFields:
    """Raw form input, exactly as typed."""

    title: str = ""
    content: str = ""
    image_url: str = ""
    category: str = ArticleCategory.FOOTBALL.value
    author_name: str = ""
    match_date: str = ""
    score: str = ""
    status: str = ArticleStatus.PUBLISHED.value


REQUIRED_FIELDS = ("title", "content", "category", "author_name")


class AdminForm:
    """State machine for the publish form.

    hidden ──open──▶ visible ──submit──▶ submitting ──ok──▶ hidden
                        ▲                    │
                        └──────failed────────┘
    """

    def __init__(self) -> None:
        self.state = FormState.HIDDEN
        self.fields = ArticleFormFields()

    @property
    def is_visible(self) -> bool:
        return self.state != FormState.HIDDEN

    def open(self) -> None:
        if self.state == FormState.HIDDEN:
            self.state = FormState.VISIBLE

    def cancel(self) -> None:
        if self.state == FormState.VISIBLE:
            self.state = FormState.HIDDEN

    def toggle(self) -> None:
        if self.state == FormState.HIDDEN:
            self.open()
        else:
            self.cancel()

    def close(self) -> None:
        """Navigating away always ends hidden."""
        self.state = FormState.HIDDEN

    def update(self, **values: str) -> None:
        for name, value in values.items():
            if not hasattr(self.fields, name):
                raise AttributeError(f"Unknown form field '{name}'")
            setattr(self.fields, name, value)

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self.fields, name).strip()]

    def to_create(self) -> ArticleCreate:
        """Validate the input and build the insert payload; nothing is sent here."""
        missing = self.missing_fields()
        if missing:
            raise ValidationFailedError(missing)
        try:
            return ArticleCreate.model_validate(asdict(self.fields))
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            raise ValidationFailedError(fields, f"Invalid value for: {', '.join(fields)}") from exc

    def begin_submit(self) -> None:
        if self.state != FormState.VISIBLE:
            raise RuntimeError(f"Cannot submit a form that is {self.state.value}")
        self.state = FormState.SUBMITTING

    def submit_succeeded(self) -> None:
        self.fields = ArticleFormFields()
        self.state = FormState.HIDDEN

    def submit_failed(self) -> None:
        """Back to editing with every field kept."""
        self.state = FormState.VISIBLE


class AdminView:
    """Article management page, only usable with a signed-in user."""

    def __init__(
        self,
        *,
        articles: ArticleService,
        session: SessionStateHolder,
        notices: NoticeBoard,
        scope: ViewScope | None = None,
    ) -> None:
        self._articles = articles
        self._session = session
        self._notices = notices
        self._scope = scope or ViewScope()

        self.form = AdminForm()
        self.articles: list[Article] = []
        self.loading = True
        self.redirect_to: str | None = None

    async def mount(self) -> None:
        await self._session.ready()
        if self._session.user is None:
            self.redirect_to = SIGN_IN_PATH
            return
        self.loading = False
        await self.refresh()

    async def unmount(self) -> None:
        self.form.close()
        await self._scope.close()

    async def refresh(self) -> None:
        await self._scope.gather(self._fetch())

    async def _fetch(self) -> None:
        try:
            articles = await self._articles.list_all()
        except RemoteOperationFailedError as exc:
            logger.error("Error fetching admin article list: %s", exc)
            return
        if self._scope.alive:
            self.articles = articles

    def _require_session(self) -> bool:
        try:
            self._session.require_user("managing articles")
        except UnauthenticatedError as exc:
            self._notices.error(str(exc))
            self.redirect_to = SIGN_IN_PATH
            return False
        return True

    async def submit(self) -> Article | None:
        """Publish the form's article. Returns it on success, None otherwise."""
        if self.form.state != FormState.VISIBLE or not self._require_session():
            return None

        try:
            payload = self.form.to_create()
        except ValidationFailedError as exc:
            self._notices.error(str(exc))
            return None

        self.form.begin_submit()
        try:
            article = await self._articles.create_article(payload)
        except RemoteOperationFailedError:
            self.form.submit_failed()
            self._notices.error("Could not create the article")
            return None

        if not self._scope.alive:
            return article
        self._notices.success("Article published!")
        self.form.submit_succeeded()
        await self.refresh()
        return article

    async def delete(self, article_id: str, confirm: Confirm) -> bool:
        """Delete after an explicit confirmation. Returns True when deleted."""
        if not self._require_session():
            return False

        answer = confirm(DELETE_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        try:
            await self._articles.delete_article(article_id)
        except RemoteOperationFailedError:
            self._notices.error("Could not delete the article")
            return False

        if self._scope.alive:
            self._notices.success("Article deleted!")
            await self.refresh()
        return True
