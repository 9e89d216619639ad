"""Unit tests for the admin form state machine and the admin view."""

import pytest

from sportsnews.application.services import ArticleService, NoticeBoard, SessionStateHolder
from sportsnews.application.views import AdminForm, AdminView, FormState
from sportsnews.domain.entities import ArticleStatus, NoticeLevel
from sportsnews.domain.exceptions import ValidationFailedError
from sportsnews.infrastructure.repositories import GatewayArticleRepository


def _fill(form: AdminForm, **overrides) -> None:
    values = {
        "title": "Buzzer beater",
        "content": "Won it at the horn.",
        "category": "Basketball",
        "author_name": "Jo Writer",
    }
    values.update(overrides)
    form.update(**values)


# ── AdminForm ──


def test_form_starts_hidden_and_toggles():
    form = AdminForm()
    assert form.state == FormState.HIDDEN
    form.toggle()
    assert form.state == FormState.VISIBLE
    form.toggle()
    assert form.state == FormState.HIDDEN


def test_form_defaults():
    fields = AdminForm().fields
    assert fields.category == "Football"
    assert fields.status == "published"


def test_empty_title_is_reported_missing():
    form = AdminForm()
    _fill(form, title="  ")
    assert form.missing_fields() == ["title"]
    with pytest.raises(ValidationFailedError) as exc_info:
        form.to_create()
    assert exc_info.value.fields == ["title"]


def test_invalid_value_becomes_validation_error():
    form = AdminForm()
    _fill(form, category="Cricket")
    with pytest.raises(ValidationFailedError) as exc_info:
        form.to_create()
    assert exc_info.value.fields == ["category"]


def test_unknown_field_is_refused():
    with pytest.raises(AttributeError):
        AdminForm().update(headline="x")


def test_submit_transitions():
    form = AdminForm()
    with pytest.raises(RuntimeError):
        form.begin_submit()

    form.open()
    _fill(form)
    form.begin_submit()
    assert form.state == FormState.SUBMITTING
    form.cancel()
    assert form.state == FormState.SUBMITTING

    form.submit_failed()
    assert form.state == FormState.VISIBLE
    assert form.fields.title == "Buzzer beater"

    form.begin_submit()
    form.submit_succeeded()
    assert form.state == FormState.HIDDEN
    assert form.fields.title == ""


def test_close_always_hides():
    form = AdminForm()
    form.open()
    form.begin_submit()
    form.close()
    assert form.state == FormState.HIDDEN


# ── AdminView ──


@pytest.fixture
def notices() -> NoticeBoard:
    return NoticeBoard()


def _view(gateway, auth, notices) -> tuple[AdminView, SessionStateHolder]:
    session = SessionStateHolder(auth)
    session.start()
    view = AdminView(
        articles=ArticleService(GatewayArticleRepository(gateway)),
        session=session,
        notices=notices,
    )
    return view, session


@pytest.mark.asyncio
async def test_mount_without_session_redirects_to_sign_in(gateway, signed_out_auth, notices):
    view, session = _view(gateway, signed_out_auth, notices)
    await view.mount()
    assert view.redirect_to == "/auth"
    assert gateway.calls == []
    await session.close()


@pytest.mark.asyncio
async def test_mount_lists_every_article(gateway, signed_in_auth, notices, seed_article):
    seed_article(status="draft")
    seed_article()
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    assert view.redirect_to is None
    assert len(view.articles) == 2
    await session.close()


@pytest.mark.asyncio
async def test_empty_title_submit_sends_nothing(gateway, signed_in_auth, notices):
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    view.form.open()
    _fill(view.form, title="")
    calls_before = len(gateway.calls)

    assert await view.submit() is None
    assert len(gateway.calls) == calls_before
    assert notices.last.level == NoticeLevel.ERROR
    assert view.form.state == FormState.VISIBLE
    await session.close()


@pytest.mark.asyncio
async def test_submit_inserts_once_and_refetches_list(gateway, signed_in_auth, notices):
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    view.form.open()
    _fill(view.form, status="draft")

    article = await view.submit()

    assert gateway.calls_for("insert", "articles") == 1
    assert article.status == ArticleStatus.DRAFT
    assert [a.id for a in view.articles] == [article.id]
    assert notices.last.message == "Article published!"
    assert view.form.state == FormState.HIDDEN
    await session.close()


@pytest.mark.asyncio
async def test_submit_failure_keeps_form_input(gateway, signed_in_auth, notices):
    gateway.fail("insert", "articles")
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    view.form.open()
    _fill(view.form)

    assert await view.submit() is None
    assert view.form.state == FormState.VISIBLE
    assert view.form.fields.title == "Buzzer beater"
    assert notices.last.level == NoticeLevel.ERROR
    await session.close()


@pytest.mark.asyncio
async def test_delete_requires_confirmation(gateway, signed_in_auth, notices, seed_article):
    row = seed_article()
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    prompts: list[str] = []

    def decline(prompt: str) -> bool:
        prompts.append(prompt)
        return False

    assert await view.delete(row["id"], decline) is False
    assert gateway.calls_for("delete") == 0
    assert prompts == ["Are you sure you want to delete this article?"]
    await session.close()


@pytest.mark.asyncio
async def test_delete_with_async_confirmation(gateway, signed_in_auth, notices, seed_article):
    row = seed_article()
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()

    async def accept(prompt: str) -> bool:
        return True

    assert await view.delete(row["id"], accept) is True
    assert view.articles == []
    assert notices.last.message == "Article deleted!"
    await session.close()


@pytest.mark.asyncio
async def test_unmount_hides_the_form(gateway, signed_in_auth, notices):
    view, session = _view(gateway, signed_in_auth, notices)
    await view.mount()
    view.form.open()
    await view.unmount()
    assert view.form.state == FormState.HIDDEN
    await session.close()
