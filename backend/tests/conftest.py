"""Shared fixtures: fake ports, a signed-in user and article seeding."""

from typing import Any

import pytest

from sportsnews.domain.entities import Session, User

from fakes import FakeAuthGateway, FakeDataGateway


# ── Fixtures ──


@pytest.fixture
def gateway() -> FakeDataGateway:
    return FakeDataGateway()


@pytest.fixture
def user() -> User:
    return User(id="u1", email="reader@example.com")


@pytest.fixture
def signed_in_auth(user: User) -> FakeAuthGateway:
    return FakeAuthGateway(Session(access_token="token-u1", user=user))


@pytest.fixture
def signed_out_auth() -> FakeAuthGateway:
    return FakeAuthGateway()


@pytest.fixture
def seed_article(gateway: FakeDataGateway):
    """Insert an article row; keyword arguments override the defaults."""

    def _seed(**overrides: Any) -> dict[str, Any]:
        row = {
            "title": "Derby ends level",
            "content": "Both sides scored in the second half.",
            "category": "Football",
            "author_name": "Sam Reporter",
            "status": "published",
        }
        row.update(overrides)
        return gateway.seed("articles", **row)

    return _seed
