"""Fixtures for endpoint tests: the real app with its ports swapped for fakes."""

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from sportsnews.application.services import InFlightGuard
from sportsnews.domain.entities import Session
from sportsnews.infrastructure.dependencies import (
    get_access_token,
    get_auth_gateway,
    get_data_gateway,
    get_like_guard,
)
from sportsnews.main import app

from fakes import EDITOR, EDITOR_TOKEN, FakeAuthGateway


@pytest.fixture
def guard() -> InFlightGuard:
    return InFlightGuard("reject")


@pytest.fixture
def api(gateway, guard):
    """AsyncClient bound to the app; bearer token ``token-u1`` resolves to EDITOR."""

    def auth_override(access_token: str | None = Depends(get_access_token)) -> FakeAuthGateway:
        session = Session(access_token=EDITOR_TOKEN, user=EDITOR) if access_token == EDITOR_TOKEN else None
        return FakeAuthGateway(session, credentials={EDITOR.email: ("secret", EDITOR)})

    app.dependency_overrides[get_data_gateway] = lambda: gateway
    app.dependency_overrides[get_auth_gateway] = auth_override
    app.dependency_overrides[get_like_guard] = lambda: guard
    transport = ASGITransport(app=app)
    yield AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.clear()
