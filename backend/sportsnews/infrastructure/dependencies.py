"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sportsnews.config import get_settings
from sportsnews.application.interfaces import AuthGateway, DataGateway
from sportsnews.application.services import (
    ArticleService,
    CommentService,
    InFlightGuard,
    LikeToggleSynchronizer,
    SessionStateHolder,
)
from sportsnews.domain.entities import User
from sportsnews.infrastructure.repositories import (
    GatewayArticleRepository,
    GatewayCommentRepository,
    GatewayLikeRepository,
)
from sportsnews.infrastructure.supabase import SupabaseAuthClient, SupabaseRestGateway

# Missing credentials are not an error here; endpoints that need a user
# depend on get_current_user.
bearer_scheme = HTTPBearer(auto_error=False)


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """The pooled client opened in the app lifespan, if there is one."""
    return getattr(request.app.state, "http_client", None)


def get_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


@lru_cache
def get_like_guard() -> InFlightGuard:
    """Process-wide in-flight guard shared by every request's like toggles."""
    return InFlightGuard(policy=get_settings().like_toggle_policy)


def get_data_gateway(
    access_token: str | None = Depends(get_access_token),
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> DataGateway:
    """REST gateway acting with the caller's token so row-level security applies."""
    settings = get_settings()
    return SupabaseRestGateway(
        rest_url=settings.rest_url,
        api_key=settings.supabase_anon_key,
        access_token=access_token,
        http_client=http_client,
        timeout=settings.gateway_timeout,
    )


def get_auth_gateway(
    access_token: str | None = Depends(get_access_token),
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> AuthGateway:
    settings = get_settings()
    return SupabaseAuthClient(
        auth_url=settings.auth_url,
        api_key=settings.supabase_anon_key,
        access_token=access_token,
        http_client=http_client,
        timeout=settings.gateway_timeout,
    )


async def get_session_holder(
    auth: AuthGateway = Depends(get_auth_gateway),
) -> AsyncGenerator[SessionStateHolder, None]:
    """One session holder per request: mounted here, torn down after the response."""
    async with SessionStateHolder(auth) as holder:
        await holder.ready()
        yield holder


async def get_optional_user(
    holder: SessionStateHolder = Depends(get_session_holder),
) -> User | None:
    return holder.user


async def get_current_user(
    holder: SessionStateHolder = Depends(get_session_holder),
) -> User:
    if holder.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return holder.user


async def get_article_service(
    gateway: DataGateway = Depends(get_data_gateway),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    yield ArticleService(GatewayArticleRepository(gateway))


async def get_comment_service(
    gateway: DataGateway = Depends(get_data_gateway),
) -> AsyncGenerator[CommentService, None]:
    yield CommentService(GatewayCommentRepository(gateway))


async def get_like_synchronizer(
    gateway: DataGateway = Depends(get_data_gateway),
    guard: InFlightGuard = Depends(get_like_guard),
) -> AsyncGenerator[LikeToggleSynchronizer, None]:
    """Like toggles for this request, serialised through the shared guard."""
    yield LikeToggleSynchronizer(
        GatewayLikeRepository(gateway),
        guard,
        optimistic=get_settings().like_optimistic_updates,
    )
