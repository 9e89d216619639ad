"""Public article endpoints: the home list, the article page, comments and likes."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sportsnews.application.schemas import (
    ArticleCardResponse,
    ArticleResponse,
    CommentCreate,
    CommentResponse,
    LikeStateResponse,
)
from sportsnews.application.services import (
    ArticleService,
    CommentService,
    LikeToggleSynchronizer,
    NoticeBoard,
    SessionStateHolder,
)
from sportsnews.application.views import ArticleCardView
from sportsnews.domain.entities import ALL_CATEGORIES, PageRequest, User
from sportsnews.domain.exceptions import (
    EntityNotFoundError,
    RemoteOperationFailedError,
    ToggleInFlightError,
    UnauthenticatedError,
    ValidationFailedError,
)
from sportsnews.infrastructure.dependencies import (
    get_article_service,
    get_comment_service,
    get_current_user,
    get_like_synchronizer,
    get_session_holder,
)

router = APIRouter(prefix="/articles", tags=["Articles"])


def _bad_gateway(exc: RemoteOperationFailedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.get("", response_model=list[ArticleCardResponse])
async def list_articles(
    category: str = ALL_CATEGORIES,
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ArticleService = Depends(get_article_service),
    comments: CommentService = Depends(get_comment_service),
    likes: LikeToggleSynchronizer = Depends(get_like_synchronizer),
    session: SessionStateHolder = Depends(get_session_holder),
) -> list[ArticleCardResponse]:
    """Published articles, newest first, each with its like and comment counters."""
    page = PageRequest(limit=limit, offset=offset) if limit is not None else None
    try:
        articles = await service.list_published(category, page=page)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)

    notices = NoticeBoard()
    cards = [
        ArticleCardView(a, likes=likes, comments=comments, session=session, notices=notices)
        for a in articles
    ]
    # A card is listed even when its counters fail to load; a failed counter reads zero.
    await asyncio.gather(*(card.load() for card in cards))

    return [
        ArticleCardResponse(
            **ArticleResponse.model_validate(card.article).model_dump(),
            excerpt=card.excerpt,
            likes_count=card.like_state.count,
            comments_count=card.comments_count,
            liked=card.like_state.liked,
        )
        for card in cards
    ]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


# ── Comments ─────────────────────────────────────────────────────────


@router.get("/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: str,
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    """Comments on an article, newest first, with their author's display name."""
    try:
        comments = await service.list_for_article(article_id)
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.post(
    "/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    article_id: str,
    data: CommentCreate,
    user: User = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    try:
        comment = await service.add_comment(article_id, user, data.content)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)
    return CommentResponse.model_validate(comment, from_attributes=True)


# ── Likes ────────────────────────────────────────────────────────────


@router.get("/{article_id}/likes", response_model=LikeStateResponse)
async def get_like_state(
    article_id: str,
    likes: LikeToggleSynchronizer = Depends(get_like_synchronizer),
    session: SessionStateHolder = Depends(get_session_holder),
) -> LikeStateResponse:
    """Like count for the article and whether the caller has liked it."""
    try:
        state = await likes.load(article_id, session.user)
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)
    return LikeStateResponse.model_validate(state, from_attributes=True)


@router.post("/{article_id}/likes/toggle", response_model=LikeStateResponse)
async def toggle_like(
    article_id: str,
    user: User = Depends(get_current_user),
    likes: LikeToggleSynchronizer = Depends(get_like_synchronizer),
) -> LikeStateResponse:
    """Like the article if the caller has not, unlike it otherwise."""
    try:
        state = await likes.toggle_current(article_id, user)
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except ToggleInFlightError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except RemoteOperationFailedError as e:
        raise _bad_gateway(e)
    return LikeStateResponse.model_validate(state, from_attributes=True)
