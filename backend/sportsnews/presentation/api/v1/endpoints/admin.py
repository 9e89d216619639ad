"""Article management endpoints — signed-in editors only."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sportsnews.application.schemas import ArticleCreate, ArticleResponse
from sportsnews.application.services import ArticleService
from sportsnews.domain.entities import PageRequest, User
from sportsnews.domain.exceptions import RemoteOperationFailedError
from sportsnews.infrastructure.dependencies import get_article_service, get_current_user

router = APIRouter(
    prefix="/admin/articles",
    tags=["Admin"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[ArticleResponse])
async def list_all_articles(
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Every article, drafts included, newest first."""
    page = PageRequest(limit=limit, offset=offset) if limit is not None else None
    try:
        articles = await service.list_all(page=page)
    except RemoteOperationFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in articles]


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Publish (or save as draft) a new article."""
    try:
        article = await service.create_article(data)
    except RemoteOperationFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID once the caller has confirmed."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion must be confirmed with confirm=true",
        )
    try:
        await service.delete_article(article_id)
    except RemoteOperationFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
