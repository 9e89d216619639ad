"""Application service (use case) for Article operations."""

import logging

from sportsnews.application.interfaces import ArticleRepository
from sportsnews.application.schemas import ArticleCreate
from sportsnews.domain.entities import (
    ALL_CATEGORIES,
    Article,
    ArticleCategory,
    ArticleStatus,
    PageRequest,
)
from sportsnews.domain.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    @staticmethod
    def resolve_category(category: str | ArticleCategory | None) -> ArticleCategory | None:
        """Map the list filter value to a category; ``"all"``/None means no narrowing."""
        if category is None or category == ALL_CATEGORIES:
            return None
        if isinstance(category, ArticleCategory):
            return category
        try:
            return ArticleCategory(category)
        except ValueError:
            raise ValidationFailedError(["category"], f"Unknown category '{category}'") from None

    async def list_published(
        self,
        category: str | ArticleCategory | None = None,
        page: PageRequest | None = None,
    ) -> list[Article]:
        """Published articles, newest first. Unbounded unless ``page`` is given."""
        return await self._repository.get_all(
            status=ArticleStatus.PUBLISHED,
            category=self.resolve_category(category),
            page=page,
        )

    async def list_all(self, page: PageRequest | None = None) -> list[Article]:
        """Every article regardless of status — the admin listing."""
        return await self._repository.get_all(page=page)

    async def get_article(self, article_id: str) -> Article:
        return await self._repository.get_by_id(article_id)

    async def create_article(self, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            category=data.category,
            author_name=data.author_name,
            image_url=data.image_url,
            match_date=data.match_date,
            score=data.score,
            status=data.status,
        )
        created = await self._repository.create(article)
        logger.info("Article %s created (%s, %s)", created.id, created.category.value, created.status.value)
        return created

    async def delete_article(self, article_id: str) -> None:
        await self._repository.delete(article_id)
        logger.info("Article %s deleted", article_id)
