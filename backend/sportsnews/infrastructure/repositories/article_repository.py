"""Concrete repository implementation backed by the remote data gateway."""

from datetime import datetime, timezone
from typing import Any

from sportsnews.application.interfaces import ArticleRepository, DataGateway
from sportsnews.domain.entities import (
    Article,
    ArticleCategory,
    ArticleStatus,
    Ordering,
    PageRequest,
    RowFilter,
)
from sportsnews.infrastructure.repositories._rows import parse_timestamp

COLLECTION = "articles"
NEWEST_FIRST = Ordering("created_at", descending=True)


class GatewayArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port on top of any DataGateway."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    def _to_entity(self, row: dict[str, Any]) -> Article:
        """Map stored row → domain entity."""
        return Article(
            id=str(row["id"]),
            title=row["title"],
            content=row["content"],
            category=ArticleCategory(row["category"]),
            author_name=row["author_name"],
            image_url=row.get("image_url") or None,
            match_date=parse_timestamp(row.get("match_date")),
            score=row.get("score") or None,
            status=ArticleStatus(row.get("status") or ArticleStatus.PUBLISHED.value),
            created_at=parse_timestamp(row.get("created_at")) or datetime.now(timezone.utc),
        )

    def _to_record(self, entity: Article) -> dict[str, Any]:
        """Map domain entity → insert payload (id and created_at are store-assigned)."""
        return {
            "title": entity.title,
            "content": entity.content,
            "image_url": entity.image_url,
            "category": entity.category.value,
            "author_name": entity.author_name,
            "match_date": entity.match_date.isoformat() if entity.match_date else None,
            "score": entity.score,
            "status": entity.status.value,
        }

    async def get_by_id(self, article_id: str) -> Article:
        row = await self._gateway.select_one(COLLECTION, filters=[RowFilter("id", article_id)])
        return self._to_entity(row)

    async def get_all(
        self,
        *,
        status: ArticleStatus | None = None,
        category: ArticleCategory | None = None,
        page: PageRequest | None = None,
    ) -> list[Article]:
        filters: list[RowFilter] = []
        if status is not None:
            filters.append(RowFilter("status", status.value))
        if category is not None:
            filters.append(RowFilter("category", category.value))

        rows = await self._gateway.select(
            COLLECTION, filters=filters, order=NEWEST_FIRST, page=page
        )
        return [self._to_entity(row) for row in rows]

    async def create(self, article: Article) -> Article:
        row = await self._gateway.insert(COLLECTION, self._to_record(article))
        return self._to_entity(row)

    async def delete(self, article_id: str) -> None:
        await self._gateway.delete(COLLECTION, filters=[RowFilter("id", article_id)])
