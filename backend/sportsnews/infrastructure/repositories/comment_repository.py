"""Comment repository backed by the remote data gateway."""

from datetime import datetime, timezone
from typing import Any

from sportsnews.application.interfaces import CommentRepository, DataGateway
from sportsnews.domain.entities import Comment, CommentAuthor, Ordering, RowFilter
from sportsnews.infrastructure.repositories._rows import parse_timestamp

COLLECTION = "comments"

# Read-side join: each comment plus the two profile fields used to label it.
COMMENT_WITH_AUTHOR = "*,profiles:user_id(full_name,email)"


class GatewayCommentRepository(CommentRepository):
    """Implements the CommentRepository port on top of any DataGateway."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    @staticmethod
    def _to_author(profile: dict[str, Any] | None) -> CommentAuthor | None:
        if not profile:
            return None
        return CommentAuthor(full_name=profile.get("full_name"), email=profile.get("email"))

    def _to_entity(self, row: dict[str, Any]) -> Comment:
        return Comment(
            id=str(row["id"]),
            article_id=str(row["article_id"]),
            user_id=str(row["user_id"]),
            content=row["content"],
            created_at=parse_timestamp(row.get("created_at")) or datetime.now(timezone.utc),
            author=self._to_author(row.get("profiles")),
        )

    async def list_for_article(self, article_id: str) -> list[Comment]:
        rows = await self._gateway.select(
            COLLECTION,
            columns=COMMENT_WITH_AUTHOR,
            filters=[RowFilter("article_id", article_id)],
            order=Ordering("created_at", descending=True),
        )
        return [self._to_entity(row) for row in rows]

    async def count_for_article(self, article_id: str) -> int:
        return await self._gateway.count(COLLECTION, filters=[RowFilter("article_id", article_id)])

    async def create(self, comment: Comment) -> Comment:
        row = await self._gateway.insert(
            COLLECTION,
            {
                "article_id": comment.article_id,
                "user_id": comment.user_id,
                "content": comment.content,
            },
        )
        return self._to_entity(row)
