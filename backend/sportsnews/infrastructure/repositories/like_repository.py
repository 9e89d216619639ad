"""Like repository backed by the remote data gateway."""

from sportsnews.application.interfaces import DataGateway, LikeRepository
from sportsnews.domain.entities import Like, RowFilter

COLLECTION = "likes"


class GatewayLikeRepository(LikeRepository):
    """Implements the LikeRepository port on top of any DataGateway."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def likers(self, article_id: str) -> set[str]:
        rows = await self._gateway.select(
            COLLECTION, columns="user_id", filters=[RowFilter("article_id", article_id)]
        )
        return {str(row["user_id"]) for row in rows}

    async def count_for_article(self, article_id: str) -> int:
        return await self._gateway.count(COLLECTION, filters=[RowFilter("article_id", article_id)])

    async def add(self, like: Like) -> None:
        await self._gateway.insert(COLLECTION, {"article_id": like.article_id, "user_id": like.user_id})

    async def remove(self, like: Like) -> None:
        await self._gateway.delete(
            COLLECTION,
            filters=[RowFilter("article_id", like.article_id), RowFilter("user_id", like.user_id)],
        )
