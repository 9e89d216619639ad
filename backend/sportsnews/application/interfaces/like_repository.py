"""Abstract interface for the (article, user) like relation."""

from abc import ABC, abstractmethod

from sportsnews.domain.entities import Like


class LikeRepository(ABC):
    """Port for like rows. The like count is always derived from these rows."""

    @abstractmethod
    async def likers(self, article_id: str) -> set[str]:
        """Ids of every user who likes the article, read in a single request."""
        ...

    @abstractmethod
    async def count_for_article(self, article_id: str) -> int:
        ...

    @abstractmethod
    async def add(self, like: Like) -> None:
        ...

    @abstractmethod
    async def remove(self, like: Like) -> None:
        ...
