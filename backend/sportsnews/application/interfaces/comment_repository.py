"""Abstract interface for comment persistence."""

from abc import ABC, abstractmethod

from sportsnews.domain.entities import Comment


class CommentRepository(ABC):
    """Port for comments and their joined author projection."""

    @abstractmethod
    async def list_for_article(self, article_id: str) -> list[Comment]:
        """Comments for an article, newest first, each with ``author`` populated."""
        ...

    @abstractmethod
    async def count_for_article(self, article_id: str) -> int:
        ...

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...
