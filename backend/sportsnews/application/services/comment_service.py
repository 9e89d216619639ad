"""Application service for reader comments."""

from sportsnews.application.interfaces import CommentRepository
from sportsnews.domain.entities import Comment, User
from sportsnews.domain.exceptions import UnauthenticatedError, ValidationFailedError


class CommentService:
    def __init__(self, repository: CommentRepository):
        self._repository = repository

    async def list_for_article(self, article_id: str) -> list[Comment]:
        return await self._repository.list_for_article(article_id)

    async def count_for_article(self, article_id: str) -> int:
        return await self._repository.count_for_article(article_id)

    async def add_comment(self, article_id: str, user: User | None, content: str) -> Comment:
        """Store a comment by ``user``. Checks run before anything is sent."""
        if user is None:
            raise UnauthenticatedError("commenting")
        if not content or not content.strip():
            raise ValidationFailedError(["content"])
        return await self._repository.create(
            Comment(article_id=article_id, user_id=user.id, content=content)
        )
