"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from sportsnews.domain.entities import Article, ArticleCategory, ArticleStatus, PageRequest


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article:
        """Retrieve a single article. Raises EntityNotFoundError when missing."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        status: ArticleStatus | None = None,
        category: ArticleCategory | None = None,
        page: PageRequest | None = None,
    ) -> list[Article]:
        """Retrieve articles newest first, optionally narrowed by status and category."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> None:
        ...
