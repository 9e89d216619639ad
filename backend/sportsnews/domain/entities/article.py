"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ArticleCategory(str, Enum):
    """Sports an article can be filed under."""

    FOOTBALL = "Football"
    BASKETBALL = "Basketball"
    HANDBALL = "Handball"
    OTHER = "Other"


class ArticleStatus(str, Enum):
    """Publication state of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"


# Value of the list filter that disables category narrowing.
ALL_CATEGORIES = "all"

CATEGORY_FILTERS: tuple[str, ...] = (ALL_CATEGORIES, *(c.value for c in ArticleCategory))


@dataclass
class Article:
    """Core domain entity representing a published (or draft) news article.

    Created by the admin form and never edited afterwards; removed by id.
    """

    title: str
    content: str
    category: ArticleCategory
    author_name: str
    id: str | None = None
    image_url: str | None = None
    match_date: datetime | None = None
    score: str | None = None
    status: ArticleStatus = ArticleStatus.PUBLISHED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_published(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED

    def excerpt(self, length: int = 150) -> str:
        """Card teaser: the first ``length`` characters followed by an ellipsis."""
        return self.content[:length] + "..."
