"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from sportsnews.domain.entities import ArticleCategory, ArticleStatus


class ArticleCreate(BaseModel):
    """Schema for publishing a new article.

    Required text fields are stripped and must not be blank. Optional fields
    submitted as blank strings are stored as absent, not as ``""``.
    """

    title: str = Field(..., min_length=1, max_length=255, examples=["Derby ends level"])
    content: str = Field(..., min_length=1, examples=["Both sides scored in the second half."])
    category: ArticleCategory = Field(..., examples=[ArticleCategory.FOOTBALL])
    author_name: str = Field(..., min_length=1, max_length=120)
    image_url: str | None = Field(None, max_length=2048)
    match_date: datetime | None = None
    score: str | None = Field(None, max_length=20, examples=["2 - 0"])
    status: ArticleStatus = ArticleStatus.PUBLISHED

    model_config = {"str_strip_whitespace": True}

    @field_validator("image_url", "match_date", "score", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    content: str
    category: ArticleCategory
    author_name: str
    image_url: str | None = None
    match_date: datetime | None = None
    score: str | None = None
    status: ArticleStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class ArticleCardResponse(ArticleResponse):
    """List entry: the article plus the counters shown on its card."""

    excerpt: str
    likes_count: int = 0
    comments_count: int = 0
    liked: bool = False
