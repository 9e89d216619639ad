"""Pydantic DTOs for comments."""

from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)

    model_config = {"str_strip_whitespace": True}


class CommentResponse(BaseModel):
    id: str
    article_id: str
    user_id: str
    content: str
    created_at: datetime
    author_display_name: str

    model_config = {"from_attributes": True}
