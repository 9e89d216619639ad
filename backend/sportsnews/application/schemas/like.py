"""Pydantic DTOs for the like toggle."""

from pydantic import BaseModel

from sportsnews.domain.entities import ToggleStatus


class LikeStateResponse(BaseModel):
    """The caller's view of an article's likes after a read or a toggle."""

    article_id: str
    liked: bool
    count: int
    status: ToggleStatus

    model_config = {"from_attributes": True}
