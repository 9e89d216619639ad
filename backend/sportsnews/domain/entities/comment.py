"""Domain entities for reader comments and the author projection joined onto them."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CommentAuthor:
    """Minimal profile projection needed to label a comment.

    Only these two profile fields are read alongside a comment.
    """

    full_name: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Display name, falling back to the contact email."""
        return self.full_name or self.email or "Anonymous"


@dataclass
class Comment:
    """A comment left by an authenticated user on an article."""

    article_id: str
    user_id: str
    content: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    author: CommentAuthor | None = None

    @property
    def author_display_name(self) -> str:
        if self.author is None:
            return "Anonymous"
        return self.author.display_name
