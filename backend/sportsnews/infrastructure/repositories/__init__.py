from .article_repository import GatewayArticleRepository
from .comment_repository import GatewayCommentRepository
from .like_repository import GatewayLikeRepository

__all__ = [
    "GatewayArticleRepository",
    "GatewayCommentRepository",
    "GatewayLikeRepository",
]
