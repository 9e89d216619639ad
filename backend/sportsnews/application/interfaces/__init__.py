from .article_repository import ArticleRepository
from .auth_gateway import AuthGateway, AuthStateCallback, AuthSubscription
from .comment_repository import CommentRepository
from .data_gateway import DataGateway
from .like_repository import LikeRepository

__all__ = [
    "ArticleRepository",
    "AuthGateway",
    "AuthStateCallback",
    "AuthSubscription",
    "CommentRepository",
    "DataGateway",
    "LikeRepository",
]
