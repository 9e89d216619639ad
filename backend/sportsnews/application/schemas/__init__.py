from .article import ArticleCardResponse, ArticleCreate, ArticleResponse
from .auth import SessionResponse, SignInRequest, UserResponse
from .comment import CommentCreate, CommentResponse
from .like import LikeStateResponse

__all__ = [
    "ArticleCardResponse",
    "ArticleCreate",
    "ArticleResponse",
    "SessionResponse",
    "SignInRequest",
    "UserResponse",
    "CommentCreate",
    "CommentResponse",
    "LikeStateResponse",
]
