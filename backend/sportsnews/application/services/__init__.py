from .article_service import ArticleService
from .comment_service import CommentService
from .like_toggle import InFlightGuard, LikeToggleSynchronizer
from .notices import NoticeBoard
from .session_state import SessionStateHolder

__all__ = [
    "ArticleService",
    "CommentService",
    "InFlightGuard",
    "LikeToggleSynchronizer",
    "NoticeBoard",
    "SessionStateHolder",
]
