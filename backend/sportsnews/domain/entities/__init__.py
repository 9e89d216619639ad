from .article import Article, ArticleCategory, ArticleStatus, ALL_CATEGORIES, CATEGORY_FILTERS
from .comment import Comment, CommentAuthor
from .like import Like, LikeKey, LikeState, ToggleStatus
from .notice import Notice, NoticeLevel
from .query import Ordering, PageRequest, RowFilter
from .user import AuthChangeEvent, Session, User

__all__ = [
    "Article",
    "ArticleCategory",
    "ArticleStatus",
    "ALL_CATEGORIES",
    "CATEGORY_FILTERS",
    "Comment",
    "CommentAuthor",
    "Like",
    "LikeKey",
    "LikeState",
    "ToggleStatus",
    "Notice",
    "NoticeLevel",
    "Ordering",
    "PageRequest",
    "RowFilter",
    "AuthChangeEvent",
    "Session",
    "User",
]
