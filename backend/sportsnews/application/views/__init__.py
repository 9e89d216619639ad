from .admin_view import AdminForm, AdminView, ArticleFormFields, FormState
from .article_detail_view import ArticleDetailView
from .article_list_view import ArticleCardView, ArticleListView
from .like_button import LikeButton
from .navbar_view import NavbarView
from .view_scope import ViewScope

__all__ = [
    "AdminForm",
    "AdminView",
    "ArticleFormFields",
    "FormState",
    "ArticleDetailView",
    "ArticleCardView",
    "ArticleListView",
    "LikeButton",
    "NavbarView",
    "ViewScope",
]
