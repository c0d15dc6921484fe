"""Business logic services."""

from .article_service import ArticleService
from .comment_service import CommentService
from .user_service import UserService

__all__ = ["ArticleService", "CommentService", "UserService"]
