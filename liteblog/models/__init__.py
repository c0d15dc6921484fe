"""Database models."""

from .user import User, Role, user_roles
from .article import Article
from .comment import Comment
from .setting import Setting

__all__ = [
    "User", "Role", "user_roles",
    "Article",
    "Comment",
    "Setting",
]
