"""Data access repositories."""

from .base import BaseRepository
from .article_repository import ArticleRepository
from .comment_repository import CommentRepository
from .setting_repository import SettingRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ArticleRepository",
    "CommentRepository",
    "SettingRepository",
    "UserRepository",
]
