"""Pydantic schemas for API validation."""

from .article import (
    ArticleBase,
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleListItem,
    ArticleListResponse,
)
from .comment import (
    CommentCreate,
    CommentResponse,
    CommentListResponse,
)
from .setting import SiteSettings
from .user import (
    RoleResponse,
    UserResponse,
    UserListResponse,
)

__all__ = [
    "ArticleBase",
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleListItem",
    "ArticleListResponse",
    "CommentCreate",
    "CommentResponse",
    "CommentListResponse",
    "SiteSettings",
    "RoleResponse",
    "UserResponse",
    "UserListResponse",
]
