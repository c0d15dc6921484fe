"""API routes."""

from .auth_routes import router as auth_router
from .articles import router as articles_router, admin_router as admin_articles_router
from .comments import router as comments_router, admin_router as admin_comments_router
from .settings import router as settings_router, admin_router as admin_settings_router
from .users import router as admin_users_router, roles_router as admin_roles_router

__all__ = [
    "auth_router",
    "articles_router",
    "admin_articles_router",
    "comments_router",
    "admin_comments_router",
    "settings_router",
    "admin_settings_router",
    "admin_users_router",
    "admin_roles_router",
]
