"""Article API endpoints.

Public reads go through ArticleService.get_article_by_slug, which applies the
visibility rules and previews. Admin endpoints work on raw records.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..core.auth import AuthContext, optional_auth, require_admin, viewer_of
from ..database import get_db
from ..schemas.article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
)
from ..schemas.common import ARTICLE_MAX_PAGE_SIZE, ARTICLE_PAGE_SIZE, PageMeta, normalize_page
from ..services import ArticleService

router = APIRouter(prefix="/api/articles", tags=["articles"])
admin_router = APIRouter(prefix="/api/admin/articles", tags=["admin"])


def _paged(page: int, page_size: int) -> tuple[int, int]:
    return normalize_page(page, page_size, ARTICLE_PAGE_SIZE, ARTICLE_MAX_PAGE_SIZE)


def _full(article) -> ArticleResponse:
    """Admin view: the unmasked record."""
    response = ArticleResponse.model_validate(article)
    response.visibility = getattr(article.visibility, "value", article.visibility)
    return response


@router.get("", response_model=ArticleListResponse)
def list_articles(
    page: int = Query(1),
    page_size: int = Query(ARTICLE_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Published, non-hidden articles, newest first. Excerpts only."""
    page, page_size = _paged(page, page_size)
    items, total = ArticleService(db).list_published(page, page_size)
    return ArticleListResponse(articles=items, **PageMeta.build(total, page, page_size))


@router.get("/{slug}", response_model=ArticleResponse)
def get_article(
    slug: str,
    db: Session = Depends(get_db),
    auth: Optional[AuthContext] = Depends(optional_auth),
):
    """Article by slug; a preview when the reader may not see the full text."""
    return ArticleService(db).get_article_by_slug(slug, viewer_of(auth))


# --- Admin ---


@admin_router.get("", response_model=ArticleListResponse)
def admin_list_articles(
    page: int = Query(1),
    page_size: int = Query(ARTICLE_PAGE_SIZE),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    page, page_size = _paged(page, page_size)
    items, total = ArticleService(db).list_all(page, page_size)
    return ArticleListResponse(articles=items, **PageMeta.build(total, page, page_size))


@admin_router.post("", response_model=ArticleResponse, status_code=201)
def create_article(
    body: ArticleCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return _full(ArticleService(db).create_article(body, author_id=auth.user_id))


@admin_router.get("/{article_id}", response_model=ArticleResponse)
def admin_get_article(
    article_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return _full(ArticleService(db).get_article(article_id))


@admin_router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: int,
    body: ArticleUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return _full(ArticleService(db).update_article(article_id, body))


@admin_router.delete("/{article_id}", status_code=204)
def delete_article(
    article_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    ArticleService(db).delete_article(article_id)


@admin_router.post("/{article_id}/publish", response_model=ArticleResponse)
def publish_article(
    article_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return _full(ArticleService(db).publish_article(article_id))


@admin_router.post("/{article_id}/unpublish", response_model=ArticleResponse)
def unpublish_article(
    article_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return _full(ArticleService(db).unpublish_article(article_id))
