"""Article service: deep module for article lifecycle and rendering.

``render_article`` is the single place where an article record becomes what a
reader sees. It is pure: no database access, no logging. ``ArticleService``
wraps it with persistence, slug rules and publishing.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ..exceptions import ArticleNotFoundError, InvalidSlugError, SlugExistsError
from ..models import Article
from ..models.article import ARTICLE_STATUS_DRAFT, ARTICLE_STATUS_PUBLISHED
from ..repositories import ArticleRepository
from ..schemas.article import (
    ArticleCreate,
    ArticleListItem,
    ArticleResponse,
    ArticleUpdate,
)
from .content_utils import EXCERPT_LENGTH, generate_excerpt
from .preview_service import PreviewConfig, generate_preview
from .visibility_policy import Viewer, can_view, should_mask

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_HYPHEN_RUN = re.compile(r"-+")


def _visibility_value(article: Article) -> str:
    return getattr(article.visibility, "value", article.visibility)


def render_article(article: Article, viewer: Optional[Viewer]) -> ArticleResponse:
    """Turn a stored article into the response for *viewer*.

    Raises:
        ArticleNotFoundError: the viewer may not see this article. Same error
            as a missing slug.
    """
    visibility = _visibility_value(article)
    if not can_view(visibility, viewer):
        raise ArticleNotFoundError(article.slug)

    masked = should_mask(visibility, viewer)
    if masked:
        content = generate_preview(article.content, PreviewConfig.from_article(article))
    else:
        content = article.content

    return ArticleResponse(
        id=article.id,
        title=article.title,
        slug=article.slug,
        content=content,
        is_preview=masked,
        author_id=article.author_id,
        author_email=article.author_email,
        visibility=visibility,
        preview_percentage=article.preview_percentage,
        preview_min_chars=article.preview_min_chars,
        preview_smart_paragraph=article.preview_smart_paragraph,
        status=article.status,
        published_at=article.published_at,
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


def normalize_slug(slug: str) -> str:
    """Lowercase, trim, spaces to hyphens, collapse hyphen runs, strip edge hyphens."""
    slug = slug.strip().lower().replace(" ", "-")
    return _HYPHEN_RUN.sub("-", slug).strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_PATTERN.match(slug))


def to_list_item(article: Article) -> ArticleListItem:
    return ArticleListItem(
        id=article.id,
        title=article.title,
        slug=article.slug,
        excerpt=generate_excerpt(article.content, EXCERPT_LENGTH),
        author_id=article.author_id,
        author_email=article.author_email,
        visibility=_visibility_value(article),
        status=article.status,
        published_at=article.published_at,
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


class ArticleService:
    """Deep module for article operations.

    Admin operations work on raw records; reader operations go through
    ``render_article`` so visibility and previews are always applied.
    """

    def __init__(self, db: Session):
        self.db = db
        self.article_repo = ArticleRepository(db)

    def _checked_slug(self, raw: str, exclude_id: Optional[int] = None) -> str:
        slug = normalize_slug(raw)
        if not is_valid_slug(slug):
            raise InvalidSlugError(raw)
        if self.article_repo.exists_by_slug(slug, exclude_id=exclude_id):
            raise SlugExistsError(slug)
        return slug

    @staticmethod
    def _editable_fields(data) -> dict:
        return {
            "title": data.title,
            "content": data.content,
            "visibility": data.visibility.value,
            "preview_percentage": data.preview_percentage,
            "preview_min_chars": data.preview_min_chars,
            "preview_smart_paragraph": data.preview_smart_paragraph,
        }

    def create_article(self, data: ArticleCreate, author_id: int) -> Article:
        """Create a draft. Raises InvalidSlugError or SlugExistsError."""
        slug = self._checked_slug(data.slug)
        article = self.article_repo.create(
            slug=slug,
            author_id=author_id,
            status=ARTICLE_STATUS_DRAFT,
            **self._editable_fields(data),
        )
        self.db.commit()
        self.db.refresh(article)
        logger.info("Created article %s", article.id, extra={"article_id": article.id, "slug": slug})
        return article

    def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        self.article_repo.get_by_id(article_id)
        slug = self._checked_slug(data.slug, exclude_id=article_id)
        article = self.article_repo.update(article_id, slug=slug, **self._editable_fields(data))
        self.db.commit()
        self.db.refresh(article)
        logger.info("Updated article %s", article_id, extra={"article_id": article_id})
        return article

    def publish_article(self, article_id: int) -> Article:
        article = self.article_repo.update(
            article_id,
            status=ARTICLE_STATUS_PUBLISHED,
            published_at=datetime.now(timezone.utc),
        )
        self.db.commit()
        self.db.refresh(article)
        logger.info("Published article %s", article_id, extra={"article_id": article_id})
        return article

    def unpublish_article(self, article_id: int) -> Article:
        article = self.article_repo.update(article_id, status=ARTICLE_STATUS_DRAFT)
        self.db.commit()
        self.db.refresh(article)
        logger.info("Unpublished article %s", article_id, extra={"article_id": article_id})
        return article

    def delete_article(self, article_id: int) -> None:
        self.article_repo.soft_delete(article_id)
        self.db.commit()
        logger.info("Deleted article %s", article_id, extra={"article_id": article_id})

    def get_article(self, article_id: int) -> Article:
        """Raw article for admins. Raises ArticleNotFoundError."""
        return self.article_repo.get_by_id(article_id)

    def get_readable_article(self, article_id: int, viewer: Optional[Viewer]) -> Article:
        """Article record the viewer is allowed to know about.

        Drafts and articles the viewer cannot see raise ArticleNotFoundError.
        """
        article = self.article_repo.get_by_id(article_id)
        is_admin = viewer is not None and viewer.is_admin
        if not is_admin and article.status != ARTICLE_STATUS_PUBLISHED:
            raise ArticleNotFoundError(article_id)
        if not can_view(_visibility_value(article), viewer):
            raise ArticleNotFoundError(article_id)
        return article

    def get_article_by_slug(self, slug: str, viewer: Optional[Viewer]) -> ArticleResponse:
        """Rendered article for a reader; drafts only exist for admins."""
        published_only = not (viewer is not None and viewer.is_admin)
        article = self.article_repo.find_by_slug(slug, published_only=published_only)
        if article is None:
            raise ArticleNotFoundError(slug)
        response = render_article(article, viewer)
        if response.is_preview:
            logger.debug("Serving preview of %s", slug, extra={"article_id": article.id})
        return response

    def list_published(self, page: int, page_size: int) -> tuple[list[ArticleListItem], int]:
        articles, total = self.article_repo.find_published(page, page_size)
        return [to_list_item(a) for a in articles], total

    def list_all(self, page: int, page_size: int) -> tuple[list[ArticleListItem], int]:
        articles, total = self.article_repo.find_all(page, page_size)
        return [to_list_item(a) for a in articles], total
