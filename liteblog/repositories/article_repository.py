"""Article repository for database operations.

Owns all article query logic including soft-delete filtering.
Every read query uses _base_query() to exclude soft-deleted articles,
so callers never need to think about the deleted_at column.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Query

from ..models import Article
from ..models.article import ARTICLE_STATUS_PUBLISHED, ArticleVisibility
from ..exceptions import ArticleNotFoundError
from .base import BaseRepository


class ArticleRepository(BaseRepository[Article]):
    """Repository for article CRUD operations."""

    model_class = Article
    not_found_error = ArticleNotFoundError

    def _base_query(self) -> Query:
        """Exclude soft-deleted articles from all default queries."""
        return self.db.query(Article).filter(Article.deleted_at.is_(None))

    def create(self, **fields) -> Article:
        db_article = Article(**fields)
        self.db.add(db_article)
        self.db.flush()
        self.db.refresh(db_article)
        return db_article

    def update(self, article_id: int, **fields) -> Article:
        """Set the given columns. Raises ArticleNotFoundError."""
        db_article = self.get_by_id(article_id)
        for name, value in fields.items():
            setattr(db_article, name, value)
        self.db.flush()
        self.db.refresh(db_article)
        return db_article

    def soft_delete(self, article_id: int) -> Article:
        """Mark article as deleted. Raises ArticleNotFoundError if already gone."""
        db_article = self.get_by_id(article_id)
        db_article.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
        return db_article

    def find_by_slug(self, slug: str, published_only: bool = True) -> Optional[Article]:
        query = self._base_query().filter(Article.slug == slug)
        if published_only:
            query = query.filter(Article.status == ARTICLE_STATUS_PUBLISHED)
        return query.first()

    def exists_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """Slug uniqueness check. Soft-deleted rows still hold their slug."""
        query = self.db.query(Article.id).filter(Article.slug == slug)
        if exclude_id is not None:
            query = query.filter(Article.id != exclude_id)
        return query.first() is not None

    def find_published(self, page: int, page_size: int) -> tuple[list[Article], int]:
        """Published, non-hidden articles, newest first."""
        query = (
            self._base_query()
            .filter(
                Article.status == ARTICLE_STATUS_PUBLISHED,
                Article.visibility != ArticleVisibility.HIDDEN.value,
            )
            .order_by(Article.published_at.desc(), Article.id.desc())
        )
        return self.paginate(query, page, page_size)

    def find_all(self, page: int, page_size: int) -> tuple[list[Article], int]:
        """Every active article regardless of status or visibility, newest first."""
        query = self._base_query().order_by(Article.created_at.desc(), Article.id.desc())
        return self.paginate(query, page, page_size)

    def count_published(self) -> int:
        return self._base_query().filter(Article.status == ARTICLE_STATUS_PUBLISHED).count()
