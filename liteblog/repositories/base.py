"""Base repository with shared get-by-ID and pagination patterns.

Subclasses specify model_class, id_column and not_found_error; the base
provides get_by_id / get_by_id_optional and a paginate() helper that returns
``(items, total)``.

Override _base_query() to apply default filters (e.g., soft-delete
exclusion in ArticleRepository).
"""

from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import BlogException

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Article)
        id_column:       Name of the primary-key column (default "id")
        not_found_error: Exception class to raise from get_by_id
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[BlogException]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        """Base query for get_by_id / get_by_id_optional.

        Override in subclasses to apply default filters
        (e.g., soft-delete exclusion).
        """
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: int) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_by_id_optional(self, entity_id: int) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        col = getattr(self.model_class, self.id_column)
        return self._base_query().filter(col == entity_id).first()

    @staticmethod
    def paginate(query: Query, page: int, page_size: int) -> tuple[list, int]:
        """Run *query* for one page. ``page`` is 1-based."""
        total = query.order_by(None).count()
        items = query.offset((page - 1) * page_size).limit(page_size).all()
        return items, total
