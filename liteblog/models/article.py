"""Article model."""

from enum import Enum

from sqlalchemy import Column, Index, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

# Article status values
ARTICLE_STATUS_DRAFT = 0
ARTICLE_STATUS_PUBLISHED = 1

DEFAULT_PREVIEW_PERCENTAGE = 30
DEFAULT_PREVIEW_MIN_CHARS = 200


class ArticleVisibility(str, Enum):
    HIDDEN = "hidden"
    PUBLIC_FULL = "public_full"
    MEMBER_FULL = "member_full"


class Article(Base):
    """Blog article.

    ``visibility`` holds one of the ArticleVisibility values; the preview_*
    columns control how much of ``content`` a masked viewer receives.
    """

    __tablename__ = "articles"
    __table_args__ = (
        Index("ix_articles_status_published_at", "status", "published_at"),
        Index("ix_articles_deleted_at", "deleted_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    content = Column(Text, nullable=False)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    author = relationship("User", lazy="joined")

    visibility = Column(String(20), nullable=False, default=ArticleVisibility.MEMBER_FULL.value)
    preview_percentage = Column(Integer, nullable=False, default=DEFAULT_PREVIEW_PERCENTAGE)
    preview_min_chars = Column(Integer, nullable=False, default=DEFAULT_PREVIEW_MIN_CHARS)
    preview_smart_paragraph = Column(Boolean, nullable=False, default=True)

    status = Column(Integer, nullable=False, default=ARTICLE_STATUS_DRAFT)
    published_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Soft delete (NULL = active, timestamp = deleted)
    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)

    comments = relationship("Comment", back_populates="article", cascade="all, delete-orphan")

    @property
    def is_published(self) -> bool:
        return self.status == ARTICLE_STATUS_PUBLISHED and self.published_at is not None

    @property
    def author_email(self):
        return self.author.email if self.author is not None else None
