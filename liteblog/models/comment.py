"""Comment model."""

from sqlalchemy import Column, Index, Integer, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

DELETED_COMMENT_PLACEHOLDER = "[This comment has been deleted]"


class Comment(Base):
    """Comment on an article. ``parent_id`` links a reply to its parent."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_article_created", "article_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True, index=True)

    content = Column(Text, nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    article = relationship("Article", back_populates="comments")
    user = relationship("User", lazy="joined")

    @property
    def user_email(self):
        return self.user.email if self.user is not None else None

    def soft_delete(self) -> None:
        """Keep the row so replies stay attached, but drop the text."""
        self.is_deleted = True
        self.content = DELETED_COMMENT_PLACEHOLDER
