"""Comment repository for database operations."""

from typing import List

from ..models import Comment
from ..exceptions import CommentNotFoundError
from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for comments. Deleted comments stay as placeholders."""

    model_class = Comment
    not_found_error = CommentNotFoundError

    def create(self, article_id: int, user_id: int, content: str, parent_id: int | None = None) -> Comment:
        db_comment = Comment(
            article_id=article_id,
            user_id=user_id,
            content=content,
            parent_id=parent_id,
        )
        self.db.add(db_comment)
        self.db.flush()
        self.db.refresh(db_comment)
        return db_comment

    def find_by_article(self, article_id: int, page: int, page_size: int) -> tuple[List[Comment], int]:
        """All comments on an article, oldest first."""
        query = (
            self._base_query()
            .filter(Comment.article_id == article_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return self.paginate(query, page, page_size)

    def soft_delete(self, comment_id: int) -> Comment:
        """Replace the comment's text with a placeholder. Raises CommentNotFoundError."""
        db_comment = self.get_by_id(comment_id)
        db_comment.soft_delete()
        self.db.flush()
        return db_comment
