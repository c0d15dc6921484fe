"""Comment service.

Readers may list and post comments only on articles they can see. Deletion
is soft: the row stays so replies keep their parent, the text is replaced.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..exceptions import (
    EmailNotVerifiedError,
    ForbiddenError,
    ParentCommentNotFoundError,
    ValidationError,
)
from ..models import Comment
from ..repositories import CommentRepository
from ..schemas.comment import COMMENT_MAX_LENGTH
from .article_service import ArticleService
from .visibility_policy import Viewer

logger = logging.getLogger(__name__)

COMMENT_MIN_LENGTH = 1


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.comment_repo = CommentRepository(db)
        self.articles = ArticleService(db)

    def create_comment(
        self,
        article_id: int,
        auth,
        content: str,
        parent_id: Optional[int] = None,
    ) -> Comment:
        """Post a comment as the authenticated user *auth*.

        Raises:
            EmailNotVerifiedError: the user has not verified their email.
            ValidationError: content is empty or longer than 500 characters after trimming.
            ArticleNotFoundError: the article is missing or not visible to the user.
            ParentCommentNotFoundError: parent is missing or on another article.
        """
        if not auth.email_verified:
            raise EmailNotVerifiedError()

        content = (content or "").strip()
        if len(content) < COMMENT_MIN_LENGTH:
            raise ValidationError("Comment cannot be empty", field="content")
        if len(content) > COMMENT_MAX_LENGTH:
            raise ValidationError(
                f"Comment must be at most {COMMENT_MAX_LENGTH} characters", field="content"
            )

        self.articles.get_readable_article(article_id, auth.viewer)

        if parent_id is not None:
            parent = self.comment_repo.get_by_id_optional(parent_id)
            if parent is None or parent.article_id != article_id:
                raise ParentCommentNotFoundError(parent_id)

        comment = self.comment_repo.create(article_id, auth.user_id, content, parent_id)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(
            "Comment %s created on article %s", comment.id, article_id,
            extra={"comment_id": comment.id, "article_id": article_id, "user_id": auth.user_id},
        )
        return comment

    def list_comments(
        self, article_id: int, viewer: Optional[Viewer], page: int, page_size: int
    ) -> tuple[list[Comment], int]:
        self.articles.get_readable_article(article_id, viewer)
        return self.comment_repo.find_by_article(article_id, page, page_size)

    def delete_comment(self, comment_id: int) -> None:
        """Admin delete."""
        self.comment_repo.soft_delete(comment_id)
        self.db.commit()
        logger.info("Comment %s deleted by admin", comment_id, extra={"comment_id": comment_id})

    def delete_own_comment(self, comment_id: int, user_id: int) -> None:
        """Owner delete. Raises ForbiddenError for someone else's comment."""
        comment = self.comment_repo.get_by_id(comment_id)
        if comment.user_id != user_id:
            raise ForbiddenError("You can only delete your own comments")
        self.comment_repo.soft_delete(comment_id)
        self.db.commit()
        logger.info("Comment %s deleted by owner", comment_id, extra={"comment_id": comment_id})
