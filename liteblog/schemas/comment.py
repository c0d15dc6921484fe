"""Comment schemas."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from .common import PageMeta

COMMENT_MAX_LENGTH = 500


class CommentCreate(BaseModel):
    """Content length is checked after trimming by CommentService."""
    content: str = Field(..., min_length=1)
    parent_id: Optional[int] = None


class CommentResponse(BaseModel):
    id: int
    article_id: int
    user_id: int
    user_email: Optional[str] = None
    parent_id: Optional[int] = None
    content: str
    is_deleted: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CommentListResponse(PageMeta):
    comments: List[CommentResponse]
