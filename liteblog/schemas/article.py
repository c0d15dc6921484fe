"""Article schemas."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List

from ..models.article import (
    ArticleVisibility,
    DEFAULT_PREVIEW_MIN_CHARS,
    DEFAULT_PREVIEW_PERCENTAGE,
)
from .common import PageMeta


class ArticleBase(BaseModel):
    """Fields an admin sets when writing an article."""
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)  # normalized by ArticleService
    content: str = Field(..., min_length=1)
    visibility: ArticleVisibility = ArticleVisibility.MEMBER_FULL
    preview_percentage: int = Field(DEFAULT_PREVIEW_PERCENTAGE, ge=0, le=100)
    preview_min_chars: int = Field(DEFAULT_PREVIEW_MIN_CHARS, ge=0)
    preview_smart_paragraph: bool = True

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v


class ArticleCreate(ArticleBase):
    """Schema for creating an article. New articles start as drafts."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Getting Started",
                    "slug": "getting-started",
                    "content": "# Getting Started\n\nFirst paragraph...\n\nSecond paragraph...",
                    "visibility": "member_full",
                    "preview_percentage": 30,
                    "preview_min_chars": 200,
                    "preview_smart_paragraph": True,
                }
            ]
        }
    }


class ArticleUpdate(ArticleBase):
    """Schema for updating an article (full replacement of editable fields)."""


class ArticleResponse(BaseModel):
    """Article as delivered to a reader.

    ``content`` is either the full body or a preview; ``is_preview`` says which.
    """
    id: int
    title: str
    slug: str
    content: str
    is_preview: bool = False
    author_id: int
    author_email: Optional[str] = None
    visibility: str
    preview_percentage: int
    preview_min_chars: int
    preview_smart_paragraph: bool
    status: int
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArticleListItem(BaseModel):
    """Article summary for list views; never carries the body."""
    id: int
    title: str
    slug: str
    excerpt: str
    author_id: int
    author_email: Optional[str] = None
    visibility: str
    status: int
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ArticleListResponse(PageMeta):
    articles: List[ArticleListItem]
