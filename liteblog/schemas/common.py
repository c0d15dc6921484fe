"""Pagination helpers shared by list endpoints."""

import math

from pydantic import BaseModel

ARTICLE_PAGE_SIZE = 10
ARTICLE_MAX_PAGE_SIZE = 50
COMMENT_PAGE_SIZE = 20
COMMENT_MAX_PAGE_SIZE = 100
USER_PAGE_SIZE = 20
USER_MAX_PAGE_SIZE = 100


def normalize_page(page: int, page_size: int, default_size: int, max_size: int) -> tuple[int, int]:
    """Clamp paging input: page < 1 becomes 1, an out-of-range size becomes the default."""
    if page < 1:
        page = 1
    if page_size < 1 or page_size > max_size:
        page_size = default_size
    return page, page_size


def total_pages(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


class PageMeta(BaseModel):
    """Paging fields carried by every list response."""
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> dict:
        return {
            "total": total,
            "page": page,
            "page_size": page_size,
            "total_pages": total_pages(total, page_size),
        }
