"""Article visibility rules: two pure functions.

This is the ONE place where "who may see an article, and how much of it" is
decided. The auth layer reduces a user to a ``Viewer`` (two booleans) once per
request; everything else passes that value in.

Design:
    - Tiers: hidden, public_full, member_full
    - hidden is admin-only and never masked (only admins reach it)
    - public_full is readable by anyone, in full
    - member_full is readable by anyone, in full only for members and admins
    - Unknown tiers fail closed: admin-only and masked
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..models.article import ArticleVisibility


@dataclass(frozen=True)
class Viewer:
    """Authenticated reader, reduced to what the visibility rules need.

    A guest is represented by ``None``, never by a Viewer with both flags off.
    """

    is_admin: bool = False
    is_member: bool = False


def _coerce(visibility: Union[ArticleVisibility, str, None]) -> Optional[ArticleVisibility]:
    if isinstance(visibility, ArticleVisibility):
        return visibility
    try:
        return ArticleVisibility(visibility)
    except ValueError:
        return None


def can_view(visibility: Union[ArticleVisibility, str], viewer: Optional[Viewer]) -> bool:
    """Check whether *viewer* may see the article at all.

    Args:
        visibility: The article's tier (enum or its string value).
        viewer: The current reader, or None for a guest.

    Returns:
        True if the article exists for this viewer, False otherwise.
    """
    tier = _coerce(visibility)
    if tier in (ArticleVisibility.PUBLIC_FULL, ArticleVisibility.MEMBER_FULL):
        return True
    return viewer is not None and viewer.is_admin


def should_mask(visibility: Union[ArticleVisibility, str], viewer: Optional[Viewer]) -> bool:
    """Check whether *viewer* receives a preview instead of the full content.

    Only meaningful after ``can_view`` returned True.
    """
    tier = _coerce(visibility)
    if tier is ArticleVisibility.PUBLIC_FULL or tier is ArticleVisibility.HIDDEN:
        return False
    if tier is ArticleVisibility.MEMBER_FULL:
        return not (viewer is not None and (viewer.is_admin or viewer.is_member))
    return True
