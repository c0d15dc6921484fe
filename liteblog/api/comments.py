"""Comment API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..core.auth import AuthContext, optional_auth, require_admin, require_auth, viewer_of
from ..database import get_db
from ..schemas.comment import CommentCreate, CommentListResponse, CommentResponse
from ..schemas.common import COMMENT_MAX_PAGE_SIZE, COMMENT_PAGE_SIZE, PageMeta, normalize_page
from ..services import CommentService

router = APIRouter(prefix="/api/comments", tags=["comments"])
admin_router = APIRouter(prefix="/api/admin/comments", tags=["admin"])


@router.get("/article/{article_id}", response_model=CommentListResponse)
def list_comments(
    article_id: int,
    page: int = Query(1),
    page_size: int = Query(COMMENT_PAGE_SIZE),
    db: Session = Depends(get_db),
    auth: Optional[AuthContext] = Depends(optional_auth),
):
    """Comments on an article the reader can see, oldest first."""
    page, page_size = normalize_page(page, page_size, COMMENT_PAGE_SIZE, COMMENT_MAX_PAGE_SIZE)
    comments, total = CommentService(db).list_comments(article_id, viewer_of(auth), page, page_size)
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments],
        **PageMeta.build(total, page, page_size),
    )


@router.post("/article/{article_id}", response_model=CommentResponse, status_code=201)
def create_comment(
    article_id: int,
    body: CommentCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Post a comment or a reply. Requires a verified email."""
    comment = CommentService(db).create_comment(article_id, auth, body.content, body.parent_id)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=204)
def delete_own_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    CommentService(db).delete_own_comment(comment_id, auth.user_id)


@admin_router.delete("/{comment_id}", status_code=204)
def admin_delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    CommentService(db).delete_comment(comment_id)
