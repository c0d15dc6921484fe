"""User administration endpoints (admin only).

    GET    /api/admin/users
    GET    /api/admin/users/{user_id}
    PUT    /api/admin/users/{user_id}/status
    PUT    /api/admin/users/{user_id}/membership
    POST   /api/admin/users/{user_id}/roles
    DELETE /api/admin/users/{user_id}/roles/{role_code}
    DELETE /api/admin/users/{user_id}
    GET    /api/admin/roles
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from ..core.auth import AuthContext, require_admin
from ..database import get_db
from ..schemas.common import PageMeta, USER_MAX_PAGE_SIZE, USER_PAGE_SIZE, normalize_page
from ..schemas.user import (
    MembershipUpdate,
    RoleAssignment,
    RoleResponse,
    UserListResponse,
    UserResponse,
    UserStatusUpdate,
)
from ..services import UserService

router = APIRouter(prefix="/api/admin/users", tags=["admin"])
roles_router = APIRouter(prefix="/api/admin/roles", tags=["admin"])


@router.get("", response_model=UserListResponse)
def list_users(
    page: int = Query(1),
    page_size: int = Query(USER_PAGE_SIZE),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    page, page_size = normalize_page(page, page_size, USER_PAGE_SIZE, USER_MAX_PAGE_SIZE)
    users, total = UserService(db).list_users(page, page_size)
    return UserListResponse(
        users=[UserResponse.from_user(u) for u in users],
        **PageMeta.build(total, page, page_size),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return UserResponse.from_user(UserService(db).get_user(user_id))


@router.put("/{user_id}/status", response_model=UserResponse)
def update_status(
    user_id: int,
    body: UserStatusUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    user = UserService(db).update_status(user_id, body.status, current_user_id=auth.user_id)
    return UserResponse.from_user(user)


@router.put("/{user_id}/membership", response_model=UserResponse)
def update_membership(
    user_id: int,
    body: MembershipUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return UserResponse.from_user(UserService(db).update_membership(user_id, body.expire_at))


@router.post("/{user_id}/roles", response_model=UserResponse)
def assign_role(
    user_id: int,
    body: RoleAssignment,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return UserResponse.from_user(UserService(db).assign_role(user_id, body.role_code))


@router.delete("/{user_id}/roles/{role_code}", response_model=UserResponse)
def remove_role(
    user_id: int,
    role_code: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    user = UserService(db).remove_role(user_id, role_code, current_user_id=auth.user_id)
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    UserService(db).delete_user(user_id, current_user_id=auth.user_id)


@roles_router.get("", response_model=List[RoleResponse])
def list_roles(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return UserService(db).list_roles()
