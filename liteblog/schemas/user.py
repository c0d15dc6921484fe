"""User and role schemas."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from ..models.user import USER_STATUS_ACTIVE, USER_STATUS_DISABLED
from .common import PageMeta


class RoleResponse(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """User as shown to admins and to the user themselves."""
    id: int
    email: str
    email_verified: bool
    status: int
    roles: List[str]
    is_admin: bool
    is_member: bool
    member_expire_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            email_verified=bool(user.email_verified),
            status=user.status,
            roles=user.role_codes,
            is_admin=user.is_admin,
            is_member=user.is_member(),
            member_expire_at=user.member_expire_at,
            created_at=user.created_at,
        )


class UserListResponse(PageMeta):
    users: List[UserResponse]


class UserStatusUpdate(BaseModel):
    status: int = Field(..., ge=USER_STATUS_ACTIVE, le=USER_STATUS_DISABLED)


class MembershipUpdate(BaseModel):
    """``expire_at = None`` revokes time-boxed membership."""
    expire_at: Optional[datetime] = None


class RoleAssignment(BaseModel):
    role_code: str = Field(..., min_length=1)
