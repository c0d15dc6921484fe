"""User and Role models.

Users authenticate with email/password and receive JWT tokens. Roles are a
small fixed set (guest, user, member, admin) attached through ``user_roles``.
Membership can also be granted for a period via ``member_expire_at``.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Table, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

# Role codes
ROLE_GUEST = "guest"
ROLE_USER = "user"
ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"

ROLE_NAMES = {
    ROLE_GUEST: "Guest",
    ROLE_USER: "User",
    ROLE_MEMBER: "Member",
    ROLE_ADMIN: "Administrator",
}

# User status values
USER_STATUS_ACTIVE = 0
USER_STATUS_DISABLED = 1


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class Role(Base):
    """Named role. Codes are seeded on startup and never renamed."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class User(Base):
    """User account.

    Roles:
        admin:  manages articles, comments, users and site settings
        member: reads member_full articles in full
        user:   default role for registered accounts
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Email verification
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verification_token = Column(String(64), nullable=True, index=True)
    email_verification_expire_at = Column(DateTime(timezone=True), nullable=True)
    email_verification_sent_at = Column(DateTime(timezone=True), nullable=True)

    # Time-boxed membership, independent of the member role
    member_expire_at = Column(DateTime(timezone=True), nullable=True)

    status = Column(Integer, nullable=False, default=USER_STATUS_ACTIVE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    roles = relationship("Role", secondary=user_roles, lazy="selectin")

    @property
    def role_codes(self) -> list[str]:
        return [role.code for role in self.roles]

    def has_role(self, code: str) -> bool:
        return any(role.code == code for role in self.roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    @property
    def is_disabled(self) -> bool:
        return self.status == USER_STATUS_DISABLED

    def is_member(self, now: Optional[datetime] = None) -> bool:
        """Member role, or a membership expiry still in the future."""
        if self.has_role(ROLE_MEMBER):
            return True
        expire_at = as_utc(self.member_expire_at)
        if expire_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now < expire_at
