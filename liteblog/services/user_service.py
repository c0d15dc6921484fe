"""User administration service.

Admins list users, disable accounts, grant time-boxed membership and manage
roles. Self-lockout is refused: an admin cannot disable or delete their own
account or drop their own admin role.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..models import Role, User
from ..models.user import ROLE_ADMIN, USER_STATUS_DISABLED, as_utc
from ..repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def list_users(self, page: int, page_size: int) -> tuple[list[User], int]:
        return self.user_repo.list_users(page, page_size)

    def get_user(self, user_id: int) -> User:
        return self.user_repo.get_by_id(user_id)

    def update_status(self, user_id: int, status: int, current_user_id: int) -> User:
        if user_id == current_user_id and status == USER_STATUS_DISABLED:
            raise ValidationError("You cannot disable your own account", field="status")
        user = self.user_repo.get_by_id(user_id)
        user.status = status
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s status set to %s", user_id, status, extra={"user_id": user_id})
        return user

    def update_membership(self, user_id: int, expire_at: Optional[datetime]) -> User:
        """Set or clear (None) the membership expiry. Naive datetimes are taken as UTC."""
        user = self.user_repo.get_by_id(user_id)
        user.member_expire_at = as_utc(expire_at)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s membership expiry set", user_id, extra={"user_id": user_id})
        return user

    def assign_role(self, user_id: int, role_code: str) -> User:
        user = self.user_repo.get_by_id(user_id)
        role = self.user_repo.get_role(role_code)
        if not user.has_role(role.code):
            user.roles.append(role)
            self.db.commit()
            self.db.refresh(user)
            logger.info("Role %s assigned to user %s", role_code, user_id, extra={"user_id": user_id})
        return user

    def remove_role(self, user_id: int, role_code: str, current_user_id: int) -> User:
        if user_id == current_user_id and role_code == ROLE_ADMIN:
            raise ValidationError("You cannot remove your own admin role", field="role_code")
        user = self.user_repo.get_by_id(user_id)
        role = self.user_repo.get_role(role_code)
        if user.has_role(role.code):
            user.roles = [r for r in user.roles if r.code != role.code]
            self.db.commit()
            self.db.refresh(user)
            logger.info("Role %s removed from user %s", role_code, user_id, extra={"user_id": user_id})
        return user

    def delete_user(self, user_id: int, current_user_id: int) -> None:
        if user_id == current_user_id:
            raise ValidationError("You cannot delete your own account", field="user_id")
        user = self.user_repo.get_by_id(user_id)
        if self.user_repo.count_authored_articles(user_id):
            raise ValidationError("User has authored articles and cannot be deleted", field="user_id")
        self.user_repo.delete(user)
        self.db.commit()
        logger.info("User %s deleted", user_id, extra={"user_id": user_id})

    def list_roles(self) -> list[Role]:
        return self.user_repo.list_roles()
