"""User and role repository."""

from typing import Optional

from sqlalchemy.orm import Query

from ..models import Article, User, Role
from ..exceptions import UserNotFoundError, RoleNotFoundError
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    model_class = User
    not_found_error = UserNotFoundError

    def find_by_email(self, email: str) -> Optional[User]:
        return self._base_query().filter(User.email == email).first()

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def find_by_verification_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self._base_query().filter(User.email_verification_token == token).first()

    def list_users(self, page: int, page_size: int) -> tuple[list[User], int]:
        query: Query = self._base_query().order_by(User.id.asc())
        return self.paginate(query, page, page_size)

    def create(self, **fields) -> User:
        db_user = User(**fields)
        self.db.add(db_user)
        self.db.flush()
        return db_user

    def count_authored_articles(self, user_id: int) -> int:
        """Articles written by the user, soft-deleted ones included."""
        return self.db.query(Article).filter(Article.author_id == user_id).count()

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()

    # -- roles --

    def get_role(self, code: str) -> Role:
        """Get role by code. Raises RoleNotFoundError."""
        role = self.db.query(Role).filter(Role.code == code).first()
        if role is None:
            raise RoleNotFoundError(code)
        return role

    def list_roles(self) -> list[Role]:
        return self.db.query(Role).order_by(Role.id.asc()).all()
