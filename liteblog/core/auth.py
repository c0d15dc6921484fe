"""Authentication module: FastAPI dependencies that resolve the current user.

Public interface:
    ``optional_auth`` : AuthContext, or None for a guest. Never raises.
    ``require_auth``  : AuthContext, or 401 (no/invalid token) / 403 (disabled).
    ``require_admin`` : AuthContext, or 403 if the user is not an admin.

The token is read from ``Authorization: Bearer`` first, then from the auth
cookie. Roles and membership are always re-read from the database so that an
admin's changes apply immediately, not at the next login.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import decode_token
from ..database import get_db
from ..exceptions import AuthenticationError, AccountDisabledError, ForbiddenError
from ..services.visibility_policy import Viewer

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity of the current request.

    ``is_admin``/``is_member`` are computed once here; downstream code only
    sees them through ``viewer``.
    """

    user_id: int
    email: str
    roles: tuple = field(default_factory=tuple)
    is_admin: bool = False
    is_member: bool = False
    email_verified: bool = False

    @property
    def viewer(self) -> Viewer:
        return Viewer(is_admin=self.is_admin, is_member=self.is_member)


def viewer_of(auth: Optional[AuthContext]) -> Optional[Viewer]:
    """Viewer for the visibility rules; None stays None (guest)."""
    return auth.viewer if auth is not None else None


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name) or None


def _resolve(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    db: Session,
) -> Optional["User"]:
    """Return the token's user, or None when there is no usable token."""
    from ..models.user import User

    token = _extract_token(request, credentials)
    if token is None:
        return None
    payload = decode_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    if payload is None:
        return None
    return db.query(User).filter(User.id == payload.user_id).first()


def build_auth_context(user) -> AuthContext:
    return AuthContext(
        user_id=user.id,
        email=user.email,
        roles=tuple(user.role_codes),
        is_admin=user.is_admin,
        is_member=user.is_member(),
        email_verified=bool(user.email_verified),
    )


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid token for an active user."""
    user = _resolve(request, credentials, db)
    if user is None:
        raise AuthenticationError("Invalid or missing authentication token")
    if user.is_disabled:
        raise AccountDisabledError()
    return build_auth_context(user)


def optional_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[AuthContext]:
    """Resolve the user if a valid token is present; guests get None.

    Disabled accounts are treated as guests. Never raises.
    """
    user = _resolve(request, credentials, db)
    if user is None:
        return None
    if user.is_disabled:
        logger.info("Disabled user %s treated as guest", user.id)
        return None
    return build_auth_context(user)


def require_admin(
    auth: AuthContext = Depends(require_auth),
) -> AuthContext:
    """Require the authenticated user to be an admin. Raises 403 otherwise."""
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
    return auth
