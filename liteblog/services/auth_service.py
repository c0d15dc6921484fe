"""Authentication service: registration, login and email verification.

All password operations use bcrypt via passlib. Passwords are never stored
or logged in plaintext. Endpoints are thin wrappers around these functions.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..core.config import settings
from ..exceptions import (
    AccountDisabledError,
    AuthenticationError,
    EmailExistsError,
    InvalidTokenError,
    TooManyRequestsError,
    UserNotFoundError,
    ValidationError,
)
from ..models.user import ROLE_USER, USER_STATUS_ACTIVE, User, as_utc
from ..repositories import UserRepository
from .email_service import EmailService

logger = logging.getLogger(__name__)

# NIST SP 800-63B recommends at least 8 characters.
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

# 32 random bytes, URL-safe base64 (43 chars).
VERIFICATION_TOKEN_BYTES = 32


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _issue_verification_token(user: User, now: datetime) -> str:
    token = secrets.token_urlsafe(VERIFICATION_TOKEN_BYTES)
    user.email_verification_token = token
    user.email_verification_expire_at = now + timedelta(minutes=settings.verification_token_minutes)
    user.email_verification_sent_at = now
    return token


def register_user(db: Session, email: str, password: str) -> User:
    """Create a new account with the default ``user`` role.

    The account starts unverified; a verification email is sent.

    Raises ValidationError on bad input, EmailExistsError if the email is taken.
    """
    email = email.strip().lower()
    if not email or "@" not in email:
        raise ValidationError("Valid email address required", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 8 characters", field="password")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError("Password must be at most 128 characters", field="password")

    repo = UserRepository(db)
    if repo.exists_by_email(email):
        raise EmailExistsError(email)

    user = User(
        email=email,
        password_hash=bcrypt.hash(password),
        email_verified=False,
        status=USER_STATUS_ACTIVE,
        roles=[repo.get_role(ROLE_USER)],
    )
    token = _issue_verification_token(user, _now())
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    EmailService(db).send_verification_email(user.email, token)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Validate credentials and return the user.

    Raises AuthenticationError on unknown email or wrong password,
    AccountDisabledError if the account is disabled.
    """
    email = email.strip().lower()
    user = UserRepository(db).find_by_email(email)

    if user is None:
        raise AuthenticationError("Invalid email or password")
    if user.is_disabled:
        raise AccountDisabledError()
    if not bcrypt.verify(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    return user


def verify_email(db: Session, token: str) -> User:
    """Mark the token's owner as verified. Raises InvalidTokenError."""
    user = UserRepository(db).find_by_verification_token(token.strip() if token else "")
    if user is None:
        raise InvalidTokenError()

    expire_at = as_utc(user.email_verification_expire_at)
    if expire_at is not None and _now() > expire_at:
        raise InvalidTokenError()

    user.email_verified = True
    user.email_verification_token = None
    user.email_verification_expire_at = None
    db.commit()
    db.refresh(user)
    logger.info("Verified email for user %s", user.id)
    return user


def resend_verification(db: Session, user_id: int) -> None:
    """Issue a fresh token and send it again.

    Raises ValidationError if already verified, TooManyRequestsError when the
    previous email went out less than VERIFICATION_RESEND_SECONDS ago.
    """
    user = UserRepository(db).get_by_id_optional(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    if user.email_verified:
        raise ValidationError("Email already verified", field="email")

    now = _now()
    sent_at = as_utc(user.email_verification_sent_at)
    if sent_at is not None:
        elapsed = (now - sent_at).total_seconds()
        if elapsed < settings.verification_resend_seconds:
            raise TooManyRequestsError(
                retry_after=max(1, int(settings.verification_resend_seconds - elapsed))
            )

    token = _issue_verification_token(user, now)
    db.commit()
    EmailService(db).send_verification_email(user.email, token)
