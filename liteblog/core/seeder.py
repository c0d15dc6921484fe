"""Seed reference data on startup.

Creates the fixed role set, the default site settings and, when
ADMIN_EMAIL/ADMIN_PASSWORD are configured, the first admin account.
Idempotent: existing rows are never overwritten.
"""

import logging

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..models.user import ROLE_ADMIN, ROLE_NAMES, Role, User

logger = logging.getLogger(__name__)


def seed_roles(db: Session) -> int:
    """Insert missing roles. Returns the number created."""
    existing = {code for (code,) in db.query(Role.code).all()}
    created = 0
    for code, name in ROLE_NAMES.items():
        if code in existing:
            continue
        db.add(Role(code=code, name=name))
        created += 1
        logger.info("Created role: %s", code)
    db.flush()
    return created


def seed_site_settings(db: Session) -> int:
    """Insert default values for site settings that have no row yet."""
    from ..repositories.setting_repository import SettingRepository
    from ..schemas.setting import SiteSettings

    repo = SettingRepository(db)
    created = 0
    for key, value in SiteSettings().model_dump().items():
        if repo.get_by_key(key) is None:
            repo.upsert(key, value)
            created += 1
    if created:
        logger.info("Created %d default site settings", created)
    return created


def seed_admin(db: Session, email: str, password: str) -> bool:
    """Create a pre-verified admin account unless the email is taken.

    Returns:
        True if an account was created.
    """
    email = (email or "").strip().lower()
    if not email or not password:
        logger.debug("ADMIN_EMAIL or ADMIN_PASSWORD not set, skipping admin creation")
        return False

    if db.query(User).filter(User.email == email).first() is not None:
        logger.debug("Admin user %s already exists, skipping creation", email)
        return False

    admin_role = db.query(Role).filter(Role.code == ROLE_ADMIN).one()
    db.add(User(
        email=email,
        password_hash=bcrypt.hash(password),
        email_verified=True,
        roles=[admin_role],
    ))
    db.flush()
    logger.info("Created admin user: %s", email)
    return True


def seed_defaults(db: Session, admin_email: str = "", admin_password: str = "") -> None:
    """Run every seed step in one transaction."""
    seed_roles(db)
    seed_site_settings(db)
    seed_admin(db, admin_email, admin_password)
    db.commit()
