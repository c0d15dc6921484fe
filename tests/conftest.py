"""Shared test fixtures for the LiteBlog test suite.

All tests run against an in-memory SQLite database shared through a single
connection. Before each test every table is emptied and the reference data
(roles, default site settings) is seeded again, so tests are fully isolated.
"""

import os

# Point the app at the test database before any app imports.
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ["LOG_FORMAT"] = "text"
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "0")

from datetime import datetime, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from passlib.hash import bcrypt

from liteblog.database import Base, get_db, SessionLocal
from liteblog.main import app
from liteblog.core.config import settings
from liteblog.core.seeder import seed_defaults
from liteblog.core.token_factory import create_token
from liteblog.middleware.request_context import _rate_buckets
from liteblog.models import Article, Role, User
from liteblog.models.article import ARTICLE_STATUS_DRAFT, ARTICLE_STATUS_PUBLISHED

TEST_PASSWORD = "password123"
# Hashing is slow on purpose; do it once for every user the factory creates.
_TEST_PASSWORD_HASH = bcrypt.hash(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Empty every table and re-seed roles/settings before each test.

    Runs before the test (not after) so failures leave data for debugging.
    """
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        seed_defaults(db)
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    _rate_buckets.clear()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(
    db,
    email: str = "reader@example.com",
    roles: tuple = ("user",),
    verified: bool = True,
    member_expire_at: Optional[datetime] = None,
    status: int = 0,
) -> User:
    """Create and commit a user holding *roles*; password is TEST_PASSWORD."""
    user = User(
        email=email,
        password_hash=_TEST_PASSWORD_HASH,
        email_verified=verified,
        member_expire_at=member_expire_at,
        status=status,
        roles=db.query(Role).filter(Role.code.in_(roles)).all(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token = create_token(
        user_id=user.id,
        email=user.email,
        roles=user.role_codes,
        secret=settings.jwt_secret_key,
    )
    return {"Authorization": f"Bearer {token}"}


def make_article(
    db,
    author: User,
    slug: str = "hello-world",
    content: str = "Hello world.",
    visibility: str = "public_full",
    published: bool = True,
    **overrides,
) -> Article:
    """Create and commit an article directly, bypassing the service."""
    fields = dict(
        title=slug.replace("-", " ").title(),
        slug=slug,
        content=content,
        author_id=author.id,
        visibility=visibility,
        status=ARTICLE_STATUS_PUBLISHED if published else ARTICLE_STATUS_DRAFT,
        published_at=datetime.now(timezone.utc) if published else None,
    )
    fields.update(overrides)
    article = Article(**fields)
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


@pytest.fixture()
def admin(db) -> User:
    return make_user(db, email="admin@example.com", roles=("admin",))


@pytest.fixture()
def admin_headers(admin) -> dict:
    return auth_headers(admin)


def article_payload(
    title: str = "Test Article",
    slug: str = "test-article",
    content: str = "# Test\n\nHello world.",
    **overrides,
) -> dict:
    """Factory for admin article creation payloads."""
    payload = {
        "title": title,
        "slug": slug,
        "content": content,
        "visibility": "public_full",
    }
    payload.update(overrides)
    return payload
