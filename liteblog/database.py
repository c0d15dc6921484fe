"""Database configuration and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import os

# SQLite by default; any SQLAlchemy URL works (e.g. postgresql://...).
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./liteblog.db")


def is_sqlite() -> bool:
    """Check if the configured database is SQLite."""
    return DATABASE_URL.startswith("sqlite")


def _is_in_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


# Create engine with database-specific tuning.
if is_sqlite():
    _sqlite_kwargs = {"connect_args": {"check_same_thread": False}}
    if _is_in_memory(DATABASE_URL):
        # One shared connection, otherwise every session sees an empty database.
        _sqlite_kwargs["poolclass"] = StaticPool
    engine = create_engine(DATABASE_URL, **_sqlite_kwargs)

    # SQLite defaults foreign_keys to OFF; CASCADE constraints are silently
    # ignored unless enabled on every connection.
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    from .core.config import settings as _db_settings
    engine = create_engine(
        DATABASE_URL,
        pool_size=_db_settings.db_pool_size,
        max_overflow=_db_settings.db_max_overflow,
        pool_timeout=_db_settings.db_pool_timeout,
        pool_recycle=_db_settings.db_pool_recycle,
        pool_pre_ping=True,
    )

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def init_db() -> None:
    """Create any missing tables. Existing tables are left untouched."""
    from . import models  # noqa: F401  # register models on Base.metadata

    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for FastAPI routes to get database session.

    Rolls back the transaction on unhandled exceptions so that the
    connection is returned to the pool in a clean state.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
