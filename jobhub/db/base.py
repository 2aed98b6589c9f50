"""Database configuration and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from jobhub.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# Create engine lazily so tests can point settings at their own database
_engine = None
_SessionLocal = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine():
    """Get or create database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")
        if settings.database_url.startswith("sqlite"):
            # Sync handlers run in a threadpool
            _engine = create_engine(
                settings.database_url,
                connect_args={"check_same_thread": False},
            )
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            _engine = create_engine(
                settings.database_url,
                pool_pre_ping=True,  # Test connections before use
                pool_recycle=300,  # Recycle connections after 5 minutes
            )
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def dispose_engine():
    """Drop the cached engine and session factory."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    from jobhub.db import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
