"""
Database configuration and session management.

This module sets up SQLAlchemy engine and session factory for PostgreSQL.
"""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

try:
    from .config import get_settings
except ImportError:
    from config import get_settings


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    Connection pool sizing only applies to server databases; SQLite
    engines keep SQLAlchemy's defaults.
    """
    options = {"pool_pre_ping": True, "echo": echo}
    if not database_url.startswith("sqlite"):
        # - pool_size: Number of connections to keep in pool
        # - max_overflow: Number of connections to allow beyond pool_size
        options.update(pool_size=5, max_overflow=10)
    return create_engine(database_url, **options)


_settings = get_settings()

engine = make_engine(_settings.database_url, echo=_settings.sql_debug)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
