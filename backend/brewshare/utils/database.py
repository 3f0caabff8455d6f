"""Database connection and session management"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator

from ..config import settings
from ..models.base import Base


def build_engine(url: str):
    """Create an engine; SQLite gets a single shared connection for thread safety"""

    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


# Create database engine
engine = build_engine(settings.DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI

    Yields a database session and ensures it's closed after use.
    """

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Initialize database tables

    Creates all tables defined in models.
    """

    # Import all models to ensure they're registered
    from ..models import User, Friendship, Review, Cheer, Comment  # noqa: F401

    Base.metadata.create_all(bind=engine)
