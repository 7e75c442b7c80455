"""
Database session management.

Provides the SQLModel engine and session creation.  The engine is built
on first use so importing this module never opens a connection.
"""

from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from training_analytics.core.config import settings

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,  # Log SQL queries in debug mode
            pool_pre_ping=True,   # Verify connections before using
            pool_size=5,          # Connection pool size
            max_overflow=10       # Max connections beyond pool_size
        )
    return _engine


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session, closed when the generator is exhausted.

    Example:
        for db in get_db():
            store = SqlTrainingStore(db)
    """
    with Session(get_engine()) as session:
        yield session
