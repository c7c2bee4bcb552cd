"""
Database session management utilities.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from taskvibe.db.base import Base, SessionLocal, engine


@contextmanager
def session_scope(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    """
    Open a database session for one unit of work and always close it.

    Yields:
        SQLAlchemy database session
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register with the metadata
    import taskvibe.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
