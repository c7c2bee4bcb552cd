"""
Entity store backends and the provider that hands one to each request.
"""
import logging
from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional

from sqlalchemy.orm import Session

from taskvibe.core.config import settings
from taskvibe.db.session import session_scope
from taskvibe.storage.base import EntityStore
from taskvibe.storage.memory_store import MemoryStore
from taskvibe.storage.sql_store import SqlAlchemyStore

logger = logging.getLogger(__name__)

StoreProvider = Callable[[], ContextManager[EntityStore]]


def build_store_provider(
    backend: Optional[str] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> StoreProvider:
    """
    Build the callable that opens a store for one request.

    The memory backend shares a single ``MemoryStore`` between all requests
    of the provider; the database backend opens a fresh session per request.
    """
    backend = backend or settings.STORAGE_BACKEND
    logger.info(f"Using {backend} storage backend")

    if backend == "memory":
        store = MemoryStore()

        @contextmanager
        def provide_memory_store() -> Iterator[EntityStore]:
            yield store

        return provide_memory_store

    if backend == "database":

        @contextmanager
        def provide_sql_store() -> Iterator[EntityStore]:
            with session_scope(session_factory) as db:
                yield SqlAlchemyStore(db)

        return provide_sql_store

    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "EntityStore",
    "MemoryStore",
    "SqlAlchemyStore",
    "StoreProvider",
    "build_store_provider",
]
