# taskvibe/db/base.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from taskvibe.core.config import settings


def build_engine(database_uri: str):
    """Create an engine; SQLite needs cross-thread access for the threadpool."""
    connect_args = {}
    if database_uri.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_uri, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(str(settings.SQLALCHEMY_DATABASE_URI))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
