"""Database configuration and session management."""

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config.settings import settings

load_dotenv()

# Base class for models
Base = declarative_base()


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create an engine for the catalog database.

    SQLite URLs get a shared single connection for in-memory databases so
    every session sees the same data.
    """
    url = database_url or settings.database_url
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, echo=False, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Initialize database - create all tables."""
    # models must be imported so their tables are registered on Base
    from storefront.infrastructure.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
