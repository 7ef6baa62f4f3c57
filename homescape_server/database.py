"""
Store handle for HomeScape. One engine per process, created at import; one session per request
through get_db, so tests (and anything else) can swap the store with a dependency override.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from homescape_server.config import DATABASE_URL
from homescape_server.models import Base


def _make_engine(url: str):
    if url.startswith("sqlite:///:memory:"):
        # One shared connection, otherwise every session sees its own empty database
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    # Handlers run on worker threads; SQLite connections must be allowed to cross them
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    # pre_ping replaces dead pooled connections before use
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the users, homes and bookings tables if missing. Raises SQLAlchemyError when the store is down."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency: a session for the current request, closed when the request ends."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
