"""Database engine and session management."""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# SQLite's own lower() only folds ASCII letters
UNICODE_LOWER = "unicode_lower"


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a SQLite engine for the given URL.

    An in-memory URL gets a single shared connection, otherwise every new
    session would see its own empty database. Every connection gets a
    ``unicode_lower`` function matching Python's ``str.lower``.
    """
    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, echo=echo, **kwargs)

    @event.listens_for(engine, "connect")
    def register_functions(dbapi_connection, _connection_record):
        dbapi_connection.create_function(UNICODE_LOWER, 1, _unicode_lower, deterministic=True)

    return engine


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    # Import models to register them with SQLModel
    from spendtrack.models import Transaction  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session(engine: Engine) -> Session:
    """Get a new database session."""
    return Session(engine)
