"""SQLAlchemy declarative base, engine and session handling.

Every request works inside one session: changes are committed when the
request handler returns and rolled back when it raises.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from shared.clock import as_utc
from shared.config import get_settings


class Base(DeclarativeBase):
    pass


class UtcDateTime(TypeDecorator):
    """A timestamp written in UTC and always read back as a UTC-aware datetime.

    SQLite stores no offset, so without this values load naive.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value) if value is not None else None

    def process_result_value(self, value, dialect):
        return as_utc(value) if value is not None else None


SessionFactory = sessionmaker(expire_on_commit=False)

_engine: Engine | None = None


def build_engine(database_uri: str) -> Engine:
    if database_uri.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live and die with a single connection
        if database_uri in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(database_uri, **options)

    return create_engine(database_uri, pool_pre_ping=True)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings().database_uri)
        SessionFactory.configure(bind=_engine)
    return _engine


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    get_engine()
    session = SessionFactory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding the request's session."""
    with session_scope() as session:
        yield session
