"""Database engine and session handling for the board's PostgreSQL database."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import Session, sessionmaker

# Shown in pg_stat_activity so reminder runs are easy to spot
APPLICATION_NAME = "taskboard-reminders"


def get_database_url() -> str | URL:
    """Resolve the database URL.

    DATABASE_URL wins when set (the board's web app uses the same variable).
    Otherwise the URL is assembled from DATABASE_HOST, DATABASE_PORT,
    DATABASE_USER, APP_DB_PASSWORD and DATABASE_NAME.

    :returns: The database connection URL.
    :raises KeyError: If neither DATABASE_URL nor DATABASE_HOST/APP_DB_PASSWORD is set.
    """
    url = os.environ.get("DATABASE_URL")
    if url:
        return url

    return URL.create(
        "postgresql+psycopg2",
        username=os.environ.get("DATABASE_USER", "app"),
        password=os.environ["APP_DB_PASSWORD"],
        host=os.environ["DATABASE_HOST"],
        port=int(os.environ.get("DATABASE_PORT", "5432")),
        database=os.environ.get("DATABASE_NAME", "taskboard"),
    )


def create_db_engine(*, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine.

    :param echo: If True, log all SQL statements.
    :returns: A configured SQLAlchemy engine.
    """
    return create_engine(
        get_database_url(),
        echo=echo,
        pool_pre_ping=True,
        connect_args={"application_name": APPLICATION_NAME},
    )


@dataclass
class _DatabaseState:
    engine: Engine | None = field(default=None)
    session_factory: sessionmaker[Session] | None = field(default=None)


_state = _DatabaseState()


def get_engine() -> Engine:
    """Get the process-wide engine, creating it on first use."""
    if _state.engine is None:
        _state.engine = create_db_engine()
    return _state.engine


def get_session_factory() -> sessionmaker[Session]:
    """Get the process-wide session factory, creating it on first use."""
    if _state.session_factory is None:
        _state.session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _state.session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """Open a session that commits on exit and rolls back on error.

    Reminder runs open several short sessions (lease, collection, one per
    delivered message) rather than holding one across the send loop.

    :yields: A database session.
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()

    except Exception:
        session.rollback()
        raise

    finally:
        session.close()
