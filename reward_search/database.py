"""Engine and session helpers for the reward flight store."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DEFAULT_DATABASE_URL
from .models import Base

logger = logging.getLogger(__name__)


def create_session_factory(
    db_url: str = DEFAULT_DATABASE_URL,
    *,
    echo: bool = False,
    connect_args: Dict[str, object] | None = None,
) -> Tuple[Engine, sessionmaker[Session]]:
    """Return an engine/session factory pair.

    PostgreSQL engines run at REPEATABLE READ so the count and page reads of a
    search see one snapshot. SQLite keeps its default isolation.
    """

    engine_kwargs: Dict[str, object] = {"echo": echo, "future": True}
    if db_url.startswith("sqlite"):
        final_connect_args = {"check_same_thread": False}
        if connect_args:
            final_connect_args.update(connect_args)
        if db_url.endswith(":memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        final_connect_args = dict(connect_args or {})
        engine_kwargs["pool_pre_ping"] = True
    if db_url.startswith("postgresql"):
        engine_kwargs["isolation_level"] = "REPEATABLE READ"

    engine = create_engine(db_url, connect_args=final_connect_args, **engine_kwargs)
    logger.info("Created engine for %s", engine.url.render_as_string(hide_password=True))
    session_factory = sessionmaker(bind=engine, expire_on_commit=False, future=True)
    return engine, session_factory


def init_db(db_url: str = DEFAULT_DATABASE_URL, *, echo: bool = False) -> sessionmaker[Session]:
    """Create all tables and return a session factory."""

    engine, session_factory = create_session_factory(db_url, echo=echo)
    Base.metadata.create_all(engine)
    return session_factory


@contextmanager
def read_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Run a series of reads inside one transaction that is always rolled back."""

    with session_factory() as session:
        try:
            yield session
        finally:
            session.rollback()


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of writes."""

    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
