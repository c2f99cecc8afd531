"""
Module: fiscal_kernel.db.engine
Responsibility: SQLAlchemy engine construction, session factories, and the
    transactional scope used by every write to the period status store.
Architecture position: Kernel > DB.  May import from db/base.py.  MUST NOT
    import from services/, selectors/, domain/, or outer layers (except for
    create_tables, which imports models).

Invariants enforced:
    - Engines are owned by the caller (one per PeriodStatusStore) rather than
      held in module globals, so independent stores never share rows.
    - In-memory SQLite uses a single shared connection (StaticPool); every
      session of one engine sees the same database.

Failure modes:
    - sqlalchemy.exc.ArgumentError on a malformed database URL.
    - Any exception raised inside session_scope() rolls back the session and
      is re-raised unchanged.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fiscal_kernel.logging_config import get_logger

logger = get_logger("db.engine")

IN_MEMORY_URL = "sqlite://"


def create_engine_from_url(database_url: str = IN_MEMORY_URL, echo: bool = False) -> Engine:
    """
    Build an engine for the period status store.

    Args:
        database_url: Any SQLAlchemy URL.  ``sqlite://`` (the default) gives a
            private in-memory database.
        echo: If True, log all SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    url = make_url(database_url)
    options: dict = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool

    engine = create_engine(url, **options)
    logger.info(
        "engine_initialized",
        extra={"dialect": engine.dialect.name, "echo": echo},
    )
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to ``engine``; objects survive commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Postconditions: On normal exit, the session is committed and closed.
        On exception, the session is rolled back and closed.  The exception
        is re-raised to the caller.

    Usage:
        with session_scope(factory) as session:
            session.add(entity)
            # Commits on successful exit, rolls back on exception
    """
    session = factory()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    """
    Create every table the fiscal kernel models define.

    Idempotent: existing tables are left untouched.
    """
    from fiscal_kernel.db.base import Base
    import fiscal_kernel.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(engine)
