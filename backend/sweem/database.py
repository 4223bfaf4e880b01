"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
``settings.DATABASE_URL`` (a local SQLite file `swee.db` by default) and
provides the per-request session dependency plus the `unit_of_work`
helper that services wrap every mutation in.
"""

from contextlib import contextmanager

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session

from .config import settings

_connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=_connect_args)


if settings.is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
        """Turn on FK enforcement; SQLite leaves it off for every new connection."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    Used on application start and by `run_migrations.py`. Existing
    tables are left untouched.
    """
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes, whatever the outcome.
    """
    with Session(engine) as session:
        yield session


@contextmanager
def unit_of_work(session: Session):
    """Commit everything done inside the block exactly once.

    Any exception escaping the block (validation failures, integrity
    errors, cancellation such as KeyboardInterrupt) rolls the session back
    so no partial write is ever persisted.
    """
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
