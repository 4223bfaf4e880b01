import os
import tempfile
from pathlib import Path

import pytest

# Point the app at a throwaway SQLite file before any `sweem` module is imported.
_TEST_DB = Path(tempfile.mkdtemp(prefix="sweem-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB}"
os.environ.setdefault("ENV", "test")

from sqlmodel import SQLModel, Session  # noqa: E402

from sweem.database import create_db_and_tables, engine  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def create_schema():
    """Create all tables once per test session."""
    create_db_and_tables()
    yield


@pytest.fixture(autouse=True)
def clean_data():
    """Empty every table before each test, children first."""
    with engine.begin() as conn:
        for table in reversed(SQLModel.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture
def db_session():
    with Session(engine) as session:
        yield session
