"""Shared fixtures for the test suite."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from fincommand.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from fincommand.infrastructure.schema import ensure_schema


@pytest.fixture
def sqlite_db():
    """Return a database adapter over a fresh in-memory SQLite schema."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    adapter = SqlAlchemyDatabaseEngineAdapter(engine=engine)
    ensure_schema(adapter)
    yield adapter
    adapter.dispose()
