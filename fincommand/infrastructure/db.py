"""Database infrastructure for the finance tracker.

This module exposes concrete helpers to create the SQLAlchemy engine
connected to the hosted Postgres record store. It belongs to the
infrastructure layer because it deals with external systems.
"""

import os

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from fincommand.application.ports.database import DatabaseEnginePort

DB_URL_ENV_VAR = "FINCOMMAND_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values in a ``.env`` file are loaded first without overriding the
    process environment.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the record store.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation owning one SQLAlchemy engine.

    The engine is created lazily on first use and released by ``dispose``,
    so its lifetime is bound to the adapter instance.
    """

    def __init__(self, db_url: str | None = None, engine: Engine | None = None):
        """Initialize the adapter.

        Args:
            db_url: Optional explicit URL; read from the environment if unset.
            engine: Optional prebuilt engine, used as-is.
        """
        self._db_url = db_url
        self._engine = engine

    def get_engine(self) -> Engine:
        """Get the engine for the record store.

        Returns:
            Engine: Lazily initialized engine.
        """
        if self._engine is None:
            db_url = self._db_url or _get_env_var(DB_URL_ENV_VAR)
            self._engine = _create_engine(db_url)
        return self._engine

    def dispose(self) -> None:
        """Dispose the engine if one was created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


__all__ = [
    "DB_URL_ENV_VAR",
    "SqlAlchemyDatabaseEngineAdapter",
]
