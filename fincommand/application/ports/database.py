"""Database ports for the finance tracker.

This module defines the application-layer protocol for reaching the record
store engine. Infrastructure implementations own the engine and its pool.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the record store engine."""

    def get_engine(self) -> Engine:
        """Get the engine for the record store.

        Returns:
            Engine: SQLAlchemy engine connected to the hosted Postgres.
        """

    def dispose(self) -> None:
        """Release pooled connections held by the engine."""


__all__ = ["DatabaseEnginePort"]
