"""CLI adapter to create the record store tables.

This module wires the schema helper to the concrete database adapter and
provides a command-line entry point for preparing a fresh database.
"""

from fincommand.infrastructure.container import build_database_adapter
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.infrastructure.schema import ensure_schema


def main() -> None:
    """Create every missing table."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    try:
        count = ensure_schema(db_adapter)
    finally:
        db_adapter.dispose()
    logger.info(f"Schema ready ({count} tables checked)")
    print(f"Ensured {count} tables in the record store.")


if __name__ == "__main__":  # pragma: no cover
    main()
