"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path

import dotenv

from fincommand.domain.constants import DEFAULT_APP_NAME, DEFAULT_EXCHANGE_RATE
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.infrastructure.transactions_repository import (
    DEFAULT_DELETE_BATCH_SIZE,
)
from fincommand.utils.decimal_utils import coerce_decimal
from fincommand.utils.utils import get_project_root


@dataclass(frozen=True)
class FinCommandSettings:
    """Runtime settings of the finance tracker.

    Attributes:
        exchange_rate: Default local units per foreign unit.
        delete_batch_size: Maximum ids per bulk DELETE statement.
        preferences_file: JSON file holding device preferences.
        app_name: Fallback application name.
    """

    exchange_rate: Decimal = DEFAULT_EXCHANGE_RATE
    delete_batch_size: int = DEFAULT_DELETE_BATCH_SIZE
    preferences_file: Path | None = None
    app_name: str = DEFAULT_APP_NAME

    @classmethod
    def from_env(cls) -> "FinCommandSettings":
        """Build settings from environment variables.

        Returns:
            FinCommandSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        return cls(
            exchange_rate=cls._read_rate(logger),
            delete_batch_size=cls._read_batch_size(logger),
            preferences_file=cls._read_preferences_file(),
            app_name=os.getenv("FINCOMMAND_APP_NAME", "").strip()
            or DEFAULT_APP_NAME,
        )

    @staticmethod
    def _read_rate(logger) -> Decimal:
        raw = os.getenv("FINCOMMAND_EXCHANGE_RATE")
        if not raw:
            return DEFAULT_EXCHANGE_RATE
        rate = coerce_decimal(raw)
        if rate <= 0:
            logger.warning(
                f"Ignoring invalid FINCOMMAND_EXCHANGE_RATE={raw!r}"
            )
            return DEFAULT_EXCHANGE_RATE
        return rate

    @staticmethod
    def _read_batch_size(logger) -> int:
        raw = os.getenv("FINCOMMAND_DELETE_BATCH_SIZE")
        if not raw:
            return DEFAULT_DELETE_BATCH_SIZE
        try:
            size = int(raw)
        except ValueError:
            size = 0
        if size <= 0:
            logger.warning(
                f"Ignoring invalid FINCOMMAND_DELETE_BATCH_SIZE={raw!r}"
            )
            return DEFAULT_DELETE_BATCH_SIZE
        return size

    @staticmethod
    def _read_preferences_file() -> Path:
        """Return the preferences path, defaulting under ``data/``."""
        raw = os.getenv("FINCOMMAND_PREFERENCES_FILE")
        if raw:
            return Path(raw).expanduser().resolve()
        return get_project_root() / "data" / "preferences.json"


__all__ = ["FinCommandSettings"]
