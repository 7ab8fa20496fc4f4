"""Outcome of a user command and the shared remote-write policy.

Every mutating command follows the same sequence: the in-memory state is
changed first, the record store is written, and on a store failure the
in-memory change is undone. Deletes are the exception: they only touch the
in-memory state after the store confirmed the removal.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fincommand.domain.errors import RecordStoreError


@dataclass(frozen=True)
class CommandResult:
    """User-facing result of a command.

    Attributes:
        ok: Whether the command was fully applied.
        message: Notice to show the user; empty when nothing needs saying.
    """

    ok: bool
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "CommandResult":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(ok=False, message=message)


def run_remote(
    logger,
    operation: str,
    call: Callable[[], Any],
    revert: Callable[[], None] | None = None,
    success_message: str = "",
    failure_message: str = "",
) -> CommandResult:
    """Run a store write and revert local state when it fails.

    Args:
        logger: Logger used to record the outcome.
        operation: Short name of the command, used in log lines.
        call: Store write to perform.
        revert: Undo for the local change already applied, if any.
        success_message: Notice returned on success.
        failure_message: Notice returned on failure; defaults to the error.

    Returns:
        CommandResult: Outcome of the write.
    """
    try:
        call()
    except RecordStoreError as exc:
        if revert is not None:
            revert()
        logger.error(f"{operation} failed: {exc}")
        return CommandResult.failure(failure_message or str(exc))
    logger.info(f"{operation} succeeded")
    return CommandResult.success(success_message)


__all__ = ["CommandResult", "run_remote"]
