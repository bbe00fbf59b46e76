"""Helpers shared by the table store implementations."""

from typing import Callable
import uuid

from partner_ledger.application.ports.table_store import (
    ErrorCallback,
    Row,
    SuccessCallback,
)


def new_row_id() -> str:
    """Return a fresh primary key value."""
    return str(uuid.uuid4())


def run_with_callbacks(
    action: Callable[[], Row],
    on_success: SuccessCallback | None,
    on_error: ErrorCallback | None,
) -> Row:
    """Run a write and report its outcome through optional callbacks.

    Args:
        action: Write to run, returning the affected row.
        on_success: Called with the row after the write.
        on_error: Called with the exception before it is re-raised.

    Returns:
        Row: The row returned by ``action``.
    """
    try:
        row = action()
    except Exception as exc:
        if on_error is not None:
            on_error(exc)
        raise
    if on_success is not None:
        on_success(row)
    return row


__all__ = ["new_row_id", "run_with_callbacks"]
