"""Shared wrapper for use cases that write to the table store."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from partner_ledger.application.ports.table_store import RowMutationPort
from partner_ledger.domain.errors import LedgerError, LedgerOperationError


def utc_now() -> datetime:
    """Return the current UTC timestamp used for paid_at columns."""
    return datetime.now(timezone.utc)


@contextmanager
def guarded_write(
    store: RowMutationPort,
    logger,
    action: str,
) -> Iterator[None]:
    """Run writes in one transaction and map failures to user messages.

    Args:
        store: Store whose transaction groups the writes.
        logger: Logger receiving the failure details.
        action: Short description, e.g. "mark apps as paid".

    Raises:
        LedgerOperationError: If any write fails; every write of the block
            is rolled back.
    """
    try:
        with store.transaction():
            yield
    except LedgerError:
        raise
    except Exception as exc:
        logger.error(f"Failed to {action}: {exc!r}")
        raise LedgerOperationError(
            f"Failed to {action}. Please try again."
        ) from exc


__all__ = ["guarded_write", "utc_now"]
