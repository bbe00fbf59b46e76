"""Tests for the shared write guard."""

from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest

from partner_ledger.application.use_cases.write_guard import guarded_write
from partner_ledger.domain.errors import (
    LedgerOperationError,
    LedgerValidationError,
)


class _FakeStore:
    def __init__(self) -> None:
        self.events: list[str] = []

    @contextmanager
    def transaction(self):
        self.events.append("begin")
        try:
            yield
        except Exception:
            self.events.append("rollback")
            raise
        self.events.append("commit")


def test_guarded_write_commits_on_success() -> None:
    store = _FakeStore()

    with guarded_write(store, MagicMock(), "save"):
        pass

    assert store.events == ["begin", "commit"]


def test_guarded_write_wraps_backend_errors() -> None:
    store = _FakeStore()
    logger = MagicMock()

    with pytest.raises(LedgerOperationError) as exc_info:
        with guarded_write(store, logger, "record payment"):
            raise ConnectionError("db down")

    assert str(exc_info.value) == "Failed to record payment. Please try again."
    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert store.events == ["begin", "rollback"]
    logger.error.assert_called_once()


def test_guarded_write_passes_ledger_errors_through() -> None:
    store = _FakeStore()
    logger = MagicMock()

    with pytest.raises(LedgerValidationError, match="bad"):
        with guarded_write(store, logger, "save"):
            raise LedgerValidationError("bad")

    logger.error.assert_not_called()
