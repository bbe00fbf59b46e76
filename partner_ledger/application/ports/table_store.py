"""Ports for reading and writing ledger table rows."""

from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol

Row = dict[str, Any]
SuccessCallback = Callable[[Row], None]
ErrorCallback = Callable[[Exception], None]


class RowFetchPort(Protocol):
    """Port exposing read access to table rows."""

    def fetch(
        self,
        table: str,
        *,
        columns: Iterable[str] | None = None,
        match: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        """Return rows of a table.

        Args:
            table: Table name.
            columns: Columns to return; all columns when omitted.
            match: Equality filters; None values are ignored.
            order_by: Optional column to sort on.
            ascending: Sort direction.
        """


class RowMutationPort(Protocol):
    """Port exposing write access to table rows.

    Callbacks run after a successful write, or with the exception before it
    is re-raised.
    """

    def insert(
        self,
        table: str,
        record: Mapping[str, Any],
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        """Insert a row and return it with its generated id."""

    def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        """Update the row with the given id and return it."""

    def remove(
        self,
        table: str,
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Delete the row with the given id."""

    def transaction(self) -> AbstractContextManager[None]:
        """Group writes so that they are all applied or none is."""


class TableStorePort(RowFetchPort, RowMutationPort, Protocol):
    """Port combining row reads and writes."""


__all__ = [
    "Row",
    "SuccessCallback",
    "ErrorCallback",
    "RowFetchPort",
    "RowMutationPort",
    "TableStorePort",
]
