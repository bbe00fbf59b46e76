"""In-memory table store used for demos and tests."""

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
import copy
import threading
from typing import Any

from partner_ledger.application.ports.table_store import (
    ErrorCallback,
    Row,
    SuccessCallback,
    TableStorePort,
)
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.infrastructure.store_utils import (
    new_row_id,
    run_with_callbacks,
)


class InMemoryTableStore(TableStorePort):
    """TableStorePort keeping rows in dictionaries.

    Rows are copied on the way in and out, so callers never share state
    with the store. A failing ``transaction()`` block restores the rows
    as they were when the block started. One lock serializes every call,
    and a thread holds it for the whole of its ``transaction()`` block,
    so writes from other threads wait instead of being rolled back.
    """

    def __init__(
        self,
        rows: Mapping[str, Iterable[Mapping[str, Any]]] | None = None,
    ) -> None:
        self._tables: dict[str, list[Row]] = {
            name: [dict(row) for row in table_rows]
            for name, table_rows in (rows or {}).items()
        }
        self._lock = threading.RLock()

    def rows(self, table: str) -> list[Row]:
        """Return a copy of every row of a table."""
        with self._lock:
            return copy.deepcopy(self._tables.get(table, []))

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield
            except BaseException:
                self._tables = snapshot
                raise

    def fetch(
        self,
        table: str,
        *,
        columns: Iterable[str] | None = None,
        match: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        filters = {
            key: value
            for key, value in (match or {}).items()
            if value is not None
        }
        with self._lock:
            selected = copy.deepcopy(
                [
                    row
                    for row in self._tables.get(table, [])
                    if all(
                        row.get(key) == value
                        for key, value in filters.items()
                    )
                ]
            )
        if order_by:
            present = [
                row for row in selected if row.get(order_by) is not None
            ]
            missing = [
                row for row in selected if row.get(order_by) is None
            ]
            present.sort(key=lambda row: row[order_by], reverse=not ascending)
            selected = present + missing
        if columns:
            wanted = list(columns)
            return [
                {name: row.get(name) for name in wanted} for row in selected
            ]
        return selected

    def _find(self, table: str, row_id: str) -> Row:
        for row in self._tables.get(table, []):
            if row.get("id") == row_id:
                return row
        raise RecordNotFoundError(f"No row {row_id} in {table}")

    def insert(
        self,
        table: str,
        record: Mapping[str, Any],
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        def action() -> Row:
            row = dict(record)
            row.setdefault("id", new_row_id())
            self._tables.setdefault(table, []).append(row)
            return dict(row)

        with self._lock:
            return run_with_callbacks(action, on_success, on_error)

    def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        def action() -> Row:
            row = self._find(table, row_id)
            row.update(patch)
            return dict(row)

        with self._lock:
            return run_with_callbacks(action, on_success, on_error)

    def remove(
        self,
        table: str,
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        def action() -> Row:
            rows = self._tables.get(table, [])
            self._tables[table] = [
                row for row in rows if row.get("id") != row_id
            ]
            return {"id": row_id}

        with self._lock:
            run_with_callbacks(action, on_success, on_error)


__all__ = ["InMemoryTableStore"]
