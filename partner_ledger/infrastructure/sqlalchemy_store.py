"""Table store backed by a SQLAlchemy engine."""

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
import threading
from typing import Any, Callable, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection

from partner_ledger.application.ports.database import DatabaseEnginePort
from partner_ledger.application.ports.table_store import (
    ErrorCallback,
    Row,
    SuccessCallback,
    TableStorePort,
)
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.infrastructure.logging.logger import get_app_logger
from partner_ledger.infrastructure.schema import get_table
from partner_ledger.infrastructure.store_utils import (
    new_row_id,
    run_with_callbacks,
)


class SqlAlchemyTableStore(TableStorePort):
    """TableStorePort implementation using SQLAlchemy Core statements.

    Each call runs on its own connection unless the calling thread has a
    ``transaction()`` block open, in which case the thread's calls share
    the block's connection. Other threads never see that connection.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._local = threading.local()

    def _transaction_connection(self) -> Optional[Connection]:
        return getattr(self._local, "connection", None)

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        connection = self._transaction_connection()
        if connection is not None:
            yield connection
            return
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Share one connection and commit only when the block succeeds."""
        if self._transaction_connection() is not None:
            yield
            return
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            self._local.connection = conn
            try:
                yield
            finally:
                self._local.connection = None

    def _write(
        self,
        table: str,
        action: Callable[[], Row],
        on_success: SuccessCallback | None,
        on_error: ErrorCallback | None,
    ) -> Row:
        def report(exc: Exception) -> None:
            self._logger.error(f"Write to {table} failed: {exc!r}")
            if on_error is not None:
                on_error(exc)

        return run_with_callbacks(action, on_success, report)

    def fetch(
        self,
        table: str,
        *,
        columns: Iterable[str] | None = None,
        match: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        """Return rows of a table as dictionaries."""
        definition = get_table(table)
        if columns:
            query = select(*(definition.c[name] for name in columns))
        else:
            query = select(definition)
        for name, value in (match or {}).items():
            if value is not None:
                query = query.where(definition.c[name] == value)
        if order_by:
            column = definition.c[order_by]
            query = query.order_by(
                column.asc() if ascending else column.desc()
            )
        with self._connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [dict(row) for row in rows]

    def _fetch_by_id(self, conn: Connection, table: str, row_id: str) -> Row:
        definition = get_table(table)
        row = conn.execute(
            select(definition).where(definition.c.id == row_id)
        ).mappings().first()
        if row is None:
            raise RecordNotFoundError(f"No row {row_id} in {table}")
        return dict(row)

    def insert(
        self,
        table: str,
        record: Mapping[str, Any],
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        """Insert a row, generating its id when missing."""

        def action() -> Row:
            payload = dict(record)
            payload.setdefault("id", new_row_id())
            with self._connect() as conn:
                conn.execute(insert(get_table(table)).values(**payload))
                return self._fetch_by_id(conn, table, payload["id"])

        return self._write(table, action, on_success, on_error)

    def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Row:
        """Update one row and return its new state."""

        def action() -> Row:
            definition = get_table(table)
            with self._connect() as conn:
                result = conn.execute(
                    update(definition)
                    .where(definition.c.id == row_id)
                    .values(**dict(patch))
                )
                if result.rowcount == 0:
                    raise RecordNotFoundError(
                        f"No row {row_id} in {table}"
                    )
                return self._fetch_by_id(conn, table, row_id)

        return self._write(table, action, on_success, on_error)

    def remove(
        self,
        table: str,
        row_id: str,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Delete one row; deleting a missing row is not an error."""

        def action() -> Row:
            definition = get_table(table)
            with self._connect() as conn:
                conn.execute(
                    delete(definition).where(definition.c.id == row_id)
                )
            return {"id": row_id}

        self._write(table, action, on_success, on_error)


__all__ = ["SqlAlchemyTableStore"]
