"""Use cases for the payment source picklist."""

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row, TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.application.use_cases.write_guard import guarded_write
from partner_ledger.domain.constants import DEFAULT_PAYMENT_SOURCES
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.services.normalization import normalize_label
from partner_ledger.infrastructure.logging.logger import get_app_logger


class ListPaymentSourcesUseCase:
    """Return the built-in sources followed by stored ones."""

    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(self) -> list[str]:
        labels: list[str] = []
        seen: set[str] = set()
        stored = [
            source.label for source in self._records.fetch_payment_sources()
        ]
        for label in [*DEFAULT_PAYMENT_SOURCES, *stored]:
            key = normalize_label(label)
            if not key or key in seen:
                continue
            seen.add(key)
            labels.append(" ".join(label.split()))
        return labels


class AddPaymentSourceUseCase:
    """Store a new payment source label."""

    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, label: str | None) -> Row:
        """Insert the label.

        Raises:
            LedgerValidationError: If the label is blank or already known,
                ignoring case and extra whitespace.
        """
        cleaned = " ".join((label or "").split())
        if not cleaned:
            raise LedgerValidationError("Payment source name is required")
        known = ListPaymentSourcesUseCase(
            self._store,
            self._logger,
        ).execute()
        if normalize_label(cleaned) in {normalize_label(x) for x in known}:
            raise LedgerValidationError(
                f"Payment source already exists: {cleaned}"
            )
        with guarded_write(self._store, self._logger, "add payment source"):
            row = self._store.insert(
                tables.PAYMENT_SOURCES,
                {"label": cleaned},
            )
        self._logger.info(f"Added payment source {cleaned}")
        return row


class SeedPaymentSourcesUseCase:
    """Store the built-in payment sources missing from the table."""

    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(self) -> list[str]:
        """Insert the missing defaults.

        Returns:
            list[str]: Labels inserted by this run.
        """
        stored = {
            normalize_label(source.label)
            for source in self._records.fetch_payment_sources()
        }
        missing = [
            label
            for label in DEFAULT_PAYMENT_SOURCES
            if normalize_label(label) not in stored
        ]
        with guarded_write(self._store, self._logger, "seed payment sources"):
            for label in missing:
                self._store.insert(tables.PAYMENT_SOURCES, {"label": label})
        self._logger.info(f"Seeded {len(missing)} payment source(s)")
        return missing


__all__ = [
    "ListPaymentSourcesUseCase",
    "AddPaymentSourceUseCase",
    "SeedPaymentSourcesUseCase",
]
