"""Composition root for wiring infrastructure adapters."""

from partner_ledger.application.ports.database import DatabaseEnginePort
from partner_ledger.application.ports.table_store import TableStorePort
from partner_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from partner_ledger.infrastructure.demo_data import build_demo_rows
from partner_ledger.infrastructure.logging.logger import get_app_logger
from partner_ledger.infrastructure.memory_store import InMemoryTableStore
from partner_ledger.infrastructure.settings import (
    BACKEND_MEMORY,
    LedgerSettings,
)
from partner_ledger.infrastructure.sqlalchemy_store import (
    SqlAlchemyTableStore,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_table_store(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> TableStorePort:
    """Return the table store selected by the settings.

    Args:
        settings: Settings to use; read from the environment when omitted.
        db_port: Optional database adapter for the sqlalchemy backend.

    Returns:
        TableStorePort: In-memory store (seeded with demo rows unless
        disabled) or SQLAlchemy store.
    """
    resolved = settings or LedgerSettings.from_env()
    logger = get_app_logger()
    if resolved.backend == BACKEND_MEMORY:
        logger.info("Using the in-memory ledger store")
        return InMemoryTableStore(
            build_demo_rows() if resolved.demo_data else None
        )
    return SqlAlchemyTableStore(
        db_port or build_database_adapter(),
        logger=logger,
    )


__all__ = ["build_database_adapter", "build_table_store"]
