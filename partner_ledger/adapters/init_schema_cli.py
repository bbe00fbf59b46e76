"""CLI adapter to create the ledger tables.

This module creates any missing table in the database configured through
LEDGER_DB_URL and stores the built-in payment sources.
"""

from partner_ledger.application.use_cases.payment_sources import (
    SeedPaymentSourcesUseCase,
)
from partner_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from partner_ledger.infrastructure.logging.logger import get_app_logger
from partner_ledger.infrastructure.schema import create_schema
from partner_ledger.infrastructure.sqlalchemy_store import (
    SqlAlchemyTableStore,
)


def main() -> None:
    """Create the schema and seed payment sources."""
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()

    created = create_schema(db_adapter.get_ledger_engine())
    logger.info(f"Created tables: {created}")

    store = SqlAlchemyTableStore(db_adapter, logger=logger)
    seeded = SeedPaymentSourcesUseCase(store, logger=logger).execute()

    print(
        f"Created {len(created)} tables and seeded "
        f"{len(seeded)} payment sources."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
