"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv

from partner_ledger.infrastructure.logging.logger import get_app_logger

BACKEND_SQLALCHEMY = "sqlalchemy"
BACKEND_MEMORY = "memory"
BACKENDS = (BACKEND_SQLALCHEMY, BACKEND_MEMORY)

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for selecting the ledger backend.

    Attributes:
        backend: Store identifier (sqlalchemy or memory).
        db_url: SQLAlchemy URL of the ledger database, if configured.
        currency: Currency code shown next to amounts.
        demo_data: Whether the in-memory store starts with sample rows.
    """

    backend: str = BACKEND_MEMORY
    db_url: Optional[str] = None
    currency: str = "EUR"
    demo_data: bool = True

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables and a local .env file.

        Returns:
            LedgerSettings: Settings sourced from environment variables.

        Raises:
            RuntimeError: If LEDGER_BACKEND names an unknown backend, or the
                sqlalchemy backend is selected without LEDGER_DB_URL.
        """
        dotenv.load_dotenv()
        db_url = (os.getenv("LEDGER_DB_URL") or "").strip() or None
        default_backend = BACKEND_SQLALCHEMY if db_url else BACKEND_MEMORY
        backend = (
            os.getenv("LEDGER_BACKEND") or default_backend
        ).strip().lower()
        if backend not in BACKENDS:
            raise RuntimeError(f"Unsupported LEDGER_BACKEND: {backend}")
        if backend == BACKEND_SQLALCHEMY and db_url is None:
            raise RuntimeError("Missing environment variable: LEDGER_DB_URL")
        if backend == BACKEND_MEMORY and db_url is not None:
            get_app_logger().warning(
                "LEDGER_DB_URL is set but LEDGER_BACKEND=memory; "
                "changes will not be persisted"
            )
        currency = (os.getenv("LEDGER_CURRENCY") or "EUR").strip().upper()
        raw_demo = (os.getenv("LEDGER_DEMO_DATA") or "true").strip().lower()
        return cls(
            backend=backend,
            db_url=db_url,
            currency=currency,
            demo_data=raw_demo not in _FALSE_VALUES,
        )


__all__ = [
    "LedgerSettings",
    "BACKEND_SQLALCHEMY",
    "BACKEND_MEMORY",
]
