"""Domain models for rows read from client and app tables."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class ClientRow:
    """Row representing a client."""

    id: str
    name: str
    surname: str | None = None

    @property
    def display_name(self) -> str:
        """Return "name surname", or "Unknown" when both are blank."""
        full_name = f"{self.name or ''} {self.surname or ''}".strip()
        return full_name or "Unknown"


@dataclass(frozen=True)
class ClientAppRow:
    """Row representing one piece of work done for a client on an app."""

    id: str
    client_id: str
    app_id: str | None
    profit_us: Decimal
    status: str
    app_name: str | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["ClientRow", "ClientAppRow"]
