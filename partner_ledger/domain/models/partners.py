"""Domain models for partners, assignments, splits and partner payments."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Partner:
    """Profit-sharing counterparty.

    Attributes:
        default_split_partner: Default partner fraction (0..1), if stored.
        default_split_owner: Default owner fraction (0..1), if stored.
    """

    id: str
    name: str
    default_split_partner: Decimal | None
    default_split_owner: Decimal | None
    contact_info: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ClientPartnerAssignment:
    """Link between a client and a partner with optional split overrides."""

    id: str
    client_id: str
    partner_id: str
    split_partner_override: Decimal | None = None
    split_owner_override: Decimal | None = None
    notes: str | None = None
    assigned_at: datetime | None = None

    @property
    def has_override(self) -> bool:
        """Return True when either split fraction is overridden."""
        return (
            self.split_partner_override is not None
            or self.split_owner_override is not None
        )


@dataclass(frozen=True)
class PartnerAppSplit:
    """Split override scoped to a (partner, app) pair."""

    id: str
    partner_id: str
    app_id: str
    split_partner: Decimal
    split_owner: Decimal
    notes: str | None = None


@dataclass(frozen=True)
class PartnerPayment:
    """Aggregate payment from the business to a partner."""

    id: str
    partner_id: str
    amount: Decimal
    note: str | None
    paid_at: datetime | None


@dataclass(frozen=True)
class PartnerAppPayment:
    """Per-app audit record of a partner payment.

    Attributes:
        partner_payment_id: Aggregate payment settling this row, when known.
    """

    id: str
    partner_id: str
    client_id: str
    client_app_id: str
    amount: Decimal
    note: str | None = None
    paid_at: datetime | None = None
    partner_payment_id: str | None = None


__all__ = [
    "Partner",
    "ClientPartnerAssignment",
    "PartnerAppSplit",
    "PartnerPayment",
    "PartnerAppPayment",
]
