"""Domain models for partner aggregates."""

from dataclasses import dataclass
from decimal import Decimal

from .partners import Partner


@dataclass(frozen=True)
class SplitFractions:
    """Effective split for one app.

    Attributes:
        partner: Fraction of profit owed to the partner.
        owner: Fraction of profit kept by the business.
        source: Which rule produced the split (app, assignment or partner).
    """

    partner: Decimal
    owner: Decimal
    source: str


@dataclass(frozen=True)
class PartnerClientBreakdown:
    """Per-client profit breakdown for a partner."""

    client_id: str
    client_name: str
    total_profit: Decimal
    partner_share: Decimal
    owner_share: Decimal
    split_partner: Decimal
    split_owner: Decimal
    override: bool


@dataclass(frozen=True)
class PartnerBalance:
    """Summary of what a partner earned and was paid.

    A positive balance means the business still owes the partner; a negative
    balance means the partner was overpaid.
    """

    partner_id: str
    total_profit: Decimal
    partner_share: Decimal
    owner_share: Decimal
    total_paid: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthlyPoint:
    """Partner share earned in a calendar month (YYYY-MM)."""

    month: str
    amount: Decimal


@dataclass(frozen=True)
class PartnerSummary:
    """Partner row for the partners list."""

    partner: Partner
    clients_count: int
    balance: PartnerBalance


@dataclass(frozen=True)
class PortfolioTotals:
    """Totals across the listed partners."""

    total_profit: Decimal
    total_partner_share: Decimal
    total_paid: Decimal
    total_balance: Decimal
    total_clients: int


@dataclass(frozen=True)
class PartnerPortfolio:
    """Partner summaries with their totals."""

    summaries: list[PartnerSummary]
    totals: PortfolioTotals


__all__ = [
    "SplitFractions",
    "PartnerClientBreakdown",
    "PartnerBalance",
    "MonthlyPoint",
    "PartnerSummary",
    "PortfolioTotals",
    "PartnerPortfolio",
]
