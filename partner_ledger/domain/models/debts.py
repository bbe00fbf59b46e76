"""Domain models for debts and debt payments."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Debt:
    """Referral-link or deposit debt.

    Referral debts are owed between clients; deposit debts are always owed
    to the business, so ``creditor_client_id`` is None for them.
    """

    id: str
    kind: str
    amount: Decimal
    status: str
    created_at: datetime | None = None
    description: str | None = None
    assignee: str | None = None
    creditor_client_id: str | None = None
    debtor_client_id: str | None = None
    referral_link_id: str | None = None
    client_app_id: str | None = None
    deposit_source: str | None = None


@dataclass(frozen=True)
class DebtPayment:
    """One payment applied against a debt."""

    id: str
    debt_kind: str
    debt_id: str
    amount: Decimal
    paid_at: datetime | None = None
    notes: str | None = None
    recipient: str | None = None


@dataclass(frozen=True)
class DebtAmounts:
    """Derived debt figures; never persisted."""

    base_amount: Decimal
    paid_amount: Decimal
    surplus: Decimal
    total_amount: Decimal
    remaining_amount: Decimal


@dataclass(frozen=True)
class DebtView:
    """Debt joined with display names and derived amounts."""

    debt: Debt
    amounts: DebtAmounts
    creditor_name: str
    debtor_name: str


@dataclass(frozen=True)
class PaymentSource:
    """Suggested recipient label for debt payments."""

    id: str | None
    label: str


__all__ = [
    "Debt",
    "DebtPayment",
    "DebtAmounts",
    "DebtView",
    "PaymentSource",
]
