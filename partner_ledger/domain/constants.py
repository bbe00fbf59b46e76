"""Domain constants for partner splits, payments and debts."""

from decimal import Decimal

DEFAULT_SPLIT_PARTNER = Decimal("0.25")
DEFAULT_SPLIT_OWNER = Decimal("0.75")

# Only completed apps are still owed to the partner; paid apps drop out.
CONTRIBUTING_STATUSES = ("completed",)

PAYMENT_NOTE_PREFIX = "Payment for"

DEBT_KIND_REFERRAL = "referral"
DEBT_KIND_DEPOSIT = "deposit"
DEBT_KINDS = (DEBT_KIND_REFERRAL, DEBT_KIND_DEPOSIT)

DEBT_STATUS_OPEN = "open"
DEBT_STATUS_PARTIAL = "partial"
DEBT_STATUS_SETTLED = "settled"
DEBT_STATUS_PAID_BACK = "paid_back"

SETTLED_STATUS_BY_KIND = {
    DEBT_KIND_REFERRAL: DEBT_STATUS_SETTLED,
    DEBT_KIND_DEPOSIT: DEBT_STATUS_PAID_BACK,
}

BALANCE_STATUS_FILTERS = ("all", "due", "settled", "negative")

DEFAULT_PAYMENT_SOURCES = (
    "Bank transfer",
    "Cash",
    "PayPal",
    "Revolut",
)


__all__ = [
    "DEFAULT_SPLIT_PARTNER",
    "DEFAULT_SPLIT_OWNER",
    "CONTRIBUTING_STATUSES",
    "PAYMENT_NOTE_PREFIX",
    "DEBT_KIND_REFERRAL",
    "DEBT_KIND_DEPOSIT",
    "DEBT_KINDS",
    "DEBT_STATUS_OPEN",
    "DEBT_STATUS_PARTIAL",
    "DEBT_STATUS_SETTLED",
    "DEBT_STATUS_PAID_BACK",
    "SETTLED_STATUS_BY_KIND",
    "BALANCE_STATUS_FILTERS",
    "DEFAULT_PAYMENT_SOURCES",
]
