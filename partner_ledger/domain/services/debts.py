"""Domain services for debt balances."""

from collections.abc import Iterable
from decimal import Decimal

from partner_ledger.domain.constants import (
    DEBT_KIND_DEPOSIT,
    DEBT_KINDS,
    DEBT_STATUS_OPEN,
    DEBT_STATUS_PARTIAL,
    SETTLED_STATUS_BY_KIND,
)
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import Debt, DebtAmounts, DebtPayment
from partner_ledger.domain.services.validation import validate_positive_amount
from partner_ledger.utils.decimal_utils import coerce_decimal


def compute_debt_amounts(
    kind: str,
    base_amount: Decimal,
    paid_amount: Decimal,
) -> DebtAmounts:
    """Derive remaining, surplus and total amounts of a debt.

    Only deposit debts track overpayment as surplus.

    Args:
        kind: Debt kind (referral or deposit).
        base_amount: Amount originally owed.
        paid_amount: Sum of payments applied to the debt.

    Returns:
        DebtAmounts: Derived figures.
    """
    base = coerce_decimal(base_amount)
    paid = coerce_decimal(paid_amount)
    remaining = Decimal("0") if paid >= base else base - paid
    surplus = Decimal("0")
    if kind == DEBT_KIND_DEPOSIT:
        surplus = max(Decimal("0"), paid - base)
    return DebtAmounts(
        base_amount=base,
        paid_amount=paid,
        surplus=surplus,
        total_amount=base + surplus,
        remaining_amount=remaining,
    )


def sum_debt_payments(
    debt: Debt,
    payments: Iterable[DebtPayment],
) -> Decimal:
    """Sum the payments linked to a debt."""
    return sum(
        (
            coerce_decimal(payment.amount)
            for payment in payments
            if payment.debt_kind == debt.kind and payment.debt_id == debt.id
        ),
        Decimal("0"),
    )


def debt_amounts(debt: Debt, payments: Iterable[DebtPayment]) -> DebtAmounts:
    """Derive the amounts of a debt from its payments."""
    return compute_debt_amounts(
        debt.kind,
        debt.amount,
        sum_debt_payments(debt, payments),
    )


def validate_debt_payment(kind: str, remaining: Decimal, amount) -> Decimal:
    """Validate a payment against a debt before writing it.

    Referral debts refuse payments above the remaining balance; deposit
    debts accept any positive amount.

    Returns:
        Decimal: The parsed amount.

    Raises:
        LedgerValidationError: If the kind is unknown, the amount is not
            positive, or a referral payment exceeds the remaining balance.
    """
    if kind not in DEBT_KINDS:
        raise LedgerValidationError(f"Unknown debt kind: {kind}")
    parsed = validate_positive_amount(amount)
    if kind != DEBT_KIND_DEPOSIT and parsed > remaining:
        raise LedgerValidationError(
            f"Payment amount cannot exceed the remaining balance "
            f"({remaining:.2f})"
        )
    return parsed


def status_for_amounts(kind: str, amounts: DebtAmounts) -> str:
    """Return the status matching a debt's derived amounts."""
    if amounts.remaining_amount == 0 and amounts.base_amount > 0:
        return SETTLED_STATUS_BY_KIND[kind]
    if amounts.paid_amount > 0:
        return DEBT_STATUS_PARTIAL
    return DEBT_STATUS_OPEN


__all__ = [
    "compute_debt_amounts",
    "sum_debt_payments",
    "debt_amounts",
    "validate_debt_payment",
    "status_for_amounts",
]
