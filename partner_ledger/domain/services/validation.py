"""Domain validation helpers."""

from decimal import Decimal, InvalidOperation
from logging import Logger

from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import SplitFractions

_HUNDRED = Decimal("100")


def validate_positive_amount(value, label: str = "amount") -> Decimal:
    """Parse an amount and reject anything that is not strictly positive.

    Args:
        value: Raw amount from a form or caller.
        label: Field name used in the error message.

    Returns:
        Decimal: The parsed amount.

    Raises:
        LedgerValidationError: If the amount is missing, not a number, or
            not greater than zero.
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise LedgerValidationError(f"Please enter a valid {label}") from None
    if not amount.is_finite() or amount <= 0:
        raise LedgerValidationError(f"Please enter a valid {label}")
    return amount


def parse_percentage(value) -> Decimal:
    """Parse a raw percentage input; blank inputs count as zero.

    Raises:
        LedgerValidationError: If the input is not a number.
    """
    if value is None or str(value).strip() == "":
        return Decimal("0")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise LedgerValidationError(
            "Split percentages must be numbers"
        ) from None
    if not parsed.is_finite():
        raise LedgerValidationError("Split percentages must be numbers")
    return parsed


def validate_split_percentages(
    partner_percent,
    owner_percent,
) -> tuple[Decimal, Decimal]:
    """Validate raw split percentages and convert them to fractions.

    Args:
        partner_percent: Partner percentage as typed (e.g. "30").
        owner_percent: Owner percentage as typed (e.g. "70").

    Returns:
        tuple[Decimal, Decimal]: Partner and owner fractions (0..1).

    Raises:
        LedgerValidationError: If an input is not a number or the two
            percentages do not add up to exactly 100.
    """
    partner_pct = parse_percentage(partner_percent)
    owner_pct = parse_percentage(owner_percent)
    total = partner_pct + owner_pct
    if total != _HUNDRED:
        raise LedgerValidationError(
            f"Total split must equal 100% (currently {total.normalize():f}%)"
        )
    return partner_pct / _HUNDRED, owner_pct / _HUNDRED


def parse_optional_percentage(value) -> Decimal | None:
    """Convert an optional override percentage to a fraction."""
    if value is None or str(value).strip() == "":
        return None
    return parse_percentage(value) / _HUNDRED


def validate_split_sum(split: SplitFractions, logger: Logger) -> None:
    """Warn when a stored split does not add up to 1.0.

    Args:
        split: Split resolved for an app.
        logger: Logger used for warnings.
    """
    total = split.partner + split.owner
    if total != 1:
        logger.warning(
            f"Split from {split.source} does not sum to 1: "
            f"partner={split.partner}, owner={split.owner}"
        )


__all__ = [
    "validate_positive_amount",
    "parse_percentage",
    "parse_optional_percentage",
    "validate_split_percentages",
    "validate_split_sum",
]
