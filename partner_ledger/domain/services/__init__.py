"""Domain services package."""

from .debts import (
    compute_debt_amounts,
    debt_amounts,
    status_for_amounts,
    validate_debt_payment,
)
from .monthly import MonthlySeries, build_monthly_series
from .normalization import normalize_label
from .partners import (
    build_partner_breakdown,
    build_partner_portfolio,
    calculate_partner_balance,
    filter_assignments_by_partner,
)
from .reconciliation import (
    find_aggregate_payment,
    format_settlement_note,
    parse_note_identifiers,
    plan_mark_as_paid,
    plan_unmark,
)
from .splits import resolve_split
from .validation import validate_positive_amount, validate_split_percentages

__all__ = [
    "compute_debt_amounts",
    "debt_amounts",
    "status_for_amounts",
    "validate_debt_payment",
    "MonthlySeries",
    "build_monthly_series",
    "normalize_label",
    "build_partner_breakdown",
    "build_partner_portfolio",
    "calculate_partner_balance",
    "filter_assignments_by_partner",
    "find_aggregate_payment",
    "format_settlement_note",
    "parse_note_identifiers",
    "plan_mark_as_paid",
    "plan_unmark",
    "resolve_split",
    "validate_positive_amount",
    "validate_split_percentages",
]
