"""Domain package for business rules and core models."""

from .constants import (
    CONTRIBUTING_STATUSES,
    DEFAULT_SPLIT_OWNER,
    DEFAULT_SPLIT_PARTNER,
)
from .errors import (
    LedgerError,
    LedgerOperationError,
    LedgerValidationError,
    RecordNotFoundError,
)
from .models import (
    ClientAppRow,
    ClientPartnerAssignment,
    ClientRow,
    Debt,
    DebtPayment,
    Partner,
    PartnerAppPayment,
    PartnerAppSplit,
    PartnerBalance,
    PartnerClientBreakdown,
    PartnerPayment,
)
from .services import (
    build_monthly_series,
    build_partner_breakdown,
    calculate_partner_balance,
    compute_debt_amounts,
    resolve_split,
)

__all__ = [
    "CONTRIBUTING_STATUSES",
    "DEFAULT_SPLIT_OWNER",
    "DEFAULT_SPLIT_PARTNER",
    "LedgerError",
    "LedgerOperationError",
    "LedgerValidationError",
    "RecordNotFoundError",
    "ClientAppRow",
    "ClientPartnerAssignment",
    "ClientRow",
    "Debt",
    "DebtPayment",
    "Partner",
    "PartnerAppPayment",
    "PartnerAppSplit",
    "PartnerBalance",
    "PartnerClientBreakdown",
    "PartnerPayment",
    "build_monthly_series",
    "build_partner_breakdown",
    "calculate_partner_balance",
    "compute_debt_amounts",
    "resolve_split",
]
