"""Domain models package."""

from .debts import Debt, DebtAmounts, DebtPayment, DebtView, PaymentSource
from .finance import (
    MonthlyPoint,
    PartnerBalance,
    PartnerClientBreakdown,
    PartnerPortfolio,
    PartnerSummary,
    PortfolioTotals,
    SplitFractions,
)
from .partners import (
    ClientPartnerAssignment,
    Partner,
    PartnerAppPayment,
    PartnerAppSplit,
    PartnerPayment,
)
from .rows import ClientAppRow, ClientRow

__all__ = [
    "Partner",
    "ClientPartnerAssignment",
    "PartnerAppSplit",
    "PartnerPayment",
    "PartnerAppPayment",
    "ClientRow",
    "ClientAppRow",
    "SplitFractions",
    "PartnerClientBreakdown",
    "PartnerBalance",
    "MonthlyPoint",
    "PartnerSummary",
    "PortfolioTotals",
    "PartnerPortfolio",
    "Debt",
    "DebtPayment",
    "DebtAmounts",
    "DebtView",
    "PaymentSource",
]
