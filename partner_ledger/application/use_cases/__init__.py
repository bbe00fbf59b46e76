"""Application use cases."""

from .debts import GetDebtsUseCase, RecordDebtPaymentUseCase, SettleDebtUseCase
from .get_partner_overview import GetPartnerOverviewUseCase, PartnerOverview
from .list_partner_summaries import ListPartnerSummariesUseCase
from .manage_partners import (
    AssignClientUseCase,
    CreatePartnerUseCase,
    DeletePartnerAppSplitUseCase,
    SavePartnerAppSplitUseCase,
    UnassignClientUseCase,
    UpdatePartnerUseCase,
)
from .mark_apps_paid import MarkAppsPaidResult, MarkAppsPaidUseCase
from .partner_payments import (
    DeletePartnerPaymentUseCase,
    EditPartnerPaymentUseCase,
    RecordPartnerPaymentUseCase,
)
from .payment_sources import (
    AddPaymentSourceUseCase,
    ListPaymentSourcesUseCase,
    SeedPaymentSourcesUseCase,
)
from .unmark_app_paid import UnmarkAppPaidResult, UnmarkAppPaidUseCase

__all__ = [
    "GetDebtsUseCase",
    "RecordDebtPaymentUseCase",
    "SettleDebtUseCase",
    "GetPartnerOverviewUseCase",
    "PartnerOverview",
    "ListPartnerSummariesUseCase",
    "AssignClientUseCase",
    "CreatePartnerUseCase",
    "DeletePartnerAppSplitUseCase",
    "SavePartnerAppSplitUseCase",
    "UnassignClientUseCase",
    "UpdatePartnerUseCase",
    "MarkAppsPaidResult",
    "MarkAppsPaidUseCase",
    "DeletePartnerPaymentUseCase",
    "EditPartnerPaymentUseCase",
    "RecordPartnerPaymentUseCase",
    "AddPaymentSourceUseCase",
    "ListPaymentSourcesUseCase",
    "SeedPaymentSourcesUseCase",
    "UnmarkAppPaidResult",
    "UnmarkAppPaidUseCase",
]
