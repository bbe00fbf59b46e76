"""Use case to build the partner detail view."""

from dataclasses import dataclass, field

from partner_ledger.application.ports.table_store import RowFetchPort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    ClientRow,
    Partner,
    PartnerAppPayment,
    PartnerAppSplit,
    PartnerBalance,
    PartnerClientBreakdown,
    PartnerPayment,
)
from partner_ledger.domain.services.monthly import (
    MonthlySeries,
    build_monthly_series,
)
from partner_ledger.domain.services.partners import (
    build_partner_breakdown,
    is_contributing,
    summarize_balance,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PartnerOverview:
    """Everything the partner detail page renders.

    Attributes:
        apps_by_client: Completed apps of each assigned client.
        paid_app_ids: Client-app ids with a per-app payment.
        app_names: App names by app id, as seen on client apps.
    """

    partner: Partner
    assignments: list[ClientPartnerAssignment]
    breakdown: list[PartnerClientBreakdown]
    balance: PartnerBalance
    monthly: MonthlySeries
    payments: list[PartnerPayment]
    app_payments: list[PartnerAppPayment]
    app_splits: list[PartnerAppSplit]
    clients: list[ClientRow]
    apps_by_client: dict[str, list[ClientAppRow]] = field(
        default_factory=dict
    )
    paid_app_ids: frozenset[str] = frozenset()
    app_names: dict[str, str] = field(default_factory=dict)


class GetPartnerOverviewUseCase:
    """Derive breakdown, balance and monthly series for one partner."""

    def __init__(self, store: RowFetchPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port returning ledger rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(self, partner_id: str) -> PartnerOverview:
        """Return the overview of a partner.

        Raises:
            RecordNotFoundError: If the partner does not exist.
        """
        partner = self._records.fetch_partner(partner_id)
        assignments = self._records.fetch_assignments(partner_id)
        client_apps = self._records.fetch_client_apps()
        app_splits = self._records.fetch_app_splits(partner_id)
        clients = self._records.fetch_clients()
        payments = self._records.fetch_partner_payments(partner_id)
        app_payments = self._records.fetch_app_payments(partner_id)

        breakdown = build_partner_breakdown(
            partner,
            assignments,
            client_apps,
            app_splits=app_splits,
            clients=clients,
            logger=self._logger,
        )
        balance = summarize_balance(partner.id, breakdown, payments)
        monthly = build_monthly_series(
            partner,
            assignments,
            client_apps,
            app_splits=app_splits,
        )

        assigned = {assignment.client_id for assignment in assignments}
        apps_by_client: dict[str, list[ClientAppRow]] = {}
        for app in client_apps:
            if app.client_id in assigned and is_contributing(app):
                apps_by_client.setdefault(app.client_id, []).append(app)

        self._logger.info(
            f"Partner {partner.id} overview: clients={len(assignments)}, "
            f"share={balance.partner_share}, paid={balance.total_paid}, "
            f"balance={balance.balance}"
        )
        return PartnerOverview(
            partner=partner,
            assignments=assignments,
            breakdown=breakdown,
            balance=balance,
            monthly=monthly,
            payments=payments,
            app_payments=app_payments,
            app_splits=app_splits,
            clients=clients,
            apps_by_client=apps_by_client,
            paid_app_ids=frozenset(
                payment.client_app_id for payment in app_payments
            ),
            app_names={
                app.app_id: app.app_name or app.app_id
                for app in client_apps
                if app.app_id
            },
        )


__all__ = ["GetPartnerOverviewUseCase", "PartnerOverview"]
