"""Use case to list partners with their balances."""

from partner_ledger.application.ports.table_store import RowFetchPort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.domain.constants import BALANCE_STATUS_FILTERS
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import PartnerPortfolio
from partner_ledger.domain.services.partners import build_partner_portfolio
from partner_ledger.infrastructure.logging.logger import get_app_logger


class ListPartnerSummariesUseCase:
    """Summarize every partner for the partners list."""

    def __init__(self, store: RowFetchPort, logger=None) -> None:
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        search: str | None = None,
        status: str = "all",
    ) -> PartnerPortfolio:
        """Return partner summaries and totals.

        Args:
            search: Optional case-insensitive partner name filter.
            status: Balance filter: all, due, settled or negative.

        Returns:
            PartnerPortfolio: Matching summaries and their totals.
        """
        if status not in BALANCE_STATUS_FILTERS:
            raise LedgerValidationError(f"Unknown balance filter: {status}")
        portfolio = build_partner_portfolio(
            self._records.fetch_partners(),
            self._records.fetch_assignments(),
            self._records.fetch_client_apps(),
            self._records.fetch_partner_payments(),
            app_splits=self._records.fetch_app_splits(),
            search=search,
            status=status,
        )
        self._logger.info(
            f"Listed {len(portfolio.summaries)} partners "
            f"(status={status}, balance={portfolio.totals.total_balance})"
        )
        return portfolio


__all__ = ["ListPartnerSummariesUseCase", "PartnerPortfolio"]
