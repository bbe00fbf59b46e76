"""CLI adapter printing the balance owed to each partner."""

import os

from partner_ledger.application.use_cases.list_partner_summaries import (
    ListPartnerSummariesUseCase,
)
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.infrastructure.container import build_table_store
from partner_ledger.infrastructure.logging.logger import get_app_logger


def _format_amount(value) -> str:
    return f"{value:,.2f}"


def main() -> None:
    """Print partner balances.

    BALANCES_STATUS (all, due, settled, negative) and BALANCES_SEARCH
    narrow the listing.
    """
    logger = get_app_logger()
    status = os.getenv("BALANCES_STATUS", "all").strip().lower()
    search = os.getenv("BALANCES_SEARCH") or None

    store = build_table_store()
    use_case = ListPartnerSummariesUseCase(store, logger=logger)
    try:
        portfolio = use_case.execute(search=search, status=status)
    except LedgerValidationError as exc:
        logger.error(str(exc))
        return

    print(f"Partner balances (status={status}, search={search})")
    for summary in portfolio.summaries:
        balance = summary.balance
        print(
            f"{summary.partner.name}: clients={summary.clients_count}, "
            f"share={_format_amount(balance.partner_share)}, "
            f"paid={_format_amount(balance.total_paid)}, "
            f"balance={_format_amount(balance.balance)}"
        )
    totals = portfolio.totals
    print(
        f"Total: share={_format_amount(totals.total_partner_share)}, "
        f"paid={_format_amount(totals.total_paid)}, "
        f"balance={_format_amount(totals.total_balance)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
