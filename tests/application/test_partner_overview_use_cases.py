"""Tests for the partner list and detail read use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from partner_ledger.application.use_cases.get_partner_overview import (
    GetPartnerOverviewUseCase,
)
from partner_ledger.application.use_cases.list_partner_summaries import (
    ListPartnerSummariesUseCase,
)
from partner_ledger.domain.errors import (
    LedgerValidationError,
    RecordNotFoundError,
)
from partner_ledger.infrastructure.demo_data import build_demo_rows
from partner_ledger.infrastructure.memory_store import InMemoryTableStore


@pytest.fixture
def store() -> InMemoryTableStore:
    return InMemoryTableStore(build_demo_rows())


def test_overview_resolves_every_split_rule(store) -> None:
    """App split, assignment override and partner default all apply."""
    overview = GetPartnerOverviewUseCase(store, logger=MagicMock()).execute(
        "p-giulia"
    )

    shares = {
        item.client_id: item.partner_share for item in overview.breakdown
    }
    assert shares == {"c-anna": Decimal("42"), "c-marco": Decimal("10")}
    assert overview.balance.total_profit == Decimal("125")
    assert overview.balance.total_paid == Decimal("12")
    assert overview.balance.balance == Decimal("40")
    assert overview.paid_app_ids == frozenset({"ca-1"})
    assert overview.app_names["app-broker"] == "TradeNow"
    assert sorted(overview.apps_by_client) == ["c-anna", "c-marco"]
    assert [app.id for app in overview.apps_by_client["c-marco"]] == ["ca-3"]


def test_overview_monthly_series_buckets_by_completion(store) -> None:
    overview = GetPartnerOverviewUseCase(store, logger=MagicMock()).execute(
        "p-giulia"
    )

    amounts = {point.month: point.amount for point in overview.monthly}
    assert amounts == {"2026-07": Decimal("12"), "2026-08": Decimal("40")}


def test_overview_for_unknown_partner(store) -> None:
    with pytest.raises(RecordNotFoundError):
        GetPartnerOverviewUseCase(store, logger=MagicMock()).execute("nope")


def test_summaries_use_default_split_when_partner_has_none(store) -> None:
    portfolio = ListPartnerSummariesUseCase(
        store,
        logger=MagicMock(),
    ).execute()

    balances = {
        summary.partner.id: summary.balance.balance
        for summary in portfolio.summaries
    }
    assert balances == {
        "p-giulia": Decimal("40"),
        "p-paolo": Decimal("13.75"),
    }
    assert portfolio.totals.total_balance == Decimal("53.75")
    assert portfolio.totals.total_clients == 3


def test_summaries_search_is_case_insensitive(store) -> None:
    portfolio = ListPartnerSummariesUseCase(
        store,
        logger=MagicMock(),
    ).execute(search="GIUL")

    assert [item.partner.name for item in portfolio.summaries] == ["Giulia"]


def test_summaries_reject_unknown_status(store) -> None:
    with pytest.raises(LedgerValidationError, match="Unknown balance filter"):
        ListPartnerSummariesUseCase(store, logger=MagicMock()).execute(
            status="overdue"
        )
