"""Tests for the monthly partner share series."""

from datetime import datetime
from decimal import Decimal

from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    Partner,
)
from partner_ledger.domain.services.monthly import build_monthly_series
from partner_ledger.domain.services.partners import calculate_partner_balance


def _partner() -> Partner:
    return Partner(
        id="p1",
        name="Giulia",
        default_split_partner=Decimal("0.25"),
        default_split_owner=Decimal("0.75"),
    )


def _app(row_id, profit, completed=None, created=None, client_id="c1"):
    return ClientAppRow(
        id=row_id,
        client_id=client_id,
        app_id="app-1",
        profit_us=Decimal(profit),
        status="completed",
        completed_at=completed,
        created_at=created,
    )


def test_series_buckets_by_month_and_skips_undated_rows() -> None:
    """Rows fall back to created_at; rows with no timestamp are dropped."""
    assignments = [
        ClientPartnerAssignment(id="as1", client_id="c1", partner_id="p1")
    ]
    apps = [
        _app("a", "40", completed=datetime(2026, 3, 5)),
        _app("b", "20", created=datetime(2026, 1, 9)),
        _app("c", "60", completed=datetime(2026, 3, 28)),
        _app("d", "80"),
        _app("e", "100", completed=datetime(2026, 2, 1), client_id="other"),
    ]

    series = build_monthly_series(_partner(), assignments, apps)
    points = list(series)

    assert [point.month for point in points] == ["2026-01", "2026-03"]
    assert points[0].amount == Decimal("5.00")
    assert points[1].amount == Decimal("25.00")


def test_series_can_be_iterated_again() -> None:
    assignments = [
        ClientPartnerAssignment(id="as1", client_id="c1", partner_id="p1")
    ]
    apps = [_app("a", "40", completed=datetime(2026, 3, 5))]

    series = build_monthly_series(_partner(), assignments, apps)

    assert list(series) == list(series)


def test_series_total_matches_partner_share_for_dated_rows() -> None:
    assignments = [
        ClientPartnerAssignment(
            id="as1",
            client_id="c1",
            partner_id="p1",
            split_partner_override=Decimal("0.5"),
        )
    ]
    apps = [
        _app("a", "40", completed=datetime(2026, 3, 5)),
        _app("b", "10", completed=datetime(2026, 4, 5)),
    ]

    series = build_monthly_series(_partner(), assignments, apps)
    balance = calculate_partner_balance(_partner(), assignments, apps, [])

    assert series.total() == balance.partner_share
