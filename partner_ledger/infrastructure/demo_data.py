"""Sample rows loaded into the in-memory store."""

from datetime import datetime, timezone
from decimal import Decimal

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row


def _ts(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=timezone.utc)


def build_demo_rows() -> dict[str, list[Row]]:
    """Return a small ledger with two partners, a few apps and debts."""
    return {
        tables.CLIENTS: [
            {"id": "c-anna", "name": "Anna", "surname": "Rossi"},
            {"id": "c-marco", "name": "Marco", "surname": "Bianchi"},
            {"id": "c-lucia", "name": "Lucia", "surname": None},
        ],
        tables.APPS: [
            {"id": "app-bank", "name": "BankOne"},
            {"id": "app-broker", "name": "TradeNow"},
            {"id": "app-card", "name": "CardPlus"},
        ],
        tables.CLIENT_APPS: [
            {
                "id": "ca-1",
                "client_id": "c-anna",
                "app_id": "app-bank",
                "profit_us": Decimal("40.00"),
                "status": "completed",
                "completed_at": _ts(2026, 7, 3),
                "created_at": _ts(2026, 6, 28),
            },
            {
                "id": "ca-2",
                "client_id": "c-anna",
                "app_id": "app-broker",
                "profit_us": Decimal("60.00"),
                "status": "completed",
                "completed_at": _ts(2026, 8, 11),
                "created_at": _ts(2026, 8, 1),
            },
            {
                "id": "ca-3",
                "client_id": "c-marco",
                "app_id": "app-card",
                "profit_us": Decimal("25.00"),
                "status": "completed",
                "completed_at": None,
                "created_at": _ts(2026, 8, 20),
            },
            {
                "id": "ca-4",
                "client_id": "c-marco",
                "app_id": "app-bank",
                "profit_us": Decimal("40.00"),
                "status": "in_progress",
                "completed_at": None,
                "created_at": _ts(2026, 9, 2),
            },
            {
                "id": "ca-5",
                "client_id": "c-lucia",
                "app_id": "app-broker",
                "profit_us": Decimal("55.00"),
                "status": "completed",
                "completed_at": _ts(2026, 9, 14),
                "created_at": _ts(2026, 9, 1),
            },
        ],
        tables.PARTNERS: [
            {
                "id": "p-giulia",
                "name": "Giulia",
                "contact_info": "giulia@example.com",
                "default_split_partner": Decimal("0.30"),
                "default_split_owner": Decimal("0.70"),
                "notes": None,
                "created_at": _ts(2026, 5, 1),
            },
            {
                "id": "p-paolo",
                "name": "Paolo",
                "contact_info": None,
                "default_split_partner": None,
                "default_split_owner": None,
                "notes": "Uses the standard split",
                "created_at": _ts(2026, 6, 1),
            },
        ],
        tables.ASSIGNMENTS: [
            {
                "id": "as-1",
                "client_id": "c-anna",
                "partner_id": "p-giulia",
                "split_partner_override": None,
                "split_owner_override": None,
                "notes": None,
                "assigned_at": _ts(2026, 6, 1),
            },
            {
                "id": "as-2",
                "client_id": "c-marco",
                "partner_id": "p-giulia",
                "split_partner_override": Decimal("0.40"),
                "split_owner_override": None,
                "notes": "Brought in directly",
                "assigned_at": _ts(2026, 7, 1),
            },
            {
                "id": "as-3",
                "client_id": "c-lucia",
                "partner_id": "p-paolo",
                "split_partner_override": None,
                "split_owner_override": None,
                "notes": None,
                "assigned_at": _ts(2026, 8, 15),
            },
        ],
        tables.APP_SPLITS: [
            {
                "id": "sp-1",
                "partner_id": "p-giulia",
                "app_id": "app-broker",
                "split_partner": Decimal("0.50"),
                "split_owner": Decimal("0.50"),
                "notes": "Promo month",
            },
        ],
        tables.PARTNER_PAYMENTS: [
            {
                "id": "pp-1",
                "partner_id": "p-giulia",
                "amount": Decimal("12.00"),
                "note": "Payment for Anna Rossi [ca-1]",
                "paid_at": _ts(2026, 7, 10),
            },
        ],
        tables.APP_PAYMENTS: [
            {
                "id": "pa-1",
                "partner_id": "p-giulia",
                "client_id": "c-anna",
                "client_app_id": "ca-1",
                "amount": Decimal("12.00"),
                "note": "Payment for BankOne",
                "paid_at": _ts(2026, 7, 10),
                "partner_payment_id": "pp-1",
            },
        ],
        tables.REFERRAL_DEBTS: [
            {
                "id": "rd-1",
                "amount": Decimal("30.00"),
                "status": "partial",
                "description": "Referral link bonus",
                "assignee": "Anna",
                "creditor_client_id": "c-anna",
                "debtor_client_id": "c-marco",
                "referral_link_id": None,
                "created_at": _ts(2026, 8, 2),
                "settled_at": None,
            },
        ],
        tables.DEPOSIT_DEBTS: [
            {
                "id": "dd-1",
                "amount": Decimal("100.00"),
                "status": "open",
                "description": "Deposit advanced for TradeNow",
                "assignee": None,
                "client_id": "c-lucia",
                "client_app_id": "ca-5",
                "deposit_source": "Revolut",
                "created_at": _ts(2026, 9, 1),
                "paid_back_at": None,
            },
        ],
        tables.DEBT_PAYMENTS: [
            {
                "id": "dp-1",
                "debt_kind": "referral",
                "debt_id": "rd-1",
                "amount": Decimal("10.00"),
                "paid_at": _ts(2026, 8, 20),
                "notes": None,
                "recipient": "Cash",
            },
        ],
        tables.PAYMENT_SOURCES: [],
    }


__all__ = ["build_demo_rows"]
