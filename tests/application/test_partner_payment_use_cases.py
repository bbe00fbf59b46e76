"""Tests for manual partner payment use cases."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from partner_ledger.application import tables
from partner_ledger.application.use_cases.partner_payments import (
    DeletePartnerPaymentUseCase,
    EditPartnerPaymentUseCase,
    RecordPartnerPaymentUseCase,
)
from partner_ledger.domain.errors import (
    LedgerValidationError,
    RecordNotFoundError,
)
from partner_ledger.infrastructure.memory_store import InMemoryTableStore


def _build_store() -> InMemoryTableStore:
    return InMemoryTableStore(
        {
            tables.PARTNERS: [{"id": "p1", "name": "Giulia"}],
            tables.PARTNER_PAYMENTS: [
                {
                    "id": "pay-1",
                    "partner_id": "p1",
                    "amount": Decimal("6.25"),
                    "note": "Payment for Anna Rossi, Marco Bianchi [ca1,ca2]",
                    "paid_at": None,
                }
            ],
            tables.APP_PAYMENTS: [
                {
                    "id": "r1",
                    "partner_id": "p1",
                    "client_id": "c1",
                    "client_app_id": "ca1",
                    "amount": Decimal("2.50"),
                    "partner_payment_id": "pay-1",
                },
                {
                    "id": "r2",
                    "partner_id": "p1",
                    "client_id": "c2",
                    "client_app_id": "ca2",
                    "amount": Decimal("3.75"),
                },
                {
                    "id": "r3",
                    "partner_id": "p1",
                    "client_id": "c2",
                    "client_app_id": "ca9",
                    "amount": Decimal("1.00"),
                    "partner_payment_id": "pay-other",
                },
            ],
        }
    )


def test_record_payment_inserts_row() -> None:
    store = _build_store()
    paid_at = datetime(2026, 10, 1, tzinfo=timezone.utc)

    row = RecordPartnerPaymentUseCase(store, logger=MagicMock()).execute(
        "p1",
        "30",
        note="  October  ",
        paid_at=paid_at,
    )

    assert row["amount"] == Decimal("30")
    assert row["note"] == "October"
    assert row["paid_at"] == paid_at
    assert len(store.rows(tables.PARTNER_PAYMENTS)) == 2


@pytest.mark.parametrize("amount", ["0", "-1", ""])
def test_record_payment_requires_positive_amount(amount) -> None:
    store = _build_store()

    with pytest.raises(LedgerValidationError):
        RecordPartnerPaymentUseCase(store, logger=MagicMock()).execute(
            "p1",
            amount,
        )


def test_record_payment_for_unknown_partner() -> None:
    with pytest.raises(RecordNotFoundError):
        RecordPartnerPaymentUseCase(
            _build_store(),
            logger=MagicMock(),
        ).execute("nobody", "10")


def test_edit_payment_keeps_identifier_suffix() -> None:
    store = _build_store()

    row = EditPartnerPaymentUseCase(store, logger=MagicMock()).execute(
        "p1",
        "pay-1",
        "7",
        note="Corrected payout",
    )

    assert row["amount"] == Decimal("7")
    assert row["note"] == "Corrected payout [ca1,ca2]"


def test_delete_payment_removes_linked_app_rows() -> None:
    """Rows linked by id or listed in the note go with the payment."""
    store = _build_store()

    removed = DeletePartnerPaymentUseCase(
        store,
        logger=MagicMock(),
    ).execute("p1", "pay-1")

    assert sorted(removed) == ["r1", "r2"]
    assert store.rows(tables.PARTNER_PAYMENTS) == []
    assert [row["id"] for row in store.rows(tables.APP_PAYMENTS)] == ["r3"]


def test_delete_unknown_payment_raises() -> None:
    with pytest.raises(RecordNotFoundError):
        DeletePartnerPaymentUseCase(
            _build_store(),
            logger=MagicMock(),
        ).execute("p1", "missing")
