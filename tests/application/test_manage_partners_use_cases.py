"""Tests for partner administration use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from partner_ledger.application import tables
from partner_ledger.application.use_cases.manage_partners import (
    AssignClientUseCase,
    CreatePartnerUseCase,
    DeletePartnerAppSplitUseCase,
    SavePartnerAppSplitUseCase,
    UnassignClientUseCase,
    UpdatePartnerUseCase,
)
from partner_ledger.domain.errors import (
    LedgerValidationError,
    RecordNotFoundError,
)
from partner_ledger.infrastructure.memory_store import InMemoryTableStore


def _build_store() -> InMemoryTableStore:
    return InMemoryTableStore(
        {
            tables.PARTNERS: [
                {
                    "id": "p1",
                    "name": "Giulia",
                    "default_split_partner": Decimal("0.25"),
                    "default_split_owner": Decimal("0.75"),
                }
            ],
            tables.CLIENTS: [{"id": "c1", "name": "Anna"}],
            tables.ASSIGNMENTS: [
                {"id": "as1", "client_id": "c1", "partner_id": "p1"}
            ],
        }
    )


def test_create_partner_defaults_to_quarter_split() -> None:
    store = _build_store()

    row = CreatePartnerUseCase(store, logger=MagicMock()).execute(" Paolo ")

    assert row["name"] == "Paolo"
    assert row["default_split_partner"] == Decimal("0.25")
    assert row["default_split_owner"] == Decimal("0.75")


def test_create_partner_requires_name() -> None:
    with pytest.raises(LedgerValidationError, match="name is required"):
        CreatePartnerUseCase(_build_store(), logger=MagicMock()).execute(
            "   "
        )


def test_update_partner_validates_split_total() -> None:
    store = _build_store()
    use_case = UpdatePartnerUseCase(store, logger=MagicMock())

    with pytest.raises(LedgerValidationError, match="Total split"):
        use_case.execute("p1", "Giulia", "30", "60")

    row = use_case.execute("p1", "Giulia B.", "30", "70", notes=" VIP ")
    assert row["name"] == "Giulia B."
    assert row["default_split_partner"] == Decimal("0.3")
    assert row["notes"] == "VIP"


def test_assign_client_rejects_duplicates_and_blank_client() -> None:
    store = _build_store()
    use_case = AssignClientUseCase(store, logger=MagicMock())

    with pytest.raises(LedgerValidationError, match="already assigned"):
        use_case.execute("p1", "c1")
    with pytest.raises(LedgerValidationError, match="select a client"):
        use_case.execute("p1", None)


def test_assign_client_stores_override_fractions() -> None:
    store = _build_store()

    row = AssignClientUseCase(store, logger=MagicMock()).execute(
        "p1",
        "c2",
        split_partner_percent="40",
        split_owner_percent="",
    )

    assert row["split_partner_override"] == Decimal("0.4")
    assert row["split_owner_override"] is None


def test_unassign_client_deletes_assignment() -> None:
    store = _build_store()

    UnassignClientUseCase(store, logger=MagicMock()).execute("as1")

    assert store.rows(tables.ASSIGNMENTS) == []


def test_save_app_split_upserts_per_app() -> None:
    """Saving twice for the same app should update, not duplicate."""
    store = _build_store()
    use_case = SavePartnerAppSplitUseCase(store, logger=MagicMock())

    first = use_case.execute("p1", "app-1", "50", "50")
    second = use_case.execute("p1", "app-1", "60", "40")

    rows = store.rows(tables.APP_SPLITS)
    assert len(rows) == 1
    assert second["id"] == first["id"]
    assert rows[0]["split_partner"] == Decimal("0.6")


def test_delete_app_split() -> None:
    store = _build_store()
    saved = SavePartnerAppSplitUseCase(store, logger=MagicMock()).execute(
        "p1",
        "app-1",
        "50",
        "50",
    )
    use_case = DeletePartnerAppSplitUseCase(store, logger=MagicMock())

    use_case.execute("p1", saved["id"])

    assert store.rows(tables.APP_SPLITS) == []
    with pytest.raises(RecordNotFoundError):
        use_case.execute("p1", saved["id"])
