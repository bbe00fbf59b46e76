"""Tests for the composition root."""

from unittest.mock import MagicMock

from partner_ledger.application import tables
from partner_ledger.infrastructure import container as container_module
from partner_ledger.infrastructure.memory_store import InMemoryTableStore
from partner_ledger.infrastructure.settings import LedgerSettings
from partner_ledger.infrastructure.sqlalchemy_store import (
    SqlAlchemyTableStore,
)


def test_memory_backend_is_seeded_with_demo_rows(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)

    store = container_module.build_table_store(LedgerSettings())

    assert isinstance(store, InMemoryTableStore)
    assert store.rows(tables.PARTNERS)


def test_memory_backend_without_demo_rows(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)

    store = container_module.build_table_store(
        LedgerSettings(demo_data=False)
    )

    assert store.rows(tables.PARTNERS) == []


def test_sqlalchemy_backend_uses_given_adapter(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    db_port = MagicMock()

    store = container_module.build_table_store(
        LedgerSettings(backend="sqlalchemy", db_url="sqlite://"),
        db_port=db_port,
    )

    assert isinstance(store, SqlAlchemyTableStore)
    assert store._db_port is db_port


def test_settings_are_read_from_env_when_omitted(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    monkeypatch.setattr(
        container_module.LedgerSettings,
        "from_env",
        classmethod(lambda cls: cls(demo_data=False)),
    )

    store = container_module.build_table_store()

    assert isinstance(store, InMemoryTableStore)
    assert store.rows(tables.CLIENTS) == []
