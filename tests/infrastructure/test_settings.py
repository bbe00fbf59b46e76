"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from partner_ledger.infrastructure import settings as settings_module
from partner_ledger.infrastructure.settings import LedgerSettings

_VARS = (
    "LEDGER_BACKEND",
    "LEDGER_DB_URL",
    "LEDGER_CURRENCY",
    "LEDGER_DEMO_DATA",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(
        settings_module.dotenv,
        "load_dotenv",
        lambda: None,
    )
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults_to_memory_backend() -> None:
    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings()
    assert settings.backend == "memory"
    assert settings.demo_data is True


def test_db_url_selects_sqlalchemy_backend(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_DB_URL", " postgresql://ledger ")
    monkeypatch.setenv("LEDGER_CURRENCY", "usd")

    settings = LedgerSettings.from_env()

    assert settings.backend == "sqlalchemy"
    assert settings.db_url == "postgresql://ledger"
    assert settings.currency == "USD"


def test_sqlalchemy_backend_requires_url(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_BACKEND", "sqlalchemy")

    with pytest.raises(RuntimeError, match="LEDGER_DB_URL"):
        LedgerSettings.from_env()


def test_unknown_backend_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_BACKEND", "mongo")

    with pytest.raises(RuntimeError, match="Unsupported LEDGER_BACKEND"):
        LedgerSettings.from_env()


def test_memory_backend_with_url_warns(monkeypatch) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(
        settings_module,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.setenv("LEDGER_BACKEND", "Memory")
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite:///ledger.db")

    settings = LedgerSettings.from_env()

    assert settings.backend == "memory"
    fake_logger.warning.assert_called_once()


@pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
def test_demo_data_can_be_disabled(monkeypatch, raw) -> None:
    monkeypatch.setenv("LEDGER_DEMO_DATA", raw)

    assert LedgerSettings.from_env().demo_data is False
