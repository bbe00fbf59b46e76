"""Tests for the partner_balances_cli adapter."""

from decimal import Decimal
from unittest.mock import MagicMock

from partner_ledger.adapters import partner_balances_cli
from partner_ledger.infrastructure.demo_data import build_demo_rows
from partner_ledger.infrastructure.memory_store import InMemoryTableStore


def _patch_dependencies(monkeypatch) -> MagicMock:
    fake_logger = MagicMock()
    monkeypatch.setattr(
        partner_balances_cli,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.setattr(
        partner_balances_cli,
        "build_table_store",
        lambda: InMemoryTableStore(build_demo_rows()),
    )
    return fake_logger


def test_main_prints_balances_and_totals(monkeypatch, capsys):
    """Every partner and the totals line should be printed."""
    _patch_dependencies(monkeypatch)
    monkeypatch.delenv("BALANCES_STATUS", raising=False)
    monkeypatch.delenv("BALANCES_SEARCH", raising=False)

    partner_balances_cli.main()

    out = capsys.readouterr().out
    assert "Partner balances (status=all, search=None)" in out
    assert "Giulia: clients=2, share=52.00, paid=12.00, balance=40.00" in out
    assert "Paolo: clients=1" in out
    assert f"balance={Decimal('53.75'):,.2f}" in out.splitlines()[-1]


def test_main_applies_env_filters(monkeypatch, capsys):
    _patch_dependencies(monkeypatch)
    monkeypatch.setenv("BALANCES_STATUS", "due")
    monkeypatch.setenv("BALANCES_SEARCH", "paolo")

    partner_balances_cli.main()

    out = capsys.readouterr().out
    assert "Paolo" in out
    assert "Giulia" not in out


def test_main_logs_invalid_status(monkeypatch, capsys):
    fake_logger = _patch_dependencies(monkeypatch)
    monkeypatch.setenv("BALANCES_STATUS", "late")

    partner_balances_cli.main()

    fake_logger.error.assert_called_once()
    assert capsys.readouterr().out == ""
