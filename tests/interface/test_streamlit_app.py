"""Tests for the Streamlit app module."""

from contextlib import nullcontext
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from partner_ledger.adapters.interface.streamlit import app
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import MonthlyPoint
from partner_ledger.domain.services.validation import (
    validate_split_percentages,
)
from partner_ledger.infrastructure.demo_data import build_demo_rows
from partner_ledger.infrastructure.memory_store import InMemoryTableStore


def test_fetch_partner_summaries_invokes_use_case(monkeypatch):
    """_fetch_partner_summaries should build the use case on the store."""
    fake_portfolio = object()
    calls = {}

    class _FakeUseCase:
        def __init__(self, store):
            calls["store"] = store

        def execute(self, search, status):
            calls["args"] = (search, status)
            return fake_portfolio

    monkeypatch.setattr(app, "_get_store", lambda: "store")
    monkeypatch.setattr(app, "ListPartnerSummariesUseCase", _FakeUseCase)

    result = app._fetch_partner_summaries("giu", "due")

    assert result is fake_portfolio
    assert calls == {"store": "store", "args": ("giu", "due")}


def test_fetch_debts_passes_filters(monkeypatch):
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = ["debt"]
    monkeypatch.setattr(app, "_get_store", lambda: "store")
    monkeypatch.setattr(app, "GetDebtsUseCase", lambda store: fake_use_case)

    assert app._fetch_debts("open", "referral", "c1") == ["debt"]
    fake_use_case.execute.assert_called_once_with(
        status="open",
        creditor_client_id="c1",
        kind="referral",
    )


def test_load_payment_sources_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_payment_sources."""
    app._load_payment_sources.clear()
    monkeypatch.setattr(app, "_fetch_payment_sources", lambda: ["Cash"])

    assert app._load_payment_sources() == ["Cash"]


def test_format_helpers():
    assert app._format_currency(Decimal("1234.5"), "EUR") == "1,234.50 €"
    assert app._format_currency(Decimal("3"), "USD") == "3.00 USD"
    assert app._format_percent(Decimal("0.25")) == "25%"
    assert app._format_percent(Decimal("0.1250")) == "12.5%"


def test_percent_input_value_keeps_stored_split_exact():
    """Pre-filled edit inputs must save back the same fractions."""
    partner_pct = app._percent_input_value(Decimal("0.125"), Decimal("0.25"))
    owner_pct = app._percent_input_value(Decimal("0.875"), Decimal("0.75"))

    assert (partner_pct, owner_pct) == ("12.5", "87.5")
    assert validate_split_percentages(partner_pct, owner_pct) == (
        Decimal("0.125"),
        Decimal("0.875"),
    )
    assert app._percent_input_value(Decimal("0"), Decimal("0.25")) == "0"
    assert app._percent_input_value(None, Decimal("0.25")) == "25"


def test_build_monthly_chart_data():
    points = [
        MonthlyPoint(month="2026-07", amount=Decimal("12")),
        MonthlyPoint(month="2026-08", amount=Decimal("40.5")),
    ]

    data = app._build_monthly_chart_data(points, "EUR")

    assert data == [
        {"month": "2026-07", "amount": 12.0, "amount_label": "12.00 €"},
        {"month": "2026-08", "amount": 40.5, "amount_label": "40.50 €"},
    ]


class _FakeCacheData:
    def __init__(self) -> None:
        self.cleared = False

    def clear(self) -> None:
        self.cleared = True


class _FakeStreamlit:
    def __init__(self, page: str = "Partners") -> None:
        self.errors: list[str] = []
        self.toasts: list[str] = []
        self.captions: list[str] = []
        self.infos: list[str] = []
        self.metrics: list[tuple[str, str]] = []
        self.dataframe_payload = None
        self.config_kwargs = None
        self.cache_data = _FakeCacheData()
        self.sidebar = SimpleNamespace(
            selectbox=lambda label, options: page
        )

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def error(self, text: str):
        self.errors.append(text)

    def toast(self, text: str):
        self.toasts.append(text)

    def caption(self, text: str):
        self.captions.append(text)

    def info(self, text: str):
        self.infos.append(text)

    def dataframe(self, data, **kwargs):
        self.dataframe_payload = (data, kwargs)

    def columns(self, spec):
        count = spec if isinstance(spec, int) else len(spec)
        return [
            SimpleNamespace(
                text_input=lambda label, **kwargs: kwargs.get("value", ""),
                selectbox=lambda label, options, **kwargs: options[0],
                metric=lambda label, value: self.metrics.append(
                    (label, value)
                ),
            )
            for _ in range(count)
        ]

    def expander(self, label: str):
        return nullcontext()

    def form(self, key: str):
        return nullcontext()

    def text_input(self, label: str, **kwargs):
        return kwargs.get("value", "")

    def form_submit_button(self, label: str):
        return False


def test_run_write_clears_cache_and_logs_on_success(monkeypatch):
    fake_st = _FakeStreamlit()
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)
    action = MagicMock()

    assert app._run_write(action, "Saved") is True

    action.assert_called_once_with()
    assert fake_st.cache_data.cleared is True
    assert fake_st.toasts == ["Saved"]
    usage_logger.info.assert_called_once_with("Saved")


def test_run_write_shows_ledger_errors(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    def _fail():
        raise LedgerValidationError("Please select an app")

    assert app._run_write(_fail, "Saved") is False
    assert fake_st.errors == ["Please select an app"]
    assert fake_st.cache_data.cleared is False
    assert fake_st.toasts == []


def test_partners_page_renders_totals_and_table(monkeypatch):
    """The partners page should list every partner of the demo ledger."""
    fake_st = _FakeStreamlit()
    store = InMemoryTableStore(build_demo_rows())
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_load_partner_summaries",
        app._fetch_partner_summaries,
    )
    monkeypatch.setattr(app, "_get_store", lambda: store)

    app._render_partners_page("EUR")

    table, kwargs = fake_st.dataframe_payload
    assert [row["Partner"] for row in table] == ["Giulia", "Paolo"]
    assert table[0]["Balance"] == "40.00 €"
    assert kwargs["hide_index"] is True
    assert ("Balance due", "53.75 €") in fake_st.metrics
    assert fake_st.captions == ["2 partners shown"]


def test_main_dispatches_selected_page(monkeypatch):
    fake_st = _FakeStreamlit(page="Debts")
    rendered = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_get_settings",
        lambda: SimpleNamespace(currency="EUR"),
    )
    monkeypatch.setattr(
        app,
        "_render_debts_page",
        lambda currency: rendered.append(("debts", currency)),
    )

    app.main()

    assert fake_st.config_kwargs == {
        "page_title": "Partner Ledger",
        "layout": "wide",
    }
    assert rendered == [("debts", "EUR")]


def test_main_shows_ledger_errors(monkeypatch):
    fake_st = _FakeStreamlit(page="Partner detail")
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_get_settings",
        lambda: SimpleNamespace(currency="EUR"),
    )

    def _missing(currency):
        raise LedgerValidationError("Partner not found: p9")

    monkeypatch.setattr(app, "_render_partner_detail_page", _missing)

    app.main()

    assert fake_st.errors == ["Partner not found: p9"]
