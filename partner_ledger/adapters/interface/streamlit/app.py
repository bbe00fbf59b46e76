"""Streamlit dashboard entry point."""

from collections.abc import Callable, Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from partner_ledger.application.ports.table_store import TableStorePort
from partner_ledger.application.use_cases.debts import (
    GetDebtsUseCase,
    RecordDebtPaymentUseCase,
    SettleDebtUseCase,
)
from partner_ledger.application.use_cases.get_partner_overview import (
    GetPartnerOverviewUseCase,
    PartnerOverview,
)
from partner_ledger.application.use_cases.list_partner_summaries import (
    ListPartnerSummariesUseCase,
)
from partner_ledger.application.use_cases.manage_partners import (
    AssignClientUseCase,
    CreatePartnerUseCase,
    DeletePartnerAppSplitUseCase,
    SavePartnerAppSplitUseCase,
    UnassignClientUseCase,
    UpdatePartnerUseCase,
)
from partner_ledger.application.use_cases.mark_apps_paid import (
    MarkAppsPaidUseCase,
)
from partner_ledger.application.use_cases.partner_payments import (
    DeletePartnerPaymentUseCase,
    EditPartnerPaymentUseCase,
    RecordPartnerPaymentUseCase,
)
from partner_ledger.application.use_cases.payment_sources import (
    AddPaymentSourceUseCase,
    ListPaymentSourcesUseCase,
)
from partner_ledger.application.use_cases.unmark_app_paid import (
    UnmarkAppPaidUseCase,
)
from partner_ledger.domain.constants import (
    BALANCE_STATUS_FILTERS,
    DEBT_KINDS,
    DEBT_STATUS_OPEN,
    DEBT_STATUS_PAID_BACK,
    DEBT_STATUS_PARTIAL,
    DEBT_STATUS_SETTLED,
    DEFAULT_SPLIT_OWNER,
    DEFAULT_SPLIT_PARTNER,
)
from partner_ledger.domain.errors import LedgerError
from partner_ledger.domain.models import (
    DebtView,
    MonthlyPoint,
    PartnerPortfolio,
)
from partner_ledger.infrastructure.container import build_table_store
from partner_ledger.infrastructure.logging.logger import get_usage_logger
from partner_ledger.infrastructure.settings import LedgerSettings

PAGES = ["Partners", "Partner detail", "Debts"]
NEW_PAYMENT_LABEL = "New payment"
NEW_SOURCE_LABEL = "Add new source..."
DEBT_STATUS_OPTIONS = [
    "all",
    DEBT_STATUS_OPEN,
    DEBT_STATUS_PARTIAL,
    DEBT_STATUS_SETTLED,
    DEBT_STATUS_PAID_BACK,
]


@st.cache_resource(show_spinner=False)
def _get_settings() -> LedgerSettings:
    """Settings shared by every session."""
    return LedgerSettings.from_env()


@st.cache_resource(show_spinner=False)
def _get_store() -> TableStorePort:
    """Store shared by every session, so demo edits survive reruns."""
    return build_table_store(_get_settings())


def _fetch_partner_summaries(
    search: str | None,
    status: str,
) -> PartnerPortfolio:
    """Fetch partner summaries from the configured store."""
    use_case = ListPartnerSummariesUseCase(_get_store())
    return use_case.execute(search=search, status=status)


@st.cache_data(show_spinner=False)
def _load_partner_summaries(
    search: str | None,
    status: str,
) -> PartnerPortfolio:
    """Cached wrapper around _fetch_partner_summaries."""
    return _fetch_partner_summaries(search, status)


def _fetch_partner_overview(partner_id: str) -> PartnerOverview:
    """Fetch the overview of one partner."""
    use_case = GetPartnerOverviewUseCase(_get_store())
    return use_case.execute(partner_id)


@st.cache_data(show_spinner=False)
def _load_partner_overview(partner_id: str) -> PartnerOverview:
    """Cached wrapper around _fetch_partner_overview."""
    return _fetch_partner_overview(partner_id)


def _fetch_debts(
    status: str | None,
    kind: str | None,
    creditor_client_id: str | None = None,
) -> list[DebtView]:
    """Fetch referral and deposit debts."""
    use_case = GetDebtsUseCase(_get_store())
    return use_case.execute(
        status=status,
        creditor_client_id=creditor_client_id,
        kind=kind,
    )


@st.cache_data(show_spinner=False)
def _load_debts(
    status: str | None,
    kind: str | None,
    creditor_client_id: str | None = None,
) -> list[DebtView]:
    """Cached wrapper around _fetch_debts."""
    return _fetch_debts(status, kind, creditor_client_id)


def _fetch_payment_sources() -> list[str]:
    """Fetch payment source labels."""
    return ListPaymentSourcesUseCase(_get_store()).execute()


@st.cache_data(show_spinner=False)
def _load_payment_sources() -> list[str]:
    """Cached wrapper around _fetch_payment_sources."""
    return _fetch_payment_sources()


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = "€" if currency_code == "EUR" else currency_code
    return f"{value:,.2f} {symbol}"


def _format_percent(fraction: Decimal) -> str:
    """Format a split fraction as a percentage."""
    return f"{(fraction * Decimal('100')).normalize():f}%"


def _percent_input_value(
    fraction: Decimal | None,
    default: Decimal,
) -> str:
    """Return a stored fraction as an exact percentage for form inputs."""
    value = default if fraction is None else fraction
    return f"{(value * Decimal('100')).normalize():f}"


def _run_write(action: Callable[[], object], success_message: str) -> bool:
    """Run a write and report the outcome.

    Cached reads are cleared after a successful write so the next run shows
    fresh data. Errors are shown to the user and never retried.

    Args:
        action: Callable performing the write.
        success_message: Toast text shown when the write succeeds.

    Returns:
        bool: True when the write succeeded.
    """
    try:
        action()
    except LedgerError as exc:
        st.error(str(exc))
        return False
    st.cache_data.clear()
    get_usage_logger().info(success_message)
    st.toast(success_message)
    return True


def _build_monthly_chart_data(
    points: Sequence[MonthlyPoint],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows for the monthly chart."""
    return [
        {
            "month": point.month,
            "amount": float(point.amount),
            "amount_label": _format_currency(point.amount, currency_code),
        }
        for point in points
    ]


def _render_monthly_chart(
    points: Sequence[MonthlyPoint],
    currency_code: str,
) -> None:
    """Render the partner share per month as a bar chart."""
    st.subheader("Monthly partner share")
    data = _build_monthly_chart_data(points, currency_code)
    if not data:
        st.info("No completed apps to chart yet.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
        color="#1b9aaa",
    ).encode(
        x=alt.X("month:O", title="Month"),
        y=alt.Y("amount:Q", title="Partner share"),
        tooltip=[
            alt.Tooltip("month:O"),
            alt.Tooltip("amount_label:N", title="Amount"),
        ],
    ).properties(
        height=320,
    )
    st.altair_chart(chart, width="stretch")


def _render_add_partner_form() -> None:
    """Render the form creating a new partner."""
    with st.expander("Add partner"):
        with st.form("add_partner"):
            name = st.text_input("Name")
            contact = st.text_input("Contact info")
            left, right = st.columns(2)
            partner_pct = left.text_input("Partner %", value="25")
            owner_pct = right.text_input("Owner %", value="75")
            submitted = st.form_submit_button("Create partner")
        if submitted and _run_write(
            lambda: CreatePartnerUseCase(_get_store()).execute(
                name,
                partner_pct,
                owner_pct,
                contact_info=contact,
            ),
            f"Partner {name.strip()} created",
        ):
            st.rerun()


def _render_partners_page(currency_code: str) -> None:
    """Render the partners list with balance filters."""
    search_col, status_col = st.columns([3, 1])
    search = search_col.text_input(
        "Search partners",
        placeholder="Type to filter",
    )
    status = status_col.selectbox(
        "Balance",
        options=list(BALANCE_STATUS_FILTERS),
        index=0,
    )
    portfolio = _load_partner_summaries(search.strip() or None, status)
    totals = portfolio.totals

    profit_col, share_col, paid_col, balance_col = st.columns(4)
    profit_col.metric(
        "Total profit",
        _format_currency(totals.total_profit, currency_code),
    )
    share_col.metric(
        "Partner share",
        _format_currency(totals.total_partner_share, currency_code),
    )
    paid_col.metric(
        "Paid",
        _format_currency(totals.total_paid, currency_code),
    )
    balance_col.metric(
        "Balance due",
        _format_currency(totals.total_balance, currency_code),
    )

    st.caption(f"{len(portfolio.summaries)} partners shown")
    data = [
        {
            "Partner": summary.partner.name,
            "Clients": summary.clients_count,
            "Profit": _format_currency(
                summary.balance.total_profit,
                currency_code,
            ),
            "Partner share": _format_currency(
                summary.balance.partner_share,
                currency_code,
            ),
            "Paid": _format_currency(
                summary.balance.total_paid,
                currency_code,
            ),
            "Balance": _format_currency(
                summary.balance.balance,
                currency_code,
            ),
        }
        for summary in portfolio.summaries
    ]
    if data:
        st.dataframe(data, width="stretch", hide_index=True)
    else:
        st.info("No partners match the filters.")
    _render_add_partner_form()


def _render_breakdown(overview: PartnerOverview, currency_code: str) -> None:
    """Render the per-client breakdown table."""
    st.subheader("Clients")
    if not overview.breakdown:
        st.info("No clients assigned to this partner.")
        return
    data = [
        {
            "Client": item.client_name,
            "Profit": _format_currency(item.total_profit, currency_code),
            "Split": (
                f"{_format_percent(item.split_partner)} / "
                f"{_format_percent(item.split_owner)}"
            ),
            "Partner share": _format_currency(
                item.partner_share,
                currency_code,
            ),
            "Owner share": _format_currency(item.owner_share, currency_code),
            "Custom split": "Yes" if item.override else "",
        }
        for item in overview.breakdown
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def _client_names(overview: PartnerOverview) -> dict[str, str]:
    return {client.id: client.display_name for client in overview.clients}


def _render_mark_as_paid(
    overview: PartnerOverview,
    currency_code: str,
) -> None:
    """Render the selection of unpaid apps to settle."""
    st.subheader("Unpaid apps")
    names = _client_names(overview)
    labels: dict[str, str] = {}
    for client_id, apps in overview.apps_by_client.items():
        for app in apps:
            if app.id in overview.paid_app_ids:
                continue
            labels[app.id] = (
                f"{names.get(client_id, 'Unknown')} - "
                f"{app.app_name or 'Unknown App'} "
                f"({_format_currency(app.profit_us, currency_code)} profit)"
            )
    if not labels:
        st.info("Every completed app has been paid.")
        return
    selected = st.multiselect(
        "Apps to mark as paid",
        options=list(labels),
        format_func=lambda app_id: labels[app_id],
    )
    payments = {payment.id: payment for payment in overview.payments}
    target = st.selectbox(
        "Add to payment",
        options=[NEW_PAYMENT_LABEL, *payments],
        format_func=lambda value: value
        if value == NEW_PAYMENT_LABEL
        else (
            f"{payments[value].note or 'Payment'} "
            f"({_format_currency(payments[value].amount, currency_code)})"
        ),
    )
    if st.button("Mark as paid", disabled=not selected) and _run_write(
        lambda: MarkAppsPaidUseCase(_get_store()).execute(
            overview.partner.id,
            selected,
            extend_payment_id=None if target == NEW_PAYMENT_LABEL else target,
        ),
        f"Marked {len(selected)} app(s) as paid",
    ):
        st.rerun()


def _render_paid_apps(overview: PartnerOverview, currency_code: str) -> None:
    """Render per-app payments with an unmark action."""
    st.subheader("Paid apps")
    if not overview.app_payments:
        st.info("No apps marked as paid yet.")
        return
    names = _client_names(overview)
    app_names = {
        app.id: app.app_name or "Unknown App"
        for apps in overview.apps_by_client.values()
        for app in apps
    }
    labels = {
        row.id: (
            f"{names.get(row.client_id, 'Unknown')} - "
            f"{app_names.get(row.client_app_id, 'Unknown App')} "
            f"({_format_currency(row.amount, currency_code)})"
        )
        for row in overview.app_payments
    }
    st.dataframe(
        [
            {
                "App": labels[row.id],
                "Paid at": row.paid_at,
                "Note": row.note or "",
            }
            for row in overview.app_payments
        ],
        width="stretch",
        hide_index=True,
    )
    app_payment_id = st.selectbox(
        "Unmark app",
        options=list(labels),
        format_func=lambda value: labels[value],
    )
    if st.button("Unmark as paid") and _run_write(
        lambda: UnmarkAppPaidUseCase(_get_store()).execute(
            overview.partner.id,
            app_payment_id,
        ),
        "App unmarked",
    ):
        st.rerun()


def _render_payments(overview: PartnerOverview, currency_code: str) -> None:
    """Render partner payments with record, edit and delete actions."""
    st.subheader("Payments")
    partner_id = overview.partner.id
    if overview.payments:
        st.dataframe(
            [
                {
                    "Paid at": payment.paid_at,
                    "Amount": _format_currency(payment.amount, currency_code),
                    "Note": payment.note or "",
                }
                for payment in overview.payments
            ],
            width="stretch",
            hide_index=True,
        )
    else:
        st.info("No payments recorded.")

    with st.form("record_payment"):
        amount = st.number_input("Amount", min_value=0.0, step=10.0)
        note = st.text_input("Note")
        submitted = st.form_submit_button("Record payment")
    if submitted and _run_write(
        lambda: RecordPartnerPaymentUseCase(_get_store()).execute(
            partner_id,
            Decimal(str(amount)),
            note=note,
        ),
        "Payment recorded",
    ):
        st.rerun()

    if not overview.payments:
        return
    payments = {payment.id: payment for payment in overview.payments}
    with st.expander("Edit or delete a payment"):
        payment_id = st.selectbox(
            "Payment",
            options=list(payments),
            format_func=lambda value: (
                f"{payments[value].note or 'Payment'} "
                f"({_format_currency(payments[value].amount, currency_code)})"
            ),
        )
        current = payments[payment_id]
        new_amount = st.number_input(
            "New amount",
            min_value=0.0,
            value=float(current.amount),
            step=10.0,
        )
        new_note = st.text_input("New note", value=current.note or "")
        save_col, delete_col = st.columns(2)
        if save_col.button("Save changes") and _run_write(
            lambda: EditPartnerPaymentUseCase(_get_store()).execute(
                partner_id,
                payment_id,
                Decimal(str(new_amount)),
                note=new_note,
            ),
            "Payment updated",
        ):
            st.rerun()
        if delete_col.button("Delete payment") and _run_write(
            lambda: DeletePartnerPaymentUseCase(_get_store()).execute(
                partner_id,
                payment_id,
            ),
            "Payment deleted",
        ):
            st.rerun()


def _render_partner_settings(overview: PartnerOverview) -> None:
    """Render partner edits, client assignments and per-app splits."""
    partner = overview.partner
    store = _get_store()
    names = _client_names(overview)

    with st.expander("Edit partner"):
        with st.form("edit_partner"):
            name = st.text_input("Name", value=partner.name)
            contact = st.text_input(
                "Contact info",
                value=partner.contact_info or "",
            )
            left, right = st.columns(2)
            partner_pct = left.text_input(
                "Partner %",
                value=_percent_input_value(
                    partner.default_split_partner,
                    DEFAULT_SPLIT_PARTNER,
                ),
            )
            owner_pct = right.text_input(
                "Owner %",
                value=_percent_input_value(
                    partner.default_split_owner,
                    DEFAULT_SPLIT_OWNER,
                ),
            )
            notes = st.text_area("Notes", value=partner.notes or "")
            submitted = st.form_submit_button("Save partner")
        if submitted and _run_write(
            lambda: UpdatePartnerUseCase(store).execute(
                partner.id,
                name,
                partner_pct,
                owner_pct,
                contact_info=contact,
                notes=notes,
            ),
            "Partner updated",
        ):
            st.rerun()

    with st.expander("Client assignments"):
        assigned = {item.client_id: item for item in overview.assignments}
        available = [cid for cid in names if cid not in assigned]
        with st.form("assign_client"):
            client_id = st.selectbox(
                "Client",
                options=available,
                format_func=lambda value: names[value],
            )
            left, right = st.columns(2)
            override_partner = left.text_input("Partner % override")
            override_owner = right.text_input("Owner % override")
            submitted = st.form_submit_button("Assign client")
        if submitted and _run_write(
            lambda: AssignClientUseCase(store).execute(
                partner.id,
                client_id,
                override_partner,
                override_owner,
            ),
            "Client assigned",
        ):
            st.rerun()
        if assigned:
            assignment_id = st.selectbox(
                "Remove assignment",
                options=[item.id for item in assigned.values()],
                format_func=lambda value: next(
                    names.get(item.client_id, "Unknown")
                    for item in assigned.values()
                    if item.id == value
                ),
            )
            if st.button("Remove client") and _run_write(
                lambda: UnassignClientUseCase(store).execute(assignment_id),
                "Assignment removed",
            ):
                st.rerun()

    with st.expander("App splits"):
        app_names = overview.app_names
        if overview.app_splits:
            st.dataframe(
                [
                    {
                        "App": app_names.get(split.app_id, split.app_id),
                        "Partner": _format_percent(split.split_partner),
                        "Owner": _format_percent(split.split_owner),
                        "Notes": split.notes or "",
                    }
                    for split in overview.app_splits
                ],
                width="stretch",
                hide_index=True,
            )
        with st.form("save_app_split"):
            app_id = st.selectbox(
                "App",
                options=list(app_names),
                format_func=lambda value: app_names[value],
            )
            left, right = st.columns(2)
            split_partner = left.text_input("Partner %")
            split_owner = right.text_input("Owner %")
            submitted = st.form_submit_button("Save split")
        if submitted and _run_write(
            lambda: SavePartnerAppSplitUseCase(store).execute(
                partner.id,
                app_id,
                split_partner,
                split_owner,
            ),
            "App split saved",
        ):
            st.rerun()
        if overview.app_splits:
            splits = {split.id: split for split in overview.app_splits}
            split_id = st.selectbox(
                "Remove split",
                options=list(splits),
                format_func=lambda value: app_names.get(
                    splits[value].app_id,
                    splits[value].app_id,
                ),
            )
            if st.button("Delete split") and _run_write(
                lambda: DeletePartnerAppSplitUseCase(store).execute(
                    partner.id,
                    split_id,
                ),
                "App split deleted",
            ):
                st.rerun()


def _render_partner_detail_page(currency_code: str) -> None:
    """Render metrics, breakdown, chart and payments of one partner."""
    portfolio = _load_partner_summaries(None, "all")
    partners = {
        summary.partner.id: summary.partner.name
        for summary in portfolio.summaries
    }
    if not partners:
        st.warning("No partners yet. Create one on the Partners page.")
        return
    partner_id = st.sidebar.selectbox(
        "Partner",
        options=list(partners),
        format_func=lambda value: partners[value],
    )
    overview = _load_partner_overview(partner_id)
    balance = overview.balance

    st.header(overview.partner.name)
    if overview.partner.contact_info:
        st.caption(overview.partner.contact_info)
    profit_col, share_col, paid_col, balance_col = st.columns(4)
    profit_col.metric(
        "Total profit",
        _format_currency(balance.total_profit, currency_code),
    )
    share_col.metric(
        "Partner share",
        _format_currency(balance.partner_share, currency_code),
    )
    paid_col.metric(
        "Paid",
        _format_currency(balance.total_paid, currency_code),
    )
    balance_col.metric(
        "Balance due",
        _format_currency(balance.balance, currency_code),
    )

    _render_breakdown(overview, currency_code)
    _render_monthly_chart(list(overview.monthly), currency_code)
    _render_mark_as_paid(overview, currency_code)
    _render_paid_apps(overview, currency_code)
    _render_payments(overview, currency_code)
    _render_partner_settings(overview)


def _debt_label(view: DebtView, currency_code: str) -> str:
    remaining = _format_currency(view.amounts.remaining_amount, currency_code)
    return (
        f"{view.debt.kind}: {view.debtor_name} -> {view.creditor_name} "
        f"({remaining} left)"
    )


def _render_debt_actions(
    views: Sequence[DebtView],
    currency_code: str,
) -> None:
    """Render payment and settlement actions for one debt."""
    st.subheader("Record a payment")
    by_id = {f"{view.debt.kind}:{view.debt.id}": view for view in views}
    key = st.selectbox(
        "Debt",
        options=list(by_id),
        format_func=lambda value: _debt_label(by_id[value], currency_code),
    )
    view = by_id[key]
    amount = st.number_input("Amount", min_value=0.0, step=5.0)
    sources = _load_payment_sources()
    recipient = st.selectbox(
        "Recipient",
        options=[*sources, NEW_SOURCE_LABEL],
    )
    is_new_source = recipient == NEW_SOURCE_LABEL
    if is_new_source:
        recipient = st.text_input("New source name")
    notes = st.text_input("Notes")

    def _record() -> None:
        if is_new_source:
            AddPaymentSourceUseCase(_get_store()).execute(recipient)
        RecordDebtPaymentUseCase(_get_store()).execute(
            view.debt.kind,
            view.debt.id,
            Decimal(str(amount)),
            notes=notes,
            recipient=recipient,
        )

    pay_col, settle_col = st.columns(2)
    if pay_col.button("Record payment") and _run_write(
        _record,
        "Payment recorded",
    ):
        st.rerun()
    if settle_col.button("Settle remaining") and _run_write(
        lambda: SettleDebtUseCase(_get_store()).execute(
            view.debt.kind,
            view.debt.id,
            notes=notes,
            recipient=recipient,
        ),
        "Debt settled",
    ):
        st.rerun()


def _render_debts_page(currency_code: str) -> None:
    """Render referral and deposit debts with filters."""
    creditors = {
        view.debt.creditor_client_id: view.creditor_name
        for view in _load_debts(None, DEBT_KINDS[0])
        if view.debt.creditor_client_id
    }
    kind_col, status_col, creditor_col = st.columns(3)
    kind = kind_col.selectbox("Kind", options=["all", *DEBT_KINDS])
    status = status_col.selectbox("Status", options=DEBT_STATUS_OPTIONS)
    creditor = creditor_col.selectbox(
        "Creditor",
        options=["all", *creditors],
        format_func=lambda value: creditors.get(value, "All"),
    )
    views = _load_debts(
        None if status == "all" else status,
        None if kind == "all" else kind,
        None if creditor == "all" else creditor,
    )

    st.caption(f"{len(views)} debts shown")
    if not views:
        st.info("No debts match the filters.")
        return
    data = [
        {
            "Kind": view.debt.kind,
            "Debtor": view.debtor_name,
            "Creditor": view.creditor_name,
            "Amount": _format_currency(
                view.amounts.base_amount,
                currency_code,
            ),
            "Paid": _format_currency(
                view.amounts.paid_amount,
                currency_code,
            ),
            "Remaining": _format_currency(
                view.amounts.remaining_amount,
                currency_code,
            ),
            "Surplus": _format_currency(
                view.amounts.surplus,
                currency_code,
            ),
            "Status": view.debt.status,
            "Created": view.debt.created_at,
            "Description": view.debt.description or "",
        }
        for view in views
    ]
    st.dataframe(data, width="stretch", hide_index=True)
    _render_debt_actions(views, currency_code)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Partner Ledger", layout="wide")
    st.title("Partner Ledger")

    currency_code = _get_settings().currency
    page = st.sidebar.selectbox("Page", PAGES)

    try:
        if page == "Partners":
            _render_partners_page(currency_code)
        elif page == "Partner detail":
            _render_partner_detail_page(currency_code)
        else:
            _render_debts_page(currency_code)
    except LedgerError as exc:
        st.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
