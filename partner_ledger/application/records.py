"""Mapping of raw table rows to domain models."""

from datetime import date, datetime
from typing import Any

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row, RowFetchPort
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    ClientRow,
    Debt,
    DebtPayment,
    Partner,
    PartnerAppPayment,
    PartnerAppSplit,
    PartnerPayment,
    PaymentSource,
)
from partner_ledger.utils.decimal_utils import (
    coerce_decimal,
    coerce_optional_decimal,
)


def to_datetime(value: Any) -> datetime | None:
    """Normalize timestamps coming from SQL rows or ISO strings."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def partner_from_row(row: Row) -> Partner:
    """Build a Partner from a client_partners row."""
    return Partner(
        id=str(row["id"]),
        name=row.get("name") or "",
        default_split_partner=coerce_optional_decimal(
            row.get("default_split_partner")
        ),
        default_split_owner=coerce_optional_decimal(
            row.get("default_split_owner")
        ),
        contact_info=row.get("contact_info"),
        notes=row.get("notes"),
        created_at=to_datetime(row.get("created_at")),
    )


def assignment_from_row(row: Row) -> ClientPartnerAssignment:
    """Build an assignment from a client_partner_assignments row."""
    return ClientPartnerAssignment(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        partner_id=str(row["partner_id"]),
        split_partner_override=coerce_optional_decimal(
            row.get("split_partner_override")
        ),
        split_owner_override=coerce_optional_decimal(
            row.get("split_owner_override")
        ),
        notes=row.get("notes"),
        assigned_at=to_datetime(row.get("assigned_at")),
    )


def app_split_from_row(row: Row) -> PartnerAppSplit:
    """Build a PartnerAppSplit from a partner_app_splits row."""
    return PartnerAppSplit(
        id=str(row["id"]),
        partner_id=str(row["partner_id"]),
        app_id=str(row["app_id"]),
        split_partner=coerce_decimal(row.get("split_partner")),
        split_owner=coerce_decimal(row.get("split_owner")),
        notes=row.get("notes"),
    )


def client_from_row(row: Row) -> ClientRow:
    """Build a ClientRow from a clients row."""
    return ClientRow(
        id=str(row["id"]),
        name=row.get("name") or "",
        surname=row.get("surname"),
    )


def client_app_from_row(
    row: Row,
    app_names: dict[str, str] | None = None,
) -> ClientAppRow:
    """Build a ClientAppRow, resolving the app name when known."""
    app_id = _optional_str(row.get("app_id"))
    app_name = row.get("app_name")
    if app_name is None and app_id is not None and app_names:
        app_name = app_names.get(app_id)
    return ClientAppRow(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        app_id=app_id,
        profit_us=coerce_decimal(row.get("profit_us")),
        status=row.get("status") or "",
        app_name=app_name,
        completed_at=to_datetime(row.get("completed_at")),
        created_at=to_datetime(row.get("created_at")),
    )


def partner_payment_from_row(row: Row) -> PartnerPayment:
    """Build a PartnerPayment from a partner_payments row."""
    return PartnerPayment(
        id=str(row["id"]),
        partner_id=str(row["partner_id"]),
        amount=coerce_decimal(row.get("amount")),
        note=row.get("note"),
        paid_at=to_datetime(row.get("paid_at")),
    )


def app_payment_from_row(row: Row) -> PartnerAppPayment:
    """Build a PartnerAppPayment from a per-app payment row."""
    return PartnerAppPayment(
        id=str(row["id"]),
        partner_id=str(row["partner_id"]),
        client_id=str(row["client_id"]),
        client_app_id=str(row["client_app_id"]),
        amount=coerce_decimal(row.get("amount")),
        note=row.get("note"),
        paid_at=to_datetime(row.get("paid_at")),
        partner_payment_id=_optional_str(row.get("partner_payment_id")),
    )


def referral_debt_from_row(row: Row) -> Debt:
    """Build a referral Debt from a referral_link_debts row."""
    return Debt(
        id=str(row["id"]),
        kind="referral",
        amount=coerce_decimal(row.get("amount")),
        status=row.get("status") or "open",
        created_at=to_datetime(row.get("created_at")),
        description=row.get("description"),
        assignee=row.get("assignee"),
        creditor_client_id=_optional_str(row.get("creditor_client_id")),
        debtor_client_id=_optional_str(row.get("debtor_client_id")),
        referral_link_id=_optional_str(row.get("referral_link_id")),
    )


def deposit_debt_from_row(row: Row) -> Debt:
    """Build a deposit Debt from a deposit_debts row."""
    return Debt(
        id=str(row["id"]),
        kind="deposit",
        amount=coerce_decimal(row.get("amount")),
        status=row.get("status") or "open",
        created_at=to_datetime(row.get("created_at")),
        description=row.get("description"),
        assignee=row.get("assignee"),
        debtor_client_id=_optional_str(row.get("client_id")),
        client_app_id=_optional_str(row.get("client_app_id")),
        deposit_source=row.get("deposit_source"),
    )


def debt_payment_from_row(row: Row) -> DebtPayment:
    """Build a DebtPayment from a debt_payments row."""
    return DebtPayment(
        id=str(row["id"]),
        debt_kind=row["debt_kind"],
        debt_id=str(row["debt_id"]),
        amount=coerce_decimal(row.get("amount")),
        paid_at=to_datetime(row.get("paid_at")),
        notes=row.get("notes"),
        recipient=row.get("recipient"),
    )


class LedgerRecords:
    """Typed read access to ledger tables through a RowFetchPort."""

    def __init__(self, fetch_port: RowFetchPort) -> None:
        """Initialize the reader.

        Args:
            fetch_port: Port returning raw table rows.
        """
        self._fetch_port = fetch_port

    def fetch_partner(self, partner_id: str) -> Partner:
        """Return one partner.

        Raises:
            RecordNotFoundError: If the partner does not exist.
        """
        rows = self._fetch_port.fetch(
            tables.PARTNERS,
            match={"id": partner_id},
        )
        if not rows:
            raise RecordNotFoundError(f"Partner not found: {partner_id}")
        return partner_from_row(rows[0])

    def fetch_partners(self) -> list[Partner]:
        rows = self._fetch_port.fetch(tables.PARTNERS, order_by="name")
        return [partner_from_row(row) for row in rows]

    def fetch_assignments(
        self,
        partner_id: str | None = None,
    ) -> list[ClientPartnerAssignment]:
        rows = self._fetch_port.fetch(
            tables.ASSIGNMENTS,
            match={"partner_id": partner_id},
        )
        return [assignment_from_row(row) for row in rows]

    def fetch_app_splits(
        self,
        partner_id: str | None = None,
    ) -> list[PartnerAppSplit]:
        rows = self._fetch_port.fetch(
            tables.APP_SPLITS,
            match={"partner_id": partner_id},
        )
        return [app_split_from_row(row) for row in rows]

    def fetch_clients(self) -> list[ClientRow]:
        rows = self._fetch_port.fetch(
            tables.CLIENTS,
            columns=("id", "name", "surname"),
            order_by="name",
        )
        return [client_from_row(row) for row in rows]

    def fetch_client_apps(self) -> list[ClientAppRow]:
        """Return client-app rows with app names resolved."""
        app_names = {
            str(row["id"]): row.get("name") or ""
            for row in self._fetch_port.fetch(
                tables.APPS,
                columns=("id", "name"),
            )
        }
        rows = self._fetch_port.fetch(
            tables.CLIENT_APPS,
            columns=(
                "id",
                "client_id",
                "app_id",
                "profit_us",
                "status",
                "completed_at",
                "created_at",
            ),
        )
        return [client_app_from_row(row, app_names) for row in rows]

    def fetch_partner_payments(
        self,
        partner_id: str | None = None,
    ) -> list[PartnerPayment]:
        rows = self._fetch_port.fetch(
            tables.PARTNER_PAYMENTS,
            match={"partner_id": partner_id},
            order_by="paid_at",
            ascending=False,
        )
        return [partner_payment_from_row(row) for row in rows]

    def fetch_app_payments(
        self,
        partner_id: str | None = None,
    ) -> list[PartnerAppPayment]:
        rows = self._fetch_port.fetch(
            tables.APP_PAYMENTS,
            match={"partner_id": partner_id},
        )
        return [app_payment_from_row(row) for row in rows]

    def fetch_debts(self, kind: str | None = None) -> list[Debt]:
        """Return referral and deposit debts as one list."""
        debts: list[Debt] = []
        if kind in (None, "referral"):
            debts.extend(
                referral_debt_from_row(row)
                for row in self._fetch_port.fetch(tables.REFERRAL_DEBTS)
            )
        if kind in (None, "deposit"):
            debts.extend(
                deposit_debt_from_row(row)
                for row in self._fetch_port.fetch(tables.DEPOSIT_DEBTS)
            )
        return debts

    def fetch_debt(self, kind: str, debt_id: str) -> Debt:
        """Return one debt.

        Raises:
            RecordNotFoundError: If the debt does not exist.
        """
        table = tables.DEBT_TABLES.get(kind)
        if table is None:
            raise RecordNotFoundError(f"Unknown debt kind: {kind}")
        rows = self._fetch_port.fetch(table, match={"id": debt_id})
        if not rows:
            raise RecordNotFoundError(f"Debt not found: {kind}/{debt_id}")
        if kind == "referral":
            return referral_debt_from_row(rows[0])
        return deposit_debt_from_row(rows[0])

    def fetch_debt_payments(
        self,
        kind: str | None = None,
        debt_id: str | None = None,
    ) -> list[DebtPayment]:
        rows = self._fetch_port.fetch(
            tables.DEBT_PAYMENTS,
            match={"debt_kind": kind, "debt_id": debt_id},
            order_by="paid_at",
        )
        return [debt_payment_from_row(row) for row in rows]

    def fetch_payment_sources(self) -> list[PaymentSource]:
        rows = self._fetch_port.fetch(tables.PAYMENT_SOURCES, order_by="label")
        return [
            PaymentSource(id=str(row["id"]), label=row.get("label") or "")
            for row in rows
        ]


__all__ = [
    "to_datetime",
    "partner_from_row",
    "assignment_from_row",
    "app_split_from_row",
    "client_from_row",
    "client_app_from_row",
    "partner_payment_from_row",
    "app_payment_from_row",
    "referral_debt_from_row",
    "deposit_debt_from_row",
    "debt_payment_from_row",
    "LedgerRecords",
]
