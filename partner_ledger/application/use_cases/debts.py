"""Use cases listing and paying down referral and deposit debts."""

from datetime import datetime

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row, TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.application.use_cases.write_guard import (
    guarded_write,
    utc_now,
)
from partner_ledger.domain.constants import (
    DEBT_KIND_DEPOSIT,
    DEBT_KINDS,
    SETTLED_STATUS_BY_KIND,
)
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import Debt, DebtAmounts, DebtView
from partner_ledger.domain.services.debts import (
    compute_debt_amounts,
    debt_amounts,
    status_for_amounts,
    validate_debt_payment,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger

BUSINESS_LABEL = "Business"

_SETTLED_COLUMN_BY_KIND = {
    "referral": "settled_at",
    "deposit": "paid_back_at",
}


def _status_patch(kind: str, status: str, timestamp: datetime) -> Row:
    patch: Row = {"status": status}
    if status == SETTLED_STATUS_BY_KIND[kind]:
        patch[_SETTLED_COLUMN_BY_KIND[kind]] = timestamp
    return patch


def _clean(value: str | None) -> str | None:
    text = (value or "").strip()
    return text or None


class GetDebtsUseCase:
    """List referral and deposit debts with their derived amounts."""

    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        status: str | None = None,
        creditor_client_id: str | None = None,
        kind: str | None = None,
    ) -> list[DebtView]:
        """Return debts, newest first.

        Args:
            status: Stored status to keep, or None / "all" for every debt.
            creditor_client_id: Keep only referral debts owed to this
                client.
            kind: "referral", "deposit" or None for both.

        Returns:
            list[DebtView]: Debts with names and amounts resolved.
        """
        if kind is not None and kind not in DEBT_KINDS:
            raise LedgerValidationError(f"Unknown debt kind: {kind}")
        names = {
            client.id: client.display_name
            for client in self._records.fetch_clients()
        }
        payments = self._records.fetch_debt_payments()

        views: list[DebtView] = []
        for debt in self._records.fetch_debts(kind):
            if status not in (None, "all") and debt.status != status:
                continue
            if (
                creditor_client_id
                and debt.creditor_client_id != creditor_client_id
            ):
                continue
            views.append(
                DebtView(
                    debt=debt,
                    amounts=debt_amounts(debt, payments),
                    creditor_name=self._creditor_name(debt, names),
                    debtor_name=names.get(debt.debtor_client_id, "Unknown"),
                )
            )
        views.sort(
            key=lambda view: view.debt.created_at.timestamp()
            if view.debt.created_at
            else float("-inf"),
            reverse=True,
        )
        self._logger.info(f"Loaded {len(views)} debt(s)")
        return views

    @staticmethod
    def _creditor_name(debt: Debt, names: dict[str, str]) -> str:
        if debt.kind == DEBT_KIND_DEPOSIT:
            return BUSINESS_LABEL
        return names.get(debt.creditor_client_id, "Unknown")


class _DebtWriteUseCase:
    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def _current(self, kind: str, debt_id: str) -> tuple[Debt, DebtAmounts]:
        if kind not in DEBT_KINDS:
            raise LedgerValidationError(f"Unknown debt kind: {kind}")
        debt = self._records.fetch_debt(kind, debt_id)
        payments = self._records.fetch_debt_payments(kind, debt_id)
        return debt, debt_amounts(debt, payments)

    def _insert_payment(
        self,
        debt: Debt,
        amount,
        paid_at: datetime,
        notes: str | None,
        recipient: str | None,
    ) -> Row:
        return self._store.insert(
            tables.DEBT_PAYMENTS,
            {
                "debt_kind": debt.kind,
                "debt_id": debt.id,
                "amount": amount,
                "paid_at": paid_at,
                "notes": _clean(notes),
                "recipient": _clean(recipient),
            },
        )


class RecordDebtPaymentUseCase(_DebtWriteUseCase):
    """Record a payment against a debt and refresh its status."""

    def execute(
        self,
        kind: str,
        debt_id: str,
        amount,
        notes: str | None = None,
        recipient: str | None = None,
        paid_at: datetime | None = None,
    ) -> DebtAmounts:
        """Insert the payment.

        Args:
            kind: Debt kind.
            debt_id: Debt being paid.
            amount: Amount paid; referral payments are capped at the
                remaining balance.
            notes: Optional notes.
            recipient: Optional payment source or recipient label.
            paid_at: Payment timestamp; defaults to now.

        Returns:
            DebtAmounts: Amounts after the payment.

        Raises:
            LedgerValidationError: If the amount is rejected.
            LedgerOperationError: If a write fails; nothing is kept.
        """
        debt, amounts = self._current(kind, debt_id)
        parsed = validate_debt_payment(
            kind,
            amounts.remaining_amount,
            amount,
        )
        timestamp = paid_at or utc_now()
        after = compute_debt_amounts(
            kind,
            amounts.base_amount,
            amounts.paid_amount + parsed,
        )
        status = status_for_amounts(kind, after)

        with guarded_write(self._store, self._logger, "record payment"):
            self._insert_payment(debt, parsed, timestamp, notes, recipient)
            if status != debt.status:
                self._store.update(
                    tables.DEBT_TABLES[kind],
                    _status_patch(kind, status, timestamp),
                    debt_id,
                )
        self._logger.info(
            f"Recorded {parsed} on {kind} debt {debt_id} (status={status})"
        )
        return after


class SettleDebtUseCase(_DebtWriteUseCase):
    """Pay off the remaining balance of a debt and close it."""

    def execute(
        self,
        kind: str,
        debt_id: str,
        notes: str | None = None,
        recipient: str | None = None,
        paid_at: datetime | None = None,
    ) -> DebtAmounts:
        """Settle the debt.

        A final payment equal to the remaining balance is recorded when
        something is still owed, and the status moves to the terminal one
        of the debt kind. A debt already closed keeps its settlement date.

        Returns:
            DebtAmounts: Amounts after settlement.
        """
        debt, amounts = self._current(kind, debt_id)
        remaining = amounts.remaining_amount
        timestamp = paid_at or utc_now()
        status = SETTLED_STATUS_BY_KIND[kind]

        with guarded_write(self._store, self._logger, "settle debt"):
            if remaining > 0:
                self._insert_payment(
                    debt,
                    remaining,
                    timestamp,
                    notes,
                    recipient,
                )
            if debt.status != status:
                self._store.update(
                    tables.DEBT_TABLES[kind],
                    _status_patch(kind, status, timestamp),
                    debt_id,
                )
        self._logger.info(f"Settled {kind} debt {debt_id} ({remaining})")
        return compute_debt_amounts(
            kind,
            amounts.base_amount,
            amounts.paid_amount + remaining,
        )


__all__ = [
    "GetDebtsUseCase",
    "RecordDebtPaymentUseCase",
    "SettleDebtUseCase",
    "BUSINESS_LABEL",
]
