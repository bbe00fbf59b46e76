"""Use case to mark completed apps as paid to a partner."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.domain.services.reconciliation import plan_mark_as_paid
from partner_ledger.application.use_cases.write_guard import (
    guarded_write,
    utc_now,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class MarkAppsPaidResult:
    """Outcome of a mark-as-paid run.

    Attributes:
        payment_id: Aggregate payment inserted or extended.
        app_payment_ids: Per-app payment rows inserted.
        amount: Partner share settled by this run.
    """

    payment_id: str
    app_payment_ids: list[str]
    amount: Decimal

    @property
    def settled_count(self) -> int:
        return len(self.app_payment_ids)


class MarkAppsPaidUseCase:
    """Settle one or more client apps with a single aggregate payment.

    Each app gets a per-app payment row linked to the aggregate payment,
    whose note lists the settled client-app ids.
    """

    def __init__(self, store: TableStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port reading and writing ledger rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        partner_id: str,
        client_app_ids: Iterable[str],
        extend_payment_id: str | None = None,
        paid_at: datetime | None = None,
    ) -> MarkAppsPaidResult:
        """Mark the selected apps as paid.

        Args:
            partner_id: Partner being paid.
            client_app_ids: Selected client-app ids.
            extend_payment_id: Optional aggregate payment to add the batch to.
            paid_at: Payment timestamp; defaults to now.

        Returns:
            MarkAppsPaidResult: Written payment ids and settled amount.

        Raises:
            LedgerValidationError: If no selected app can be settled.
            LedgerOperationError: If a write fails; nothing is kept.
        """
        partner = self._records.fetch_partner(partner_id)
        payments = self._records.fetch_partner_payments(partner_id)
        extend_payment = None
        if extend_payment_id is not None:
            extend_payment = next(
                (p for p in payments if p.id == extend_payment_id),
                None,
            )
            if extend_payment is None:
                raise RecordNotFoundError(
                    f"Partner payment not found: {extend_payment_id}"
                )

        plan = plan_mark_as_paid(
            partner,
            self._records.fetch_assignments(partner_id),
            self._records.fetch_client_apps(),
            client_app_ids,
            client_names={
                client.id: client.display_name
                for client in self._records.fetch_clients()
            },
            app_splits=self._records.fetch_app_splits(partner_id),
            app_payments=self._records.fetch_app_payments(partner_id),
            extend_payment=extend_payment,
        )
        timestamp = paid_at or utc_now()

        app_payment_ids: list[str] = []
        with guarded_write(self._store, self._logger, "mark apps as paid"):
            if plan.extend_payment is not None:
                payment_id = plan.extend_payment.id
                self._store.update(
                    tables.PARTNER_PAYMENTS,
                    {"amount": plan.payment_amount, "note": plan.note},
                    payment_id,
                )
            else:
                payment = self._store.insert(
                    tables.PARTNER_PAYMENTS,
                    {
                        "partner_id": partner_id,
                        "amount": plan.payment_amount,
                        "note": plan.note,
                        "paid_at": timestamp,
                    },
                )
                payment_id = str(payment["id"])
            for settlement in plan.settlements:
                row = self._store.insert(
                    tables.APP_PAYMENTS,
                    {
                        "partner_id": partner_id,
                        "client_id": settlement.client_id,
                        "client_app_id": settlement.client_app_id,
                        "amount": settlement.amount,
                        "note": settlement.note,
                        "paid_at": timestamp,
                        "partner_payment_id": payment_id,
                    },
                )
                app_payment_ids.append(str(row["id"]))

        self._logger.info(
            f"Marked {len(app_payment_ids)} app(s) as paid for partner "
            f"{partner_id}: {plan.batch_amount}"
        )
        return MarkAppsPaidResult(
            payment_id=payment_id,
            app_payment_ids=app_payment_ids,
            amount=plan.batch_amount,
        )


__all__ = ["MarkAppsPaidUseCase", "MarkAppsPaidResult"]
