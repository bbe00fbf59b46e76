"""Use case to revert a per-app partner payment."""

from dataclasses import dataclass

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.application.use_cases.write_guard import guarded_write
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.domain.services.reconciliation import (
    find_aggregate_payment,
    plan_unmark,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class UnmarkAppPaidResult:
    """Outcome of an unmark.

    Attributes:
        aggregate_payment_id: Aggregate payment touched, if one was found.
        aggregate_deleted: True when the aggregate payment was removed.
        strategy: How the aggregate payment was matched, if at all.
    """

    app_payment_id: str
    aggregate_payment_id: str | None
    aggregate_deleted: bool
    strategy: str | None


class UnmarkAppPaidUseCase:
    """Remove a per-app payment and shrink or delete its aggregate payment."""

    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        partner_id: str,
        app_payment_id: str,
    ) -> UnmarkAppPaidResult:
        """Unmark one app.

        The per-app payment row is always deleted. The aggregate payment is
        deleted when it only covered this app, otherwise its amount and
        note are reduced.

        Raises:
            RecordNotFoundError: If the per-app payment does not exist.
            LedgerOperationError: If a write fails; nothing is kept.
        """
        app_payments = self._records.fetch_app_payments(partner_id)
        app_payment = next(
            (row for row in app_payments if row.id == app_payment_id),
            None,
        )
        if app_payment is None:
            raise RecordNotFoundError(
                f"App payment not found: {app_payment_id}"
            )

        client_names = {
            client.id: client.display_name
            for client in self._records.fetch_clients()
        }
        client_name = client_names.get(app_payment.client_id, "Unknown Client")
        app_name = next(
            (
                app.app_name
                for app in self._records.fetch_client_apps()
                if app.id == app_payment.client_app_id
            ),
            None,
        ) or "Unknown App"

        match = find_aggregate_payment(
            app_payment,
            self._records.fetch_partner_payments(partner_id),
            app_name=app_name,
            client_name=client_name,
        )
        plan = plan_unmark(
            app_payment,
            match,
            client_name=client_name,
            client_names_by_app={
                row.client_app_id: client_names.get(
                    row.client_id,
                    "Unknown Client",
                )
                for row in app_payments
            },
        )
        if match is None:
            self._logger.warning(
                f"No aggregate payment found for app payment "
                f"{app_payment_id}; only the per-app row is removed"
            )

        with guarded_write(self._store, self._logger, "unmark app as paid"):
            if plan.aggregate_payment_id is not None:
                if plan.delete_aggregate:
                    self._store.remove(
                        tables.PARTNER_PAYMENTS,
                        plan.aggregate_payment_id,
                    )
                else:
                    self._store.update(
                        tables.PARTNER_PAYMENTS,
                        {"amount": plan.new_amount, "note": plan.new_note},
                        plan.aggregate_payment_id,
                    )
            self._store.remove(tables.APP_PAYMENTS, app_payment_id)

        self._logger.info(
            f"Unmarked {app_name} for {client_name} "
            f"(strategy={match.strategy if match else None})"
        )
        return UnmarkAppPaidResult(
            app_payment_id=app_payment_id,
            aggregate_payment_id=plan.aggregate_payment_id,
            aggregate_deleted=plan.delete_aggregate,
            strategy=match.strategy if match else None,
        )


__all__ = ["UnmarkAppPaidUseCase", "UnmarkAppPaidResult"]
