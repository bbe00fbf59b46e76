"""Use cases for manual partner payments."""

from datetime import datetime

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row, TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.application.use_cases.write_guard import (
    guarded_write,
    utc_now,
)
from partner_ledger.domain.errors import RecordNotFoundError
from partner_ledger.domain.models import PartnerPayment
from partner_ledger.domain.services.reconciliation import (
    parse_note_identifiers,
    preserve_identifiers,
)
from partner_ledger.domain.services.validation import (
    validate_positive_amount,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger


def _clean_note(note: str | None) -> str | None:
    text = (note or "").strip()
    return text or None


class _PartnerPaymentUseCase:
    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()

    def _fetch_payment(
        self,
        partner_id: str,
        payment_id: str,
    ) -> PartnerPayment:
        for payment in self._records.fetch_partner_payments(partner_id):
            if payment.id == payment_id:
                return payment
        raise RecordNotFoundError(f"Partner payment not found: {payment_id}")


class RecordPartnerPaymentUseCase(_PartnerPaymentUseCase):
    """Record a manual payment made to a partner."""

    def execute(
        self,
        partner_id: str,
        amount,
        note: str | None = None,
        paid_at: datetime | None = None,
    ) -> Row:
        """Insert the payment.

        Args:
            partner_id: Partner receiving the payment.
            amount: Amount paid, must be greater than zero.
            note: Optional free-text note.
            paid_at: Payment timestamp; defaults to now.

        Returns:
            Row: The inserted partner_payments row.
        """
        parsed = validate_positive_amount(amount)
        self._records.fetch_partner(partner_id)
        with guarded_write(self._store, self._logger, "record payment"):
            row = self._store.insert(
                tables.PARTNER_PAYMENTS,
                {
                    "partner_id": partner_id,
                    "amount": parsed,
                    "note": _clean_note(note),
                    "paid_at": paid_at or utc_now(),
                },
            )
        self._logger.info(
            f"Recorded payment of {parsed} for partner {partner_id}"
        )
        return row


class EditPartnerPaymentUseCase(_PartnerPaymentUseCase):
    """Edit the amount and note of a partner payment.

    A bracketed id list on the original note is kept so the payment stays
    linked to the apps it settled.
    """

    def execute(
        self,
        partner_id: str,
        payment_id: str,
        amount,
        note: str | None = None,
    ) -> Row:
        parsed = validate_positive_amount(amount)
        payment = self._fetch_payment(partner_id, payment_id)
        new_note = preserve_identifiers(payment.note, _clean_note(note))
        with guarded_write(self._store, self._logger, "update payment"):
            row = self._store.update(
                tables.PARTNER_PAYMENTS,
                {"amount": parsed, "note": new_note},
                payment_id,
            )
        self._logger.info(f"Updated partner payment {payment_id}")
        return row


class DeletePartnerPaymentUseCase(_PartnerPaymentUseCase):
    """Delete a partner payment together with the per-app rows it covers."""

    def execute(self, partner_id: str, payment_id: str) -> list[str]:
        """Delete the payment.

        Per-app rows are removed when they link to the payment, or when the
        payment note lists their client-app id.

        Returns:
            list[str]: Ids of the per-app payment rows removed.
        """
        payment = self._fetch_payment(partner_id, payment_id)
        note_ids = set(parse_note_identifiers(payment.note))
        linked = [
            row.id
            for row in self._records.fetch_app_payments(partner_id)
            if row.partner_payment_id == payment_id
            or (
                row.partner_payment_id is None
                and row.client_app_id in note_ids
            )
        ]
        with guarded_write(self._store, self._logger, "delete payment"):
            for app_payment_id in linked:
                self._store.remove(tables.APP_PAYMENTS, app_payment_id)
            self._store.remove(tables.PARTNER_PAYMENTS, payment_id)
        self._logger.info(
            f"Deleted partner payment {payment_id} and "
            f"{len(linked)} app payment(s)"
        )
        return linked


__all__ = [
    "RecordPartnerPaymentUseCase",
    "EditPartnerPaymentUseCase",
    "DeletePartnerPaymentUseCase",
]
