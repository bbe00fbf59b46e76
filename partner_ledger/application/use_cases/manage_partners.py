"""Use cases administering partners, assignments and per-app splits."""

from partner_ledger.application import tables
from partner_ledger.application.ports.table_store import Row, TableStorePort
from partner_ledger.application.records import LedgerRecords
from partner_ledger.application.use_cases.write_guard import (
    guarded_write,
    utc_now,
)
from partner_ledger.domain.constants import (
    DEFAULT_SPLIT_OWNER,
    DEFAULT_SPLIT_PARTNER,
)
from partner_ledger.domain.errors import (
    LedgerValidationError,
    RecordNotFoundError,
)
from partner_ledger.domain.services.validation import (
    parse_optional_percentage,
    validate_split_percentages,
)
from partner_ledger.infrastructure.logging.logger import get_app_logger

_HUNDRED = 100


def _clean(value: str | None) -> str | None:
    text = (value or "").strip()
    return text or None


def _require_name(name: str | None) -> str:
    cleaned = _clean(name)
    if cleaned is None:
        raise LedgerValidationError("Partner name is required")
    return cleaned


class _PartnerAdminUseCase:
    def __init__(self, store: TableStorePort, logger=None) -> None:
        self._store = store
        self._records = LedgerRecords(store)
        self._logger = logger or get_app_logger()


class CreatePartnerUseCase(_PartnerAdminUseCase):
    """Create a partner with a default split."""

    def execute(
        self,
        name: str,
        split_partner_percent=DEFAULT_SPLIT_PARTNER * _HUNDRED,
        split_owner_percent=DEFAULT_SPLIT_OWNER * _HUNDRED,
        contact_info: str | None = None,
        notes: str | None = None,
    ) -> Row:
        """Insert a partner.

        Args:
            name: Partner display name.
            split_partner_percent: Partner percentage as typed (0-100).
            split_owner_percent: Owner percentage as typed (0-100).
            contact_info: Optional contact details.
            notes: Optional notes.

        Returns:
            Row: The inserted client_partners row.

        Raises:
            LedgerValidationError: If the name is blank or the percentages
                do not add up to 100.
        """
        cleaned = _require_name(name)
        partner_split, owner_split = validate_split_percentages(
            split_partner_percent,
            split_owner_percent,
        )
        with guarded_write(self._store, self._logger, "create partner"):
            row = self._store.insert(
                tables.PARTNERS,
                {
                    "name": cleaned,
                    "default_split_partner": partner_split,
                    "default_split_owner": owner_split,
                    "contact_info": _clean(contact_info),
                    "notes": _clean(notes),
                    "created_at": utc_now(),
                },
            )
        self._logger.info(f"Created partner {cleaned}")
        return row


class UpdatePartnerUseCase(_PartnerAdminUseCase):
    """Edit a partner's name, default split and contact details."""

    def execute(
        self,
        partner_id: str,
        name: str,
        split_partner_percent,
        split_owner_percent,
        contact_info: str | None = None,
        notes: str | None = None,
    ) -> Row:
        cleaned = _require_name(name)
        partner_split, owner_split = validate_split_percentages(
            split_partner_percent,
            split_owner_percent,
        )
        self._records.fetch_partner(partner_id)
        with guarded_write(self._store, self._logger, "update partner"):
            row = self._store.update(
                tables.PARTNERS,
                {
                    "name": cleaned,
                    "default_split_partner": partner_split,
                    "default_split_owner": owner_split,
                    "contact_info": _clean(contact_info),
                    "notes": _clean(notes),
                },
                partner_id,
            )
        self._logger.info(f"Updated partner {partner_id}")
        return row


class AssignClientUseCase(_PartnerAdminUseCase):
    """Assign a client to a partner, optionally overriding the split."""

    def execute(
        self,
        partner_id: str,
        client_id: str | None,
        split_partner_percent=None,
        split_owner_percent=None,
        notes: str | None = None,
    ) -> Row:
        """Insert an assignment.

        Override percentages are optional; a blank value falls back to the
        partner default when splits are resolved.

        Raises:
            LedgerValidationError: If no client is given, the client is
                already assigned to this partner, or an override is not a
                number.
        """
        if not client_id:
            raise LedgerValidationError("Please select a client")
        self._records.fetch_partner(partner_id)
        existing = self._records.fetch_assignments(partner_id)
        if any(item.client_id == client_id for item in existing):
            raise LedgerValidationError(
                "Client is already assigned to this partner"
            )
        with guarded_write(self._store, self._logger, "assign client"):
            row = self._store.insert(
                tables.ASSIGNMENTS,
                {
                    "partner_id": partner_id,
                    "client_id": client_id,
                    "split_partner_override": parse_optional_percentage(
                        split_partner_percent
                    ),
                    "split_owner_override": parse_optional_percentage(
                        split_owner_percent
                    ),
                    "notes": _clean(notes),
                    "assigned_at": utc_now(),
                },
            )
        self._logger.info(
            f"Assigned client {client_id} to partner {partner_id}"
        )
        return row


class UnassignClientUseCase(_PartnerAdminUseCase):
    """Remove a client assignment."""

    def execute(self, assignment_id: str) -> None:
        with guarded_write(self._store, self._logger, "remove assignment"):
            self._store.remove(tables.ASSIGNMENTS, assignment_id)
        self._logger.info(f"Removed assignment {assignment_id}")


class SavePartnerAppSplitUseCase(_PartnerAdminUseCase):
    """Create or replace the split a partner gets on one app."""

    def execute(
        self,
        partner_id: str,
        app_id: str,
        split_partner_percent,
        split_owner_percent,
        notes: str | None = None,
    ) -> Row:
        """Upsert the split for (partner, app).

        Returns:
            Row: The inserted or updated partner_app_splits row.
        """
        if not app_id:
            raise LedgerValidationError("Please select an app")
        partner_split, owner_split = validate_split_percentages(
            split_partner_percent,
            split_owner_percent,
        )
        self._records.fetch_partner(partner_id)
        current = next(
            (
                split
                for split in self._records.fetch_app_splits(partner_id)
                if split.app_id == app_id
            ),
            None,
        )
        values = {
            "split_partner": partner_split,
            "split_owner": owner_split,
            "notes": _clean(notes),
        }
        with guarded_write(self._store, self._logger, "save app split"):
            if current is None:
                row = self._store.insert(
                    tables.APP_SPLITS,
                    {"partner_id": partner_id, "app_id": app_id, **values},
                )
            else:
                row = self._store.update(
                    tables.APP_SPLITS,
                    values,
                    current.id,
                )
        self._logger.info(
            f"Saved split for partner {partner_id} on app {app_id}"
        )
        return row


class DeletePartnerAppSplitUseCase(_PartnerAdminUseCase):
    """Delete a per-app split so the app falls back to the base split."""

    def execute(self, partner_id: str, split_id: str) -> None:
        known = {
            split.id for split in self._records.fetch_app_splits(partner_id)
        }
        if split_id not in known:
            raise RecordNotFoundError(f"App split not found: {split_id}")
        with guarded_write(self._store, self._logger, "delete app split"):
            self._store.remove(tables.APP_SPLITS, split_id)
        self._logger.info(f"Deleted app split {split_id}")


__all__ = [
    "CreatePartnerUseCase",
    "UpdatePartnerUseCase",
    "AssignClientUseCase",
    "UnassignClientUseCase",
    "SavePartnerAppSplitUseCase",
    "DeletePartnerAppSplitUseCase",
]
