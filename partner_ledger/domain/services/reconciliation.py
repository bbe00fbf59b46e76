"""Reconciliation between partner payments and the apps they settle.

Aggregate partner payments generated by "mark as paid" carry a note such as
``Payment for Alice, Bob [id1,id2]``. The bracketed suffix lists the
client-app ids the payment settles. Per-app payment rows also store the id of
their aggregate payment; the note is kept readable and serves as the
fallback link for rows written before that column existed.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from partner_ledger.domain.constants import PAYMENT_NOTE_PREFIX
from partner_ledger.domain.errors import LedgerValidationError
from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    Partner,
    PartnerAppPayment,
    PartnerAppSplit,
    PartnerPayment,
)
from partner_ledger.domain.services.normalization import normalize_label
from partner_ledger.domain.services.partners import is_contributing
from partner_ledger.domain.services.splits import (
    build_app_split_map,
    resolve_split,
)
from partner_ledger.utils.decimal_utils import coerce_decimal

_IDENTIFIER_SUFFIX = re.compile(r"\s*\[([^\[\]]*)\]\s*$")

MATCH_LINK = "link"
MATCH_IDENTIFIER = "identifier"
MATCH_LEGACY_EXACT = "legacy_exact"
MATCH_LEGACY_NAME = "legacy_name"


def parse_note_identifiers(note: str | None) -> list[str]:
    """Return the client-app ids listed in a note's bracketed suffix."""
    if not note:
        return []
    match = _IDENTIFIER_SUFFIX.search(note)
    if not match:
        return []
    return [part.strip() for part in match.group(1).split(",") if part.strip()]


def strip_identifier_suffix(note: str | None) -> str:
    """Return the note without its bracketed id list."""
    if not note:
        return ""
    return _IDENTIFIER_SUFFIX.sub("", note).strip()


def parse_note_names(note: str | None) -> list[str]:
    """Return the comma-separated names of a ``Payment for ...`` note."""
    text = strip_identifier_suffix(note)
    if not text.startswith(PAYMENT_NOTE_PREFIX):
        return []
    body = text[len(PAYMENT_NOTE_PREFIX):].strip()
    return [name.strip() for name in body.split(",") if name.strip()]


def format_settlement_note(
    names: Iterable[str],
    identifiers: Iterable[str] = (),
) -> str:
    """Build an aggregate payment note.

    Args:
        names: Client display names, in order.
        identifiers: Client-app ids settled by the payment.

    Returns:
        str: ``Payment for <names> [<ids>]``; the bracket is omitted when
        there are no ids.
    """
    note = PAYMENT_NOTE_PREFIX
    joined_names = ", ".join(names)
    if joined_names:
        note = f"{note} {joined_names}"
    joined_ids = ",".join(identifiers)
    if joined_ids:
        note = f"{note} [{joined_ids}]"
    return note


def legacy_single_note(app_name: str, client_name: str) -> str:
    """Return the note older single-app payments were written with."""
    return f"{PAYMENT_NOTE_PREFIX} {app_name}, {client_name}"


def _unique(values: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


@dataclass(frozen=True)
class AppSettlement:
    """Partner share settled for one client-app row."""

    client_app_id: str
    client_id: str
    client_name: str
    app_name: str
    amount: Decimal

    @property
    def note(self) -> str:
        """Note written on the per-app payment row."""
        return f"{PAYMENT_NOTE_PREFIX} {self.app_name}"


@dataclass(frozen=True)
class MarkPlan:
    """Writes needed to mark a batch of apps as paid.

    Attributes:
        settlements: One entry per app, each becoming a per-app payment.
        batch_amount: Sum of the settlements.
        payment_amount: Amount of the aggregate payment after the write.
        note: Note of the aggregate payment after the write.
        extend_payment: Aggregate payment to update instead of inserting.
    """

    settlements: list[AppSettlement]
    batch_amount: Decimal
    payment_amount: Decimal
    note: str
    extend_payment: PartnerPayment | None = None


def plan_mark_as_paid(
    partner: Partner,
    assignments: list[ClientPartnerAssignment],
    client_apps: list[ClientAppRow],
    client_app_ids: Iterable[str],
    *,
    client_names: Mapping[str, str] | None = None,
    app_splits: list[PartnerAppSplit] | None = None,
    app_payments: list[PartnerAppPayment] | None = None,
    extend_payment: PartnerPayment | None = None,
) -> MarkPlan:
    """Plan the payments settling the selected apps.

    Apps that are unknown, not completed, not assigned to the partner, or
    already paid are skipped.

    Args:
        partner: Partner being paid.
        assignments: Assignments of the partner.
        client_apps: Client-app rows.
        client_app_ids: Selected client-app ids.
        client_names: Display names keyed by client id.
        app_splits: Per-app split overrides.
        app_payments: Existing per-app payments of the partner.
        extend_payment: Optional aggregate payment to extend.

    Returns:
        MarkPlan: Per-app settlements and the aggregate payment values.

    Raises:
        LedgerValidationError: If no selected app can be settled.
    """
    names = client_names or {}
    split_map = build_app_split_map(app_splits, partner.id)
    assignment_by_client = {
        assignment.client_id: assignment
        for assignment in assignments
        if assignment.partner_id == partner.id
    }
    apps_by_id = {app.id: app for app in client_apps}
    already_paid = {
        payment.client_app_id
        for payment in app_payments or []
        if payment.partner_id == partner.id
    }

    settlements: list[AppSettlement] = []
    for client_app_id in _unique(client_app_ids):
        app = apps_by_id.get(client_app_id)
        if app is None or not is_contributing(app):
            continue
        if client_app_id in already_paid:
            continue
        assignment = assignment_by_client.get(app.client_id)
        if assignment is None:
            continue
        split = resolve_split(app.app_id, partner, assignment, split_map)
        settlements.append(
            AppSettlement(
                client_app_id=app.id,
                client_id=app.client_id,
                client_name=names.get(app.client_id, "Unknown Client"),
                app_name=app.app_name or "Unknown App",
                amount=coerce_decimal(app.profit_us) * split.partner,
            )
        )

    if not settlements:
        raise LedgerValidationError("No valid apps selected")

    batch_amount = sum((item.amount for item in settlements), Decimal("0"))
    note_names = _unique(item.client_name for item in settlements)
    note_ids = [item.client_app_id for item in settlements]
    payment_amount = batch_amount
    if extend_payment is not None:
        note_names = _unique(
            [*parse_note_names(extend_payment.note), *note_names]
        )
        note_ids = _unique(
            [*parse_note_identifiers(extend_payment.note), *note_ids]
        )
        payment_amount = coerce_decimal(extend_payment.amount) + batch_amount

    return MarkPlan(
        settlements=settlements,
        batch_amount=batch_amount,
        payment_amount=payment_amount,
        note=format_settlement_note(note_names, note_ids),
        extend_payment=extend_payment,
    )


@dataclass(frozen=True)
class AggregateMatch:
    """Aggregate payment found for a per-app payment, and how."""

    payment: PartnerPayment
    strategy: str


def find_aggregate_payment(
    app_payment: PartnerAppPayment,
    payments: list[PartnerPayment],
    *,
    app_name: str,
    client_name: str,
) -> AggregateMatch | None:
    """Locate the aggregate payment that settles a per-app payment.

    Tries, in order: the stored link, the note's bracketed id list, the
    legacy ``Payment for {app}, {client}`` note, and finally the client name
    inside a comma-joined ``Payment for X, Y`` note without ids.

    Returns:
        AggregateMatch | None: The match, or None when nothing fits.
    """
    candidates = [
        payment
        for payment in payments
        if payment.partner_id == app_payment.partner_id
    ]

    if app_payment.partner_payment_id:
        for payment in candidates:
            if payment.id == app_payment.partner_payment_id:
                return AggregateMatch(payment, MATCH_LINK)

    for payment in candidates:
        if app_payment.client_app_id in parse_note_identifiers(payment.note):
            return AggregateMatch(payment, MATCH_IDENTIFIER)

    legacy_note = normalize_label(legacy_single_note(app_name, client_name))
    for payment in candidates:
        if normalize_label(payment.note) == legacy_note:
            return AggregateMatch(payment, MATCH_LEGACY_EXACT)

    wanted = normalize_label(client_name)
    for payment in candidates:
        if parse_note_identifiers(payment.note):
            continue
        names = [
            normalize_label(name) for name in parse_note_names(payment.note)
        ]
        if wanted in names:
            return AggregateMatch(payment, MATCH_LEGACY_NAME)
    return None


@dataclass(frozen=True)
class UnmarkPlan:
    """Writes needed to unmark one app.

    The per-app payment is always deleted. The aggregate payment is either
    deleted or rewritten with ``new_amount`` and ``new_note``.
    """

    app_payment_id: str
    aggregate_payment_id: str | None = None
    delete_aggregate: bool = False
    new_amount: Decimal | None = None
    new_note: str | None = None


def _remove_name(names: list[str], client_name: str) -> list[str]:
    wanted = normalize_label(client_name)
    remaining = list(names)
    for index, name in enumerate(remaining):
        if normalize_label(name) == wanted:
            del remaining[index]
            break
    return remaining


def plan_unmark(
    app_payment: PartnerAppPayment,
    match: AggregateMatch | None,
    *,
    client_name: str,
    client_names_by_app: Mapping[str, str] | None = None,
) -> UnmarkPlan:
    """Plan the writes reverting one per-app payment.

    The aggregate is deleted, never left at zero or below, when the row
    covers all of its remaining amount.

    Args:
        app_payment: Per-app payment being removed.
        match: Aggregate payment found for it, if any.
        client_name: Display name of the app's client.
        client_names_by_app: Client display names keyed by client-app id,
            used to rebuild the aggregate note.

    Returns:
        UnmarkPlan: Deletion or rewrite of the aggregate payment.
    """
    if match is None:
        return UnmarkPlan(app_payment_id=app_payment.id)

    payment = match.payment
    new_amount = coerce_decimal(payment.amount) - coerce_decimal(
        app_payment.amount
    )
    delete = UnmarkPlan(
        app_payment_id=app_payment.id,
        aggregate_payment_id=payment.id,
        delete_aggregate=True,
    )

    if match.strategy == MATCH_LEGACY_EXACT:
        return delete

    if match.strategy == MATCH_LEGACY_NAME:
        remaining_names = _remove_name(
            parse_note_names(payment.note),
            client_name,
        )
        if not remaining_names or new_amount <= 0:
            return delete
        return UnmarkPlan(
            app_payment_id=app_payment.id,
            aggregate_payment_id=payment.id,
            new_amount=new_amount,
            new_note=format_settlement_note(remaining_names),
        )

    identifiers = parse_note_identifiers(payment.note)
    remaining_ids = [
        identifier
        for identifier in identifiers
        if identifier != app_payment.client_app_id
    ]
    if (identifiers and not remaining_ids) or new_amount <= 0:
        return delete

    names_by_app = client_names_by_app or {}
    known = [names_by_app[i] for i in remaining_ids if i in names_by_app]
    if remaining_ids and len(known) == len(remaining_ids):
        remaining_names = _unique(known)
    else:
        remaining_names = parse_note_names(payment.note)
        if normalize_label(client_name) not in {
            normalize_label(name) for name in known
        }:
            remaining_names = _remove_name(remaining_names, client_name)
    return UnmarkPlan(
        app_payment_id=app_payment.id,
        aggregate_payment_id=payment.id,
        new_amount=new_amount,
        new_note=format_settlement_note(remaining_names, remaining_ids),
    )


def preserve_identifiers(
    original_note: str | None,
    new_note: str | None,
) -> str | None:
    """Keep the bracketed id list when a payment note is edited by hand."""
    identifiers = parse_note_identifiers(original_note)
    if not identifiers or parse_note_identifiers(new_note):
        return new_note
    text = (new_note or "").strip()
    suffix = f"[{','.join(identifiers)}]"
    return f"{text} {suffix}" if text else suffix


__all__ = [
    "MATCH_LINK",
    "MATCH_IDENTIFIER",
    "MATCH_LEGACY_EXACT",
    "MATCH_LEGACY_NAME",
    "parse_note_identifiers",
    "strip_identifier_suffix",
    "parse_note_names",
    "format_settlement_note",
    "legacy_single_note",
    "AppSettlement",
    "MarkPlan",
    "plan_mark_as_paid",
    "AggregateMatch",
    "find_aggregate_payment",
    "UnmarkPlan",
    "plan_unmark",
    "preserve_identifiers",
]
