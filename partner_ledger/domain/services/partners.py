"""Domain services for partner breakdowns and balances."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from partner_ledger.domain.constants import CONTRIBUTING_STATUSES
from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    ClientRow,
    Partner,
    PartnerAppSplit,
    PartnerBalance,
    PartnerClientBreakdown,
    PartnerPayment,
    PartnerPortfolio,
    PartnerSummary,
    PortfolioTotals,
)
from partner_ledger.domain.services.normalization import normalize_label
from partner_ledger.domain.services.splits import (
    base_split,
    build_app_split_map,
    resolve_split,
)
from partner_ledger.domain.services.validation import validate_split_sum
from partner_ledger.utils.decimal_utils import coerce_decimal


def is_contributing(app: ClientAppRow) -> bool:
    """Return True when the app row still counts towards partner dues."""
    return app.status in CONTRIBUTING_STATUSES


def filter_assignments_by_partner(
    assignments: Iterable[ClientPartnerAssignment] | None,
    partner_id: str,
) -> list[ClientPartnerAssignment]:
    """Return the assignments belonging to a partner."""
    if not assignments:
        return []
    return [
        assignment
        for assignment in assignments
        if assignment.partner_id == partner_id
    ]


def build_partner_breakdown(
    partner: Partner,
    assignments: list[ClientPartnerAssignment],
    client_apps: list[ClientAppRow],
    *,
    app_splits: list[PartnerAppSplit] | None = None,
    clients: list[ClientRow] | None = None,
    logger: Logger | None = None,
) -> list[PartnerClientBreakdown]:
    """Build one profit breakdown row per assigned client.

    Clients without completed apps still appear with zero totals. Apps are
    matched to clients on ``client_id`` only.

    Args:
        partner: Partner whose clients are summarized.
        assignments: Assignments of this partner.
        client_apps: Client-app rows; non-completed rows are ignored.
        app_splits: Optional per-app split overrides.
        clients: Optional client rows used for display names.
        logger: Optional logger warning about splits not summing to 1.

    Returns:
        list[PartnerClientBreakdown]: Rows in assignment order.
    """
    split_map = build_app_split_map(app_splits, partner.id)
    names = {client.id: client.display_name for client in clients or []}
    apps_by_client: dict[str, list[ClientAppRow]] = {}
    for app in client_apps:
        if is_contributing(app):
            apps_by_client.setdefault(app.client_id, []).append(app)

    result: list[PartnerClientBreakdown] = []
    for assignment in assignments:
        default_split = base_split(partner, assignment)
        total_profit = Decimal("0")
        partner_share = Decimal("0")
        owner_share = Decimal("0")
        has_app_split = False

        for app in apps_by_client.get(assignment.client_id, []):
            profit = coerce_decimal(app.profit_us)
            split = resolve_split(app.app_id, partner, assignment, split_map)
            if logger is not None:
                validate_split_sum(split, logger)
            if app.app_id in split_map:
                has_app_split = True
            total_profit += profit
            partner_share += profit * split.partner
            owner_share += profit * split.owner

        if total_profit > 0:
            split_partner = partner_share / total_profit
            split_owner = owner_share / total_profit
        else:
            split_partner = default_split.partner
            split_owner = default_split.owner

        result.append(
            PartnerClientBreakdown(
                client_id=assignment.client_id,
                client_name=names.get(assignment.client_id, "Unknown"),
                total_profit=total_profit,
                partner_share=partner_share,
                owner_share=owner_share,
                split_partner=split_partner,
                split_owner=split_owner,
                override=assignment.has_override or has_app_split,
            )
        )
    return result


def summarize_balance(
    partner_id: str,
    breakdown: list[PartnerClientBreakdown],
    payments: list[PartnerPayment],
) -> PartnerBalance:
    """Reduce a breakdown and the partner's payments to a balance."""
    total_profit = sum(
        (item.total_profit for item in breakdown), Decimal("0")
    )
    partner_share = sum(
        (item.partner_share for item in breakdown), Decimal("0")
    )
    owner_share = sum((item.owner_share for item in breakdown), Decimal("0"))
    total_paid = sum(
        (
            coerce_decimal(payment.amount)
            for payment in payments
            if payment.partner_id == partner_id
        ),
        Decimal("0"),
    )
    return PartnerBalance(
        partner_id=partner_id,
        total_profit=total_profit,
        partner_share=partner_share,
        owner_share=owner_share,
        total_paid=total_paid,
        balance=partner_share - total_paid,
    )


def calculate_partner_balance(
    partner: Partner,
    assignments: list[ClientPartnerAssignment],
    client_apps: list[ClientAppRow],
    payments: list[PartnerPayment],
    *,
    app_splits: list[PartnerAppSplit] | None = None,
) -> PartnerBalance:
    """Compute what a partner earned, was paid, and is still owed.

    Always derived from the given rows; nothing is cached.

    Returns:
        PartnerBalance: Totals with ``balance = partner_share - total_paid``.
    """
    breakdown = build_partner_breakdown(
        partner,
        assignments,
        client_apps,
        app_splits=app_splits,
    )
    return summarize_balance(partner.id, breakdown, payments)


def matches_balance_status(balance: Decimal, status: str) -> bool:
    """Return True when a balance falls under a list filter."""
    if status == "due":
        return balance > 0
    if status == "settled":
        return balance == 0
    if status == "negative":
        return balance < 0
    return True


def build_partner_portfolio(
    partners: list[Partner],
    assignments: list[ClientPartnerAssignment],
    client_apps: list[ClientAppRow],
    payments: list[PartnerPayment],
    *,
    app_splits: list[PartnerAppSplit] | None = None,
    search: str | None = None,
    status: str = "all",
) -> PartnerPortfolio:
    """Summarize every partner and total the ones matching the filters.

    Args:
        partners: Partners to summarize.
        assignments: Assignments of all partners.
        client_apps: All client-app rows.
        payments: Payments of all partners.
        app_splits: App splits of all partners.
        search: Case-insensitive substring matched against partner names.
        status: One of all, due, settled, negative.

    Returns:
        PartnerPortfolio: Matching summaries sorted by name, and totals.
    """
    needle = normalize_label(search)
    summaries: list[PartnerSummary] = []
    for partner in sorted(partners, key=lambda item: item.name.lower()):
        if needle and needle not in normalize_label(partner.name):
            continue
        partner_assignments = filter_assignments_by_partner(
            assignments,
            partner.id,
        )
        balance = calculate_partner_balance(
            partner,
            partner_assignments,
            client_apps,
            payments,
            app_splits=app_splits,
        )
        if not matches_balance_status(balance.balance, status):
            continue
        summaries.append(
            PartnerSummary(
                partner=partner,
                clients_count=len(partner_assignments),
                balance=balance,
            )
        )

    totals = PortfolioTotals(
        total_profit=sum(
            (item.balance.total_profit for item in summaries), Decimal("0")
        ),
        total_partner_share=sum(
            (item.balance.partner_share for item in summaries), Decimal("0")
        ),
        total_paid=sum(
            (item.balance.total_paid for item in summaries), Decimal("0")
        ),
        total_balance=sum(
            (item.balance.balance for item in summaries), Decimal("0")
        ),
        total_clients=sum(item.clients_count for item in summaries),
    )
    return PartnerPortfolio(summaries=summaries, totals=totals)


__all__ = [
    "is_contributing",
    "filter_assignments_by_partner",
    "build_partner_breakdown",
    "summarize_balance",
    "calculate_partner_balance",
    "matches_balance_status",
    "build_partner_portfolio",
]
