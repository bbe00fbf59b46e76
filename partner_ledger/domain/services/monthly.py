"""Monthly partner revenue series."""

from collections.abc import Iterator
from decimal import Decimal

from partner_ledger.domain.models import (
    ClientAppRow,
    ClientPartnerAssignment,
    MonthlyPoint,
    Partner,
    PartnerAppSplit,
)
from partner_ledger.domain.services.partners import is_contributing
from partner_ledger.domain.services.splits import (
    build_app_split_map,
    resolve_split,
)
from partner_ledger.utils.decimal_utils import coerce_decimal


class MonthlySeries:
    """Partner share bucketed by calendar month.

    Iterating computes the points from the captured rows, so the series can
    be iterated any number of times and always reflects the same inputs.
    """

    def __init__(
        self,
        partner: Partner,
        assignments: list[ClientPartnerAssignment],
        client_apps: list[ClientAppRow],
        app_splits: list[PartnerAppSplit] | None = None,
    ) -> None:
        self._partner = partner
        self._assignments = {
            assignment.client_id: assignment for assignment in assignments
        }
        self._client_apps = list(client_apps)
        self._split_map = build_app_split_map(app_splits, partner.id)

    def __iter__(self) -> Iterator[MonthlyPoint]:
        totals: dict[str, Decimal] = {}
        for app in self._client_apps:
            assignment = self._assignments.get(app.client_id)
            if assignment is None or not is_contributing(app):
                continue
            month = _month_key(app)
            if month is None:
                continue
            split = resolve_split(
                app.app_id,
                self._partner,
                assignment,
                self._split_map,
            )
            share = coerce_decimal(app.profit_us) * split.partner
            totals[month] = totals.get(month, Decimal("0")) + share
        for month in sorted(totals):
            yield MonthlyPoint(month=month, amount=totals[month])

    def total(self) -> Decimal:
        """Return the sum of all monthly amounts."""
        return sum((point.amount for point in self), Decimal("0"))


def _month_key(app: ClientAppRow) -> str | None:
    timestamp = app.completed_at or app.created_at
    if timestamp is None:
        return None
    return timestamp.strftime("%Y-%m")


def build_monthly_series(
    partner: Partner,
    assignments: list[ClientPartnerAssignment],
    client_apps: list[ClientAppRow],
    *,
    app_splits: list[PartnerAppSplit] | None = None,
) -> MonthlySeries:
    """Return the monthly series of a partner's earned share.

    Rows are bucketed on ``completed_at``, falling back to ``created_at``;
    rows with neither timestamp are skipped.
    """
    return MonthlySeries(partner, assignments, client_apps, app_splits)


__all__ = ["MonthlySeries", "build_monthly_series"]
