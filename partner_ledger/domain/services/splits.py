"""Split resolution for partner profit sharing."""

from collections.abc import Iterable, Mapping

from partner_ledger.domain.constants import (
    DEFAULT_SPLIT_OWNER,
    DEFAULT_SPLIT_PARTNER,
)
from partner_ledger.domain.models import (
    ClientPartnerAssignment,
    Partner,
    PartnerAppSplit,
    SplitFractions,
)

SOURCE_APP = "app"
SOURCE_ASSIGNMENT = "assignment"
SOURCE_PARTNER = "partner"


def build_app_split_map(
    app_splits: Iterable[PartnerAppSplit] | None,
    partner_id: str,
) -> dict[str, PartnerAppSplit]:
    """Index a partner's app splits by app id.

    Splits belonging to other partners are ignored.
    """
    if not app_splits:
        return {}
    return {
        split.app_id: split
        for split in app_splits
        if split.partner_id == partner_id
    }


def partner_default_split(partner: Partner) -> SplitFractions:
    """Return the partner defaults, falling back to 25/75."""
    split_partner = partner.default_split_partner
    split_owner = partner.default_split_owner
    return SplitFractions(
        partner=(
            split_partner if split_partner is not None
            else DEFAULT_SPLIT_PARTNER
        ),
        owner=split_owner if split_owner is not None else DEFAULT_SPLIT_OWNER,
        source=SOURCE_PARTNER,
    )


def base_split(
    partner: Partner,
    assignment: ClientPartnerAssignment | None,
) -> SplitFractions:
    """Return the split for a client before app-level overrides."""
    default = partner_default_split(partner)
    if assignment is None or not assignment.has_override:
        return default
    return SplitFractions(
        partner=(
            assignment.split_partner_override
            if assignment.split_partner_override is not None
            else default.partner
        ),
        owner=(
            assignment.split_owner_override
            if assignment.split_owner_override is not None
            else default.owner
        ),
        source=SOURCE_ASSIGNMENT,
    )


def resolve_split(
    app_id: str | None,
    partner: Partner,
    assignment: ClientPartnerAssignment | None,
    app_splits: Mapping[str, PartnerAppSplit],
) -> SplitFractions:
    """Return the effective split for an app.

    Priority: app-specific split, then assignment override (partner default
    filling any missing fraction), then partner default. Fractions are not
    normalized to sum to 1.

    Args:
        app_id: App of the client-app row, if known.
        partner: Partner earning the share.
        assignment: Client assignment for the row's client, if any.
        app_splits: Partner app splits keyed by app id.

    Returns:
        SplitFractions: Effective partner and owner fractions.
    """
    app_split = app_splits.get(app_id) if app_id else None
    if app_split is not None:
        return SplitFractions(
            partner=app_split.split_partner,
            owner=app_split.split_owner,
            source=SOURCE_APP,
        )
    return base_split(partner, assignment)


__all__ = [
    "SOURCE_APP",
    "SOURCE_ASSIGNMENT",
    "SOURCE_PARTNER",
    "build_app_split_map",
    "partner_default_split",
    "base_split",
    "resolve_split",
]
