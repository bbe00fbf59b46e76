"""Tests for split resolution."""

from decimal import Decimal

from partner_ledger.domain.models import (
    ClientPartnerAssignment,
    Partner,
    PartnerAppSplit,
)
from partner_ledger.domain.services.splits import (
    SOURCE_APP,
    SOURCE_ASSIGNMENT,
    SOURCE_PARTNER,
    build_app_split_map,
    resolve_split,
)


def _partner(split_partner="0.30", split_owner="0.70") -> Partner:
    return Partner(
        id="p1",
        name="Giulia",
        default_split_partner=(
            Decimal(split_partner) if split_partner is not None else None
        ),
        default_split_owner=(
            Decimal(split_owner) if split_owner is not None else None
        ),
    )


def _assignment(partner_override=None, owner_override=None):
    return ClientPartnerAssignment(
        id="as1",
        client_id="c1",
        partner_id="p1",
        split_partner_override=partner_override,
        split_owner_override=owner_override,
    )


def test_app_split_wins_over_assignment_and_partner() -> None:
    """A per-app split should take precedence over every other source."""
    splits = build_app_split_map(
        [
            PartnerAppSplit(
                id="s1",
                partner_id="p1",
                app_id="app-1",
                split_partner=Decimal("0.5"),
                split_owner=Decimal("0.5"),
            )
        ],
        "p1",
    )

    split = resolve_split(
        "app-1",
        _partner(),
        _assignment(Decimal("0.4"), Decimal("0.6")),
        splits,
    )

    assert split.partner == Decimal("0.5")
    assert split.owner == Decimal("0.5")
    assert split.source == SOURCE_APP


def test_assignment_override_fills_missing_fraction_from_partner() -> None:
    """A partial override should take the other fraction from the partner."""
    split = resolve_split(
        "app-1",
        _partner(),
        _assignment(partner_override=Decimal("0.4")),
        {},
    )

    assert split.partner == Decimal("0.4")
    assert split.owner == Decimal("0.70")
    assert split.source == SOURCE_ASSIGNMENT


def test_partner_default_used_without_overrides() -> None:
    split = resolve_split("app-1", _partner(), _assignment(), {})

    assert (split.partner, split.owner) == (Decimal("0.30"), Decimal("0.70"))
    assert split.source == SOURCE_PARTNER


def test_missing_partner_defaults_fall_back_to_quarter_split() -> None:
    """Partners without stored defaults should get 25/75."""
    split = resolve_split(None, _partner(None, None), None, {})

    assert split.partner == Decimal("0.25")
    assert split.owner == Decimal("0.75")


def test_split_map_ignores_other_partners() -> None:
    splits = [
        PartnerAppSplit(
            id="s1",
            partner_id="other",
            app_id="app-1",
            split_partner=Decimal("0.9"),
            split_owner=Decimal("0.1"),
        )
    ]

    assert build_app_split_map(splits, "p1") == {}
    assert build_app_split_map(None, "p1") == {}
