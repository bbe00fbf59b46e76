"""Domain normalization helpers."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_label(value: str | None) -> str:
    """Normalize a free-text label for comparisons.

    Collapses runs of whitespace, trims, and case-folds so that names typed
    by hand in notes still match stored names.

    Args:
        value: Raw label, possibly None.

    Returns:
        str: Normalized label, empty when the value is blank.
    """
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip().casefold()


__all__ = ["normalize_label"]
