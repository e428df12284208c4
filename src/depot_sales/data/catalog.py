"""Fixed depot list and default product labels."""

from __future__ import annotations

DEPOTS: tuple[str, ...] = (
    "KNL",
    "NDYL",
    "ATP",
    "CTR-I",
    "CTR-II",
    "CTR-III",
    "CDP-I",
    "PDTR",
    "NLR-I",
    "NLR-II",
    "PKM-I",
    "PKM-II",
    "VZA-I",
    "VZA-II",
    "VZA-III",
    "GNT-I",
    "GNT-II",
    "GNT-III",
    "EG-I",
    "EG-II",
    "EG-III",
    "WG-I",
    "WG-II",
    "WG-III",
    "VSKP-I",
    "VSKP-II",
    "VSKP-III",
    "VZM",
    "SKLM",
)

DEFAULT_PRODUCT_NAMES: tuple[str, ...] = (
    "MC VSOP",
    "MCB",
    "SSW",
    "KWB",
    "DSPG",
    "MC RUM",
    "GSW",
    "GSB",
)


def _normalize_depot_name(name: str) -> str:
    return name.strip()


def resolve_depot(name: str | None) -> str | None:
    """Return the canonical depot name, or None when it is not in the fixed list."""
    if not name:
        return None
    normalized = _normalize_depot_name(name)
    return normalized if normalized in DEPOTS else None


def default_product_name(index: int) -> str:
    """Default label for the product at ``index`` (0-based)."""
    if index < len(DEFAULT_PRODUCT_NAMES):
        return DEFAULT_PRODUCT_NAMES[index]
    return f"Product {index + 1}"


def default_product_names(count: int = len(DEFAULT_PRODUCT_NAMES)) -> list[str]:
    return [default_product_name(i) for i in range(count)]
