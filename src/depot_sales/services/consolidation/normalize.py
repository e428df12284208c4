"""Normalisation of loosely-shaped entry rows into one intermediate form.

Rows arrive from three places: the persisted store blob, imported depot
documents, and already-built ``DepotRecord`` objects. Older documents carry a
single ``shopId`` instead of a ``shopIds`` list, numbers may be strings, and
``products`` may be missing or of any length. Everything downstream of
``normalize_row`` only ever sees a ``NormalizedRow``.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from ...models.domain import DepotRecord, ProductEntry, union_shop_ids


@dataclass(frozen=True, slots=True)
class NormalizedRow:
    """A row reduced to the fields consolidation cares about.

    ``products`` is None when the source row had no products array at all.
    """

    id: Optional[str]
    syndicate: str
    shop_ids: Tuple[str, ...]
    products: Optional[Tuple[ProductEntry, ...]]


def new_record_id() -> str:
    return uuid.uuid4().hex[:12]


def coerce_number(value: Any) -> float:
    """Parse a case count or rate; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_product(value: Any) -> ProductEntry:
    if isinstance(value, ProductEntry):
        return ProductEntry(cases=coerce_number(value.cases), rate=coerce_number(value.rate))
    if isinstance(value, Mapping):
        return ProductEntry(cases=coerce_number(value.get("cases")), rate=coerce_number(value.get("rate")))
    return ProductEntry()


def coerce_products(values: Any, product_count: int) -> Optional[Tuple[ProductEntry, ...]]:
    if not isinstance(values, (list, tuple)):
        return None
    return tuple(coerce_product(value) for value in values[:product_count])


def clean_shop_ids(values: Iterable[Any]) -> Tuple[str, ...]:
    cleaned = (str(value).strip() for value in values if value is not None)
    return union_shop_ids([value for value in cleaned if value])


def split_shop_ids(value: str) -> Tuple[str, ...]:
    """Split a comma-separated shop-ID field as typed into the entry form."""
    return clean_shop_ids(value.split(","))


def _clean_syndicate(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def normalize_row(row: Any, product_count: int) -> Optional[NormalizedRow]:
    """Map any accepted row shape to a ``NormalizedRow``; None means skip the row."""
    if isinstance(row, DepotRecord):
        row = row.to_dict()
    if not isinstance(row, Mapping):
        return None

    syndicate = _clean_syndicate(row.get("syndicate"))
    if not syndicate:
        return None

    shop_ids: Tuple[str, ...] = ()
    listed = row.get("shopIds", row.get("shop_ids"))
    if isinstance(listed, (list, tuple)):
        shop_ids = clean_shop_ids(listed)
    single = row.get("shopId")
    if single is not None and str(single).strip():
        shop_ids = union_shop_ids(shop_ids, (str(single).strip(),))

    raw_id = row.get("id")
    record_id = str(raw_id).strip() if raw_id not in (None, "") else None

    return NormalizedRow(
        id=record_id or None,
        syndicate=syndicate,
        shop_ids=shop_ids,
        products=coerce_products(row.get("products"), product_count),
    )
