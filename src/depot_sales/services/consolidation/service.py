"""Consolidation of a depot's rows into one record per syndicate."""

from __future__ import annotations

import logging
import unicodedata
from typing import Any, Iterable, List

from ...models.domain import DepotRecord, ProductEntry, fit_products, products_total, union_shop_ids
from .normalize import NormalizedRow, new_record_id, normalize_row

logger = logging.getLogger(__name__)


def syndicate_sort_key(name: str) -> tuple[str, str, str]:
    """Locale-style ordering: accents and case only break ties.

    This approximates collation by code point on the folded text, so
    punctuation above ``z`` (``~``, ``|``) sorts after letters rather than
    before them as an ICU collator would order it.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), name)


def sort_records(records: Iterable[DepotRecord]) -> List[DepotRecord]:
    return sorted(records, key=lambda record: syndicate_sort_key(record.syndicate))


def _row_products(row: NormalizedRow, product_count: int) -> tuple[ProductEntry, ...]:
    if row.products is None:
        return fit_products((), product_count)
    return row.products


def record_from_row(row: NormalizedRow, product_count: int) -> DepotRecord:
    return DepotRecord(
        id=row.id or new_record_id(),
        syndicate=row.syndicate,
        shop_ids=row.shop_ids,
        products=_row_products(row, product_count),
    )


def merge_records(existing: DepotRecord, row: NormalizedRow, product_count: int) -> DepotRecord:
    """Fold a later row for the same syndicate into an accumulated record.

    Shop IDs are unioned. The product vector with the larger total value is
    kept; on a tie the later row wins. The accumulated record is not mutated.
    """
    incoming = _row_products(row, product_count)
    products = existing.products
    if products_total(incoming) >= products_total(existing.products):
        products = incoming
    return DepotRecord(
        id=existing.id,
        syndicate=existing.syndicate,
        shop_ids=union_shop_ids(existing.shop_ids, row.shop_ids),
        products=products,
    )


def consolidate(rows: Any, product_count: int) -> List[DepotRecord]:
    """Deduplicate ``rows`` by syndicate and return them sorted by syndicate.

    Rows without a usable syndicate are dropped. Every returned record has
    exactly ``product_count`` product entries.
    """
    if not isinstance(rows, (list, tuple)):
        return []

    by_syndicate: dict[str, DepotRecord] = {}
    skipped = 0
    for raw in rows:
        row = normalize_row(raw, product_count)
        if row is None:
            skipped += 1
            continue
        existing = by_syndicate.get(row.syndicate)
        if existing is None:
            by_syndicate[row.syndicate] = record_from_row(row, product_count)
        else:
            by_syndicate[row.syndicate] = merge_records(existing, row, product_count)

    if skipped:
        logger.debug("Skipped %d rows without a syndicate", skipped)

    fitted = (
        DepotRecord(
            id=record.id,
            syndicate=record.syndicate,
            shop_ids=record.shop_ids,
            products=fit_products(record.products, product_count),
        )
        for record in by_syndicate.values()
    )
    return sort_records(fitted)
