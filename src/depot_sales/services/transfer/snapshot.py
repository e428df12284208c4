"""JSON snapshot export and import for a single depot."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Mapping

from ...errors import SnapshotImportError
from ...models.domain import DepotRecord
from ...persistence.store import SalesStore
from ..consolidation import consolidate
from ..sales import require_depot

logger = logging.getLogger(__name__)


def snapshot_file_name(depot: str) -> str:
    stem = re.sub(r"\s+", "_", depot)
    return f"{stem}.json"


def export_snapshot(store: SalesStore, depot: str) -> dict:
    depot = require_depot(depot)
    return {
        "depot": depot,
        "products": list(store.products),
        "rows": [record.to_dict() for record in store.records(depot)],
    }


def _canonical_row(row: Any) -> Any:
    """Map a legacy single ``shopId`` row onto the ``shopIds`` form."""
    if not isinstance(row, Mapping):
        return row
    shop_ids = row.get("shopIds")
    if not isinstance(shop_ids, list):
        single = row.get("shopId")
        shop_ids = [single] if single not in (None, "") else []
    return {
        "id": row.get("id"),
        "syndicate": row.get("syndicate"),
        "shopIds": shop_ids,
        "products": row.get("products") or [],
    }


def parse_snapshot(payload: bytes | str) -> Any:
    try:
        return json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotImportError(f"Invalid file: {exc}") from exc


def import_snapshot(store: SalesStore, depot: str, document: Any) -> List[DepotRecord]:
    """Replace ``depot``'s records (and the product list, when given) from a snapshot.

    Nothing is applied unless the whole document validates.
    """
    depot = require_depot(depot)
    if isinstance(document, (bytes, str)):
        document = parse_snapshot(document)
    if not isinstance(document, Mapping):
        raise SnapshotImportError("Invalid file: expected a JSON object")

    rows = document.get("rows")
    if not isinstance(rows, list):
        raise SnapshotImportError("Invalid file: 'rows' must be a list")

    products = document.get("products")
    if not isinstance(products, list):
        products = None
    elif not products:
        raise SnapshotImportError("Invalid file: 'products' must not be empty")

    with store.lock:
        product_names = [str(name) for name in products] if products is not None else list(store.products)
        records = consolidate([_canonical_row(row) for row in rows], len(product_names))

        if products is not None:
            store.set_products(product_names)
        store.set_records(depot, records)
        store.save()
    logger.info("Imported %d rows into depot %s as %d records", len(rows), depot, len(records))
    return records
