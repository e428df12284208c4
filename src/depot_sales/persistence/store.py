"""In-memory sales store with an explicit load/save boundary."""

from __future__ import annotations

import json
import logging
import threading
from typing import Dict, List, Optional, Sequence

from ..config import settings
from ..data.catalog import default_product_names, resolve_depot
from ..models.domain import DepotRecord, Period, fit_products
from ..services.consolidation import consolidate
from .filesystem import FileStorage

logger = logging.getLogger(__name__)


class SalesStore:
    """Product configuration plus per-depot record lists.

    The main blob lives under ``key``. The last-selected depot and period
    live under their own keys and are read and written independently.
    Callers hold ``lock`` across a whole read-modify-write-save sequence.
    """

    def __init__(self, storage: FileStorage | None = None, key: str | None = None) -> None:
        self.storage = storage or FileStorage()
        self.key = key or settings.storage_key
        self.products: List[str] = default_product_names()
        self.data: Dict[str, List[DepotRecord]] = {}
        self.lock = threading.RLock()

    @property
    def product_count(self) -> int:
        return len(self.products)

    @property
    def last_depot_key(self) -> str:
        return f"{self.key}.last_depot"

    @property
    def period_key(self) -> str:
        return f"{self.key}.period"

    def records(self, depot: str) -> List[DepotRecord]:
        return list(self.data.get(depot, []))

    def set_records(self, depot: str, records: Sequence[DepotRecord]) -> None:
        self.data[depot] = list(records)

    def set_products(self, names: Sequence[str]) -> None:
        """Replace the product names and fit every record to the new count."""
        self.products = [str(name) for name in names]
        count = self.product_count
        for depot, records in self.data.items():
            self.data[depot] = [
                DepotRecord(
                    id=record.id,
                    syndicate=record.syndicate,
                    shop_ids=record.shop_ids,
                    products=fit_products(record.products, count),
                )
                for record in records
            ]

    def to_dict(self) -> dict:
        return {
            "products": list(self.products),
            "data": {depot: [record.to_dict() for record in records] for depot, records in self.data.items()},
        }

    def load(self) -> "SalesStore":
        """Read the persisted blob; a missing or corrupt blob leaves defaults in place.

        The consolidated state is written back after a successful read. A
        failed write-back is logged and the loaded state is kept.
        """
        with self.lock:
            try:
                raw = self.storage.read_key(self.key)
                if raw is None:
                    return self
                parsed = json.loads(raw)
                if not isinstance(parsed, dict):
                    raise ValueError("store blob is not an object")
                products = parsed.get("products")
                data = parsed.get("data")
                if isinstance(products, list) and products:
                    self.products = [str(name) for name in products]
                if isinstance(data, dict):
                    self.data = {
                        str(depot): consolidate(rows, self.product_count) for depot, rows in data.items()
                    }
            except (OSError, ValueError) as exc:
                logger.warning("Load failed for store key '%s': %s", self.key, exc)
                self.products = default_product_names()
                self.data = {}
                return self

            try:
                self.save()
            except OSError as exc:
                logger.warning("Could not write back consolidated store '%s': %s", self.key, exc)
        return self

    def save(self) -> None:
        self.storage.write_key(self.key, json.dumps(self.to_dict(), ensure_ascii=False))

    def get_last_depot(self) -> Optional[str]:
        try:
            value = self.storage.read_key(self.last_depot_key)
        except OSError as exc:
            logger.warning("Could not read last depot: %s", exc)
            return None
        return resolve_depot(value)

    def set_last_depot(self, depot: str) -> None:
        with self.lock:
            self.storage.write_key(self.last_depot_key, depot)

    def get_period(self) -> Optional[Period]:
        try:
            value = self.storage.read_key(self.period_key)
            return Period.from_key(value) if value else None
        except (OSError, ValueError) as exc:
            logger.warning("Could not read selected period: %s", exc)
            return None

    def set_period(self, period: Period) -> None:
        with self.lock:
            self.storage.write_key(self.period_key, period.to_key())
