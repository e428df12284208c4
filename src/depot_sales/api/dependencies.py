"""Shared FastAPI dependencies."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..persistence.store import SalesStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_store() -> SalesStore:
    """Process-wide sales store, loaded from disk on first use."""
    store = SalesStore().load()
    logger.info(
        "Loaded sales store: %d products, %d depots with data",
        store.product_count,
        sum(1 for records in store.data.values() if records),
    )
    return store
