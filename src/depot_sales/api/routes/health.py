"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.store import SalesStore
from ..dependencies import get_store

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/storage", status_code=status.HTTP_200_OK)
def health_storage(store: SalesStore = Depends(get_store)) -> dict:
    """Report where state is kept and how much of it there is."""
    state_root = store.storage.state_root
    return {
        "state_root": str(state_root),
        "writable": state_root.exists() and state_root.is_dir(),
        "products": store.product_count,
        "records": {depot: len(records) for depot, records in store.data.items() if records},
    }
