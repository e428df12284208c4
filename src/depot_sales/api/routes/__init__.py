"""Route group exports."""

from . import depots, health, products, reports, transfer

__all__ = ["depots", "health", "products", "reports", "transfer"]
