"""Report aggregation exports."""

from .aggregate import DepotReport, ProductTotals, RowTotals, aggregate, display_round, format_amount

__all__ = ["DepotReport", "ProductTotals", "RowTotals", "aggregate", "display_round", "format_amount"]
