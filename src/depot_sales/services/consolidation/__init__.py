"""Row consolidation service exports."""

from .normalize import NormalizedRow, coerce_number, normalize_row, split_shop_ids
from .service import consolidate, merge_records, sort_records, syndicate_sort_key

__all__ = [
    "NormalizedRow",
    "coerce_number",
    "consolidate",
    "merge_records",
    "normalize_row",
    "sort_records",
    "split_shop_ids",
    "syndicate_sort_key",
]
