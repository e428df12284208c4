"""Depot snapshot and spreadsheet export services."""

from .runs import persist_export
from .snapshot import export_snapshot, import_snapshot, parse_snapshot, snapshot_file_name
from .workbook import build_depot_workbook, workbook_file_name, workbook_to_bytes

__all__ = [
    "build_depot_workbook",
    "export_snapshot",
    "import_snapshot",
    "parse_snapshot",
    "persist_export",
    "snapshot_file_name",
    "workbook_file_name",
    "workbook_to_bytes",
]
