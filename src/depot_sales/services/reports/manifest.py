"""Report/export manifest helpers."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...config import settings
from ...persistence.filesystem import RUN_TIMESTAMP_FORMAT

OUTPUT_ROOT = (settings.data_root / "outputs").resolve()


def list_runs(
    *,
    kind: Optional[str] = None,
    depot: Optional[str] = None,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    output_root: Optional[Path] = None,
) -> List[dict]:
    root = _resolve_root(output_root)
    if not root.exists():
        return []

    normalized_search = _normalize(search) if search else None
    normalized_kind = _normalize(kind) if kind else None
    normalized_depot = _normalize(depot) if depot else None

    runs: List[dict] = []
    for run_dir in sorted((p for p in root.iterdir() if p.is_dir()), key=_sort_key, reverse=True):
        run_info = _build_run_summary(run_dir)
        if not run_info:
            continue

        if normalized_kind and _normalize(run_info.get("kind")) != normalized_kind:
            continue
        if normalized_depot and _normalize(run_info.get("depot")) != normalized_depot:
            continue
        if normalized_search and not _matches_search(
            normalized_search,
            run_info.get("id"),
            run_info.get("depot"),
            run_info.get("title"),
        ):
            continue

        runs.append(run_info)
        if limit and len(runs) >= limit:
            break
    return runs


def list_export_files(
    *,
    kind: Optional[str] = None,
    depot: Optional[str] = None,
    file_type: Optional[str] = None,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    output_root: Optional[Path] = None,
) -> List[dict]:
    root = _resolve_root(output_root)
    if not root.exists():
        return []

    normalized_kind = _normalize(kind) if kind else None
    normalized_depot = _normalize(depot) if depot else None
    normalized_file_type = _normalize(file_type) if file_type else None
    normalized_search = _normalize(search) if search else None

    exports: List[dict] = []
    for run_dir in sorted((p for p in root.iterdir() if p.is_dir()), key=_sort_key, reverse=True):
        run_summary = _build_run_summary(run_dir)
        if not run_summary:
            continue
        if normalized_kind and _normalize(run_summary.get("kind")) != normalized_kind:
            continue
        if normalized_depot and _normalize(run_summary.get("depot")) != normalized_depot:
            continue

        for file_path in sorted(run_dir.glob("*")):
            if not file_path.is_file():
                continue
            export_info = _build_file_record(file_path, run_dir, run_summary)
            if normalized_file_type and _normalize(export_info.get("file_type")) != normalized_file_type:
                continue
            if normalized_search and not _matches_search(
                normalized_search,
                export_info.get("file_name"),
                export_info.get("description"),
                export_info.get("depot"),
            ):
                continue
            exports.append(export_info)
            if limit and len(exports) >= limit:
                return exports
    return exports


def resolve_export_file(run_id: str, filename: str, *, output_root: Optional[Path] = None) -> Path:
    root = _resolve_root(output_root)
    candidate = (root / run_id / filename).resolve()
    if root not in candidate.parents:
        raise FileNotFoundError(filename)
    if not candidate.is_file():
        raise FileNotFoundError(filename)
    return candidate


def _resolve_root(output_root: Optional[Path]) -> Path:
    return (output_root or OUTPUT_ROOT).resolve()


def _build_run_summary(run_dir: Path) -> Optional[dict]:
    name_parts = run_dir.name.split("_")
    if len(name_parts) < 2:
        return None
    timestamp = _parse_timestamp(name_parts[-1])
    summary_data = _load_summary(run_dir / "summary.json") or {}
    totals = summary_data.get("totals") if isinstance(summary_data.get("totals"), dict) else {}

    base_info: Dict[str, Any] = {
        "id": run_dir.name,
        "kind": summary_data.get("kind") or name_parts[0],
        "depot": summary_data.get("depot") or ("_".join(name_parts[1:-1]) or None),
        "created_at": timestamp,
        "title": summary_data.get("title"),
        "period": summary_data.get("period"),
        "row_count": summary_data.get("row_count") or 0,
        "total_cases": totals.get("cases") or 0,
        "total_amount": totals.get("amount") or 0,
    }
    return base_info


def _build_file_record(file_path: Path, run_dir: Path, run_summary: dict) -> dict:
    file_suffix = file_path.suffix[1:].upper() if file_path.suffix else ""
    run_id = run_dir.name

    return {
        "id": f"{run_id}:{file_path.name}",
        "run_id": run_id,
        "kind": run_summary.get("kind"),
        "file_name": file_path.name,
        "file_type": file_suffix or "FILE",
        "size_bytes": file_path.stat().st_size,
        "created_at": run_summary.get("created_at"),
        "depot": run_summary.get("depot"),
        "period": run_summary.get("period"),
        "description": _describe_file(file_path.name, run_summary),
        "download_path": f"{settings.api_prefix}/reports/exports/{run_id}/{file_path.name}",
    }


def _load_summary(path: Path) -> Optional[dict]:
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, RUN_TIMESTAMP_FORMAT)
    except ValueError:
        return None


def _describe_file(filename: str, run_summary: dict) -> str:
    lower = filename.lower()
    if lower == "summary.json":
        return "Export summary"
    if lower.endswith(".xlsx"):
        return "Depot claim report workbook"
    if lower.endswith(".json"):
        return "Depot data snapshot"
    return "Export file"


def _sort_key(path: Path) -> float:
    timestamp = _parse_timestamp(path.name.split("_")[-1])
    if timestamp:
        return timestamp.timestamp()
    return path.stat().st_mtime


def _normalize(value: Optional[str]) -> str:
    return value.lower().strip() if isinstance(value, str) else ""


def _matches_search(search: str, *values: Optional[str]) -> bool:
    for value in values:
        if isinstance(value, str) and search in value.lower():
            return True
    return False
