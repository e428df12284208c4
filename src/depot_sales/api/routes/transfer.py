"""Depot snapshot import/export and spreadsheet download endpoints."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from ...errors import PreconditionError, SnapshotImportError
from ...persistence.store import SalesStore
from ...schemas.transfer import DepotSnapshotModel, ImportResultModel
from ...services.outputs.formatter import records_to_models, report_summary
from ...services.sales import build_depot_report, require_depot
from ...services.transfer import (
    build_depot_workbook,
    export_snapshot,
    import_snapshot,
    parse_snapshot,
    persist_export,
    snapshot_file_name,
    workbook_file_name,
    workbook_to_bytes,
)
from ..dependencies import get_store

router = APIRouter(prefix="/depots", tags=["transfer"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(file_name: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{file_name}"'}


@router.get("/{depot}/export/json", response_model=DepotSnapshotModel, status_code=status.HTTP_200_OK)
def export_depot_json(
    depot: str = Path(..., description="Depot name"),
    persist: bool = Query(default=False, description="Also keep a copy under the export outputs."),
    store: SalesStore = Depends(get_store),
) -> Response:
    try:
        snapshot = export_snapshot(store, depot)
    except PreconditionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    file_name = snapshot_file_name(snapshot["depot"])
    payload = json.dumps(snapshot, ensure_ascii=False, indent=2).encode("utf-8")
    if persist:
        persist_export(
            "snapshot",
            snapshot["depot"],
            file_name,
            payload,
            {"row_count": len(snapshot["rows"]), "products": snapshot["products"]},
            storage=store.storage,
        )
    return Response(content=payload, media_type="application/json", headers=_attachment(file_name))


@router.post("/{depot}/import", response_model=ImportResultModel, status_code=status.HTTP_200_OK)
async def import_depot_json(
    depot: str = Path(..., description="Depot name"),
    file: UploadFile = File(...),
    store: SalesStore = Depends(get_store),
) -> ImportResultModel:
    contents = await file.read()
    try:
        document = parse_snapshot(contents)
        records = await run_in_threadpool(import_snapshot, store, depot, document)
    except PreconditionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SnapshotImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Import failed: {exc}") from exc

    return ImportResultModel(
        depot=require_depot(depot),
        products=list(store.products),
        imported_rows=len(document.get("rows") or []),
        records=records_to_models(records),
    )


@router.get("/{depot}/export/xlsx", response_class=Response, status_code=status.HTTP_200_OK)
def export_depot_xlsx(
    depot: str = Path(..., description="Depot name"),
    persist: bool = Query(default=False, description="Also keep a copy under the export outputs."),
    store: SalesStore = Depends(get_store),
) -> Response:
    try:
        view = build_depot_report(store, depot)
        payload = workbook_to_bytes(build_depot_workbook(view))
    except PreconditionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    file_name = workbook_file_name(view.depot)
    if persist:
        persist_export("workbook", view.depot, file_name, payload, report_summary(view), storage=store.storage)
    return Response(content=payload, media_type=XLSX_MEDIA_TYPE, headers=_attachment(file_name))
