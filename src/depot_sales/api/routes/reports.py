"""Report manifest endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import FileResponse

from ...persistence.store import SalesStore
from ...schemas.reports import ReportExportModel, ReportRunModel
from ...services.reports import list_export_files, list_runs, resolve_export_file
from ..dependencies import get_store

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/exports", response_model=list[ReportExportModel])
def get_report_exports(
  kind: str | None = Query(default=None, description="Filter by export kind (workbook, snapshot)"),
  depot: str | None = Query(default=None, description="Filter by depot"),
  file_type: str | None = Query(default=None, description="Filter by file type (XLSX, JSON)"),
  search: str | None = Query(default=None, description="Case-insensitive search across name/description/depot"),
  limit: int | None = Query(default=None, gt=0, description="Maximum number of exports to return"),
  store: SalesStore = Depends(get_store),
) -> list[ReportExportModel]:
  exports = list_export_files(
    kind=kind,
    depot=depot,
    file_type=file_type,
    search=search,
    limit=limit,
    output_root=store.storage.output_root,
  )
  return [ReportExportModel.model_validate(item) for item in exports]


@router.get("/runs", response_model=list[ReportRunModel])
def get_report_runs(
  kind: str | None = Query(default=None, description="Filter by export kind"),
  depot: str | None = Query(default=None, description="Filter by depot"),
  search: str | None = Query(default=None, description="Search by run metadata"),
  limit: int | None = Query(default=None, gt=0, description="Maximum number of runs to return"),
  store: SalesStore = Depends(get_store),
) -> list[ReportRunModel]:
  runs = list_runs(kind=kind, depot=depot, limit=limit, search=search, output_root=store.storage.output_root)
  return [ReportRunModel.model_validate(item) for item in runs]


@router.get(
  "/exports/{run_id}/{file_name:path}",
  response_class=FileResponse,
  status_code=status.HTTP_200_OK,
)
def download_export_file(
  run_id: str = Path(..., description="Run directory identifier"),
  file_name: str = Path(..., description="File name within the run directory"),
  store: SalesStore = Depends(get_store),
) -> FileResponse:
  try:
    file_path = resolve_export_file(run_id, file_name, output_root=store.storage.output_root)
  except FileNotFoundError as exc:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

  return FileResponse(
    path=file_path,
    filename=file_path.name,
    media_type=_get_media_type(file_path),
    headers={"Content-Disposition": f'attachment; filename="{file_path.name}"'},
  )


def _get_media_type(file_path) -> str:
  """Determine MIME type based on file extension."""
  suffix = file_path.suffix.lower()
  mime_types = {
    ".json": "application/json",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
  }
  return mime_types.get(suffix, "application/octet-stream")
