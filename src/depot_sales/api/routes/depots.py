"""Depot selection and record entry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...errors import PreconditionError, RecordNotFoundError
from ...persistence.store import SalesStore
from ...schemas.sales import (
    ClearDepotResponse,
    DepotListResponse,
    DepotReportResponse,
    EntryRequest,
    PeriodRequest,
    PeriodResponse,
    RecordModel,
    SelectDepotRequest,
)
from ...services.outputs.formatter import record_to_model, report_to_response
from ...services.sales import (
    build_depot_report,
    clear_depot,
    delete_record,
    list_depots,
    select_depot,
    select_period,
    selectable_years,
    selected_depot,
    selected_period,
    submit_entry,
)
from ..dependencies import get_store

router = APIRouter(tags=["depots"])


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/depots", response_model=DepotListResponse, status_code=status.HTTP_200_OK)
def get_depots(store: SalesStore = Depends(get_store)) -> DepotListResponse:
    return DepotListResponse(depots=list_depots(), selected=selected_depot(store))


@router.put("/depots/selected", response_model=DepotListResponse, status_code=status.HTTP_200_OK)
def put_selected_depot(payload: SelectDepotRequest, store: SalesStore = Depends(get_store)) -> DepotListResponse:
    try:
        depot = select_depot(store, payload.depot)
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    return DepotListResponse(depots=list_depots(), selected=depot)


@router.get("/period", response_model=PeriodResponse, status_code=status.HTTP_200_OK)
def get_period(store: SalesStore = Depends(get_store)) -> PeriodResponse:
    period = selected_period(store)
    return PeriodResponse(month=period.month, year=period.year, month_name=period.month_name, years=selectable_years())


@router.put("/period", response_model=PeriodResponse, status_code=status.HTTP_200_OK)
def put_period(payload: PeriodRequest, store: SalesStore = Depends(get_store)) -> PeriodResponse:
    try:
        period = select_period(store, payload.month, payload.year)
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    return PeriodResponse(month=period.month, year=period.year, month_name=period.month_name, years=selectable_years())


@router.get("/depots/{depot}/records", response_model=DepotReportResponse, status_code=status.HTTP_200_OK)
def get_depot_records(
    depot: str = Path(..., description="Depot name"),
    store: SalesStore = Depends(get_store),
) -> DepotReportResponse:
    try:
        view = build_depot_report(store, depot)
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    return report_to_response(view)


@router.post("/depots/{depot}/records", response_model=RecordModel, status_code=status.HTTP_201_CREATED)
def post_depot_record(
    payload: EntryRequest,
    depot: str = Path(..., description="Depot name"),
    store: SalesStore = Depends(get_store),
) -> RecordModel:
    try:
        record = submit_entry(
            store,
            depot,
            payload.syndicate,
            payload.shop_ids,
            [product.model_dump() for product in payload.products],
        )
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    return record_to_model(record)


@router.delete("/depots/{depot}/records/{record_id}", response_model=RecordModel, status_code=status.HTTP_200_OK)
def delete_depot_record(
    depot: str = Path(..., description="Depot name"),
    record_id: str = Path(..., description="Record identifier"),
    store: SalesStore = Depends(get_store),
) -> RecordModel:
    try:
        removed = delete_record(store, depot, record_id)
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return record_to_model(removed)


@router.delete("/depots/{depot}/records", response_model=ClearDepotResponse, status_code=status.HTTP_200_OK)
def clear_depot_records(
    depot: str = Path(..., description="Depot name"),
    store: SalesStore = Depends(get_store),
) -> ClearDepotResponse:
    try:
        removed = clear_depot(store, depot)
    except PreconditionError as exc:
        raise _bad_request(exc) from exc
    return ClearDepotResponse(depot=depot.strip(), removed=removed)
