"""Product configuration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import PreconditionError
from ...persistence.store import SalesStore
from ...schemas.sales import ProductNamesRequest, ProductNamesResponse
from ...services.sales import add_product, remove_product, reset_product_names, set_product_names
from ..dependencies import get_store

router = APIRouter(prefix="/products", tags=["products"])


def _response(names: list[str]) -> ProductNamesResponse:
    return ProductNamesResponse(products=names, count=len(names))


@router.get("", response_model=ProductNamesResponse, status_code=status.HTTP_200_OK)
def get_products(store: SalesStore = Depends(get_store)) -> ProductNamesResponse:
    return _response(list(store.products))


@router.put("", response_model=ProductNamesResponse, status_code=status.HTTP_200_OK)
def put_products(payload: ProductNamesRequest, store: SalesStore = Depends(get_store)) -> ProductNamesResponse:
    try:
        return _response(set_product_names(store, payload.names))
    except PreconditionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/add", response_model=ProductNamesResponse, status_code=status.HTTP_200_OK)
def post_add_product(store: SalesStore = Depends(get_store)) -> ProductNamesResponse:
    return _response(add_product(store))


@router.post("/remove", response_model=ProductNamesResponse, status_code=status.HTTP_200_OK)
def post_remove_product(store: SalesStore = Depends(get_store)) -> ProductNamesResponse:
    try:
        return _response(remove_product(store))
    except PreconditionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/reset", response_model=ProductNamesResponse, status_code=status.HTTP_200_OK)
def post_reset_products(store: SalesStore = Depends(get_store)) -> ProductNamesResponse:
    return _response(reset_product_names(store))
