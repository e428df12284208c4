"""Pydantic request/response models for depot sales endpoints."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.consolidation.normalize import coerce_number


class ProductEntryModel(BaseModel):
    cases: float = Field(default=0.0, ge=0.0, description="Cases sold.")
    rate: float = Field(default=0.0, ge=0.0, description="Rate per case.")

    @field_validator("cases", "rate", mode="before")
    @classmethod
    def coerce_malformed(cls, value: Any) -> float:
        return coerce_number(value)


class RecordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    syndicate: str
    shop_ids: List[str] = Field(default_factory=list, alias="shopIds")
    products: List[ProductEntryModel] = Field(default_factory=list)


class EntryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    syndicate: str = Field(..., description="Syndicate (customer group) name.")
    shop_ids: Union[List[str], str] = Field(
        ...,
        alias="shopIds",
        description="Shop IDs as a list or a comma-separated string.",
    )
    products: List[ProductEntryModel] = Field(
        default_factory=list,
        description="One entry per configured product; missing entries count as zero.",
    )


class ReportCellModel(BaseModel):
    cases: int
    rate: int
    amount: int


class ReportRowModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    syndicate: str
    shop_ids: List[str] = Field(alias="shopIds")
    cells: List[ReportCellModel]
    cases: int
    per_case: int = Field(alias="perCase")
    amount: int
    amount_text: str = Field(alias="amountText")


class ProductTotalsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    cases: int
    effective_rate: int = Field(alias="effectiveRate")
    amount: int


class DepotTotalsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cases: int
    per_case: int = Field(alias="perCase")
    amount: int
    amount_text: str = Field(alias="amountText")


class PeriodModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: int = Field(..., ge=1, le=12)
    year: int
    month_name: Optional[str] = Field(default=None, alias="monthName")


class DepotReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    depot: str
    company_name: str = Field(alias="companyName")
    title: str
    period: PeriodModel
    products: List[str]
    row_count: int = Field(alias="rowCount")
    rows: List[ReportRowModel]
    product_totals: List[ProductTotalsModel] = Field(alias="productTotals")
    totals: DepotTotalsModel
    records: List[RecordModel]


class ProductNamesRequest(BaseModel):
    names: List[str]


class ProductNamesResponse(BaseModel):
    products: List[str]
    count: int


class DepotListResponse(BaseModel):
    depots: List[str]
    selected: str


class SelectDepotRequest(BaseModel):
    depot: str

    @field_validator("depot")
    @classmethod
    def strip_depot(cls, value: str) -> str:
        return value.strip()


class PeriodRequest(BaseModel):
    month: int
    year: int


class PeriodResponse(PeriodModel):
    years: List[int]


class ClearDepotResponse(BaseModel):
    depot: str
    removed: int
