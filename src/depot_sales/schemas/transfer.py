"""Snapshot import/export API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .sales import RecordModel


class DepotSnapshotModel(BaseModel):
    depot: str
    products: List[str]
    rows: List[RecordModel]


class ImportResultModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    depot: str
    products: List[str]
    imported_rows: int = Field(alias="importedRows")
    records: List[RecordModel]
