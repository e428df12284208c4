"""Report manifest API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportExportModel(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  run_id: str = Field(..., alias='runId')
  kind: Optional[str] = None
  file_name: str = Field(..., alias='fileName')
  file_type: str = Field(..., alias='fileType')
  size_bytes: int = Field(..., alias='sizeBytes')
  created_at: Optional[datetime] = Field(None, alias='createdAt')
  depot: Optional[str] = None
  period: Optional[str] = None
  description: Optional[str] = None
  download_path: str = Field(..., alias='downloadPath')


class ReportRunModel(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  kind: str
  created_at: Optional[datetime] = Field(None, alias='createdAt')
  depot: Optional[str] = None
  title: Optional[str] = None
  period: Optional[str] = None
  row_count: int = Field(0, alias='rowCount')
  total_cases: int = Field(0, alias='totalCases')
  total_amount: int = Field(0, alias='totalAmount')
