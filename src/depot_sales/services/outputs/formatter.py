"""Utilities to serialize depot records and reports into API models and summaries."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import DepotRecord
from ...schemas.sales import (
    DepotReportResponse,
    DepotTotalsModel,
    PeriodModel,
    ProductEntryModel,
    ProductTotalsModel,
    RecordModel,
    ReportCellModel,
    ReportRowModel,
)
from ..reporting import display_round, format_amount
from ..sales import DepotReportView


def record_to_model(record: DepotRecord) -> RecordModel:
    return RecordModel(
        id=record.id,
        syndicate=record.syndicate,
        shop_ids=list(record.shop_ids),
        products=[ProductEntryModel(cases=p.cases, rate=p.rate) for p in record.products],
    )


def records_to_models(records: Sequence[DepotRecord]) -> list[RecordModel]:
    return [record_to_model(record) for record in records]


def report_to_response(view: DepotReportView) -> DepotReportResponse:
    report = view.report
    rows = [
        ReportRowModel(
            id=row.record.id,
            syndicate=row.record.syndicate,
            shop_ids=list(row.record.shop_ids),
            cells=[
                ReportCellModel(
                    cases=display_round(p.cases),
                    rate=display_round(p.rate),
                    amount=display_round(p.amount),
                )
                for p in row.record.products
            ],
            cases=display_round(row.cases),
            per_case=display_round(row.per_case),
            amount=display_round(row.amount),
            amount_text=format_amount(row.amount),
        )
        for row in report.rows
    ]
    product_totals = [
        ProductTotalsModel(
            name=view.product_names[column.index],
            cases=display_round(column.cases),
            effective_rate=display_round(column.effective_rate),
            amount=display_round(column.amount),
        )
        for column in report.products
    ]
    return DepotReportResponse(
        depot=view.depot,
        company_name=view.company_name,
        title=view.title,
        period=PeriodModel(month=view.period.month, year=view.period.year, month_name=view.period.month_name),
        products=list(view.product_names),
        row_count=len(rows),
        rows=rows,
        product_totals=product_totals,
        totals=DepotTotalsModel(
            cases=display_round(report.cases),
            per_case=display_round(report.per_case),
            amount=display_round(report.amount),
            amount_text=format_amount(report.amount),
        ),
        records=records_to_models([row.record for row in report.rows]),
    )


def report_summary(view: DepotReportView) -> dict:
    """Metadata written beside a persisted export."""
    return {
        "title": view.title,
        "period": view.period.to_key(),
        "products": list(view.product_names),
        "row_count": len(view.report.rows),
        "totals": {
            "cases": display_round(view.report.cases),
            "per_case": display_round(view.report.per_case),
            "amount": display_round(view.report.amount),
        },
    }
