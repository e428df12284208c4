"""Per-row, per-product and per-depot totals for a depot's records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from ...models.domain import DepotRecord


@dataclass(frozen=True, slots=True)
class RowTotals:
    record: DepotRecord
    cases: float
    amount: float
    per_case: float


@dataclass(frozen=True, slots=True)
class ProductTotals:
    index: int
    cases: float
    amount: float
    effective_rate: float


@dataclass(frozen=True, slots=True)
class DepotReport:
    rows: List[RowTotals]
    products: List[ProductTotals]
    cases: float
    amount: float
    per_case: float


def _ratio(amount: float, cases: float) -> float:
    return amount / cases if cases > 0 else 0.0


def aggregate(records: Sequence[DepotRecord], product_count: int) -> DepotReport:
    """Compute report totals without rounding; rounding is a display concern."""
    column_cases = [0.0] * product_count
    column_amounts = [0.0] * product_count
    rows: List[RowTotals] = []

    for record in records:
        row_cases = 0.0
        row_amount = 0.0
        for index, product in enumerate(record.products[:product_count]):
            amount = product.amount
            column_cases[index] += product.cases
            column_amounts[index] += amount
            row_cases += product.cases
            row_amount += amount
        rows.append(
            RowTotals(
                record=record,
                cases=row_cases,
                amount=row_amount,
                per_case=_ratio(row_amount, row_cases),
            )
        )

    products = [
        ProductTotals(
            index=index,
            cases=column_cases[index],
            amount=column_amounts[index],
            effective_rate=_ratio(column_amounts[index], column_cases[index]),
        )
        for index in range(product_count)
    ]
    depot_cases = sum(row.cases for row in rows)
    depot_amount = sum(row.amount for row in rows)
    return DepotReport(
        rows=rows,
        products=products,
        cases=depot_cases,
        amount=depot_amount,
        per_case=_ratio(depot_amount, depot_cases),
    )


def display_round(value: float | None) -> int:
    """Round to the nearest whole unit, halves upward."""
    if not value or not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def format_amount(value: float | None) -> str:
    return f"{display_round(value):,}"
