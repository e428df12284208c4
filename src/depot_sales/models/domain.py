"""Domain models for depot sales records."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Tuple


@dataclass(frozen=True, slots=True)
class ProductEntry:
    """Cases sold and rate per case for one configured product."""

    cases: float = 0.0
    rate: float = 0.0

    @property
    def amount(self) -> float:
        return self.cases * self.rate

    def to_dict(self) -> dict:
        return {"cases": self.cases, "rate": self.rate}


@dataclass(frozen=True, slots=True)
class DepotRecord:
    """One syndicate's product figures within a depot.

    ``shop_ids`` keeps first-seen order for display; it is treated as a set
    everywhere else.
    """

    id: str
    syndicate: str
    shop_ids: Tuple[str, ...] = ()
    products: Tuple[ProductEntry, ...] = field(default_factory=tuple)

    @property
    def total(self) -> float:
        return products_total(self.products)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "syndicate": self.syndicate,
            "shopIds": list(self.shop_ids),
            "products": [product.to_dict() for product in self.products],
        }


def products_total(products: Tuple[ProductEntry, ...] | list[ProductEntry]) -> float:
    return sum(product.amount for product in products)


def fit_products(products: Tuple[ProductEntry, ...] | list[ProductEntry], product_count: int) -> Tuple[ProductEntry, ...]:
    """Truncate or zero-pad a product vector to ``product_count`` entries."""
    fitted = tuple(products[:product_count])
    if len(fitted) < product_count:
        fitted += tuple(ProductEntry() for _ in range(product_count - len(fitted)))
    return fitted


def union_shop_ids(*groups: Tuple[str, ...] | list[str]) -> Tuple[str, ...]:
    """Deduplicated union of shop-ID groups in first-seen order."""
    merged: dict[str, None] = {}
    for group in groups:
        for shop_id in group:
            merged.setdefault(shop_id, None)
    return tuple(merged)


@dataclass(frozen=True, slots=True)
class Period:
    """Reporting month and year."""

    month: int
    year: int

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]

    def to_key(self) -> str:
        return f"{self.month:02d}-{self.year}"

    @classmethod
    def from_key(cls, value: str) -> "Period":
        month_text, _, year_text = value.strip().partition("-")
        period = cls(month=int(month_text), year=int(year_text))
        if not 1 <= period.month <= 12:
            raise ValueError(f"Invalid month in period '{value}'")
        return period

    @classmethod
    def current(cls) -> "Period":
        today = date.today()
        return cls(month=today.month, year=today.year)
