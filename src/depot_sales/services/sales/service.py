"""User actions against the sales store.

Every function validates before touching the store, so a rejected action
leaves the store exactly as it was. Successful mutations are saved before
returning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Sequence

from ...config import settings
from ...data.catalog import DEPOTS, default_product_name, resolve_depot
from ...errors import PreconditionError, RecordNotFoundError
from ...models.domain import DepotRecord, Period, fit_products, union_shop_ids
from ...persistence.store import SalesStore
from ..consolidation import sort_records, split_shop_ids
from ..consolidation.normalize import clean_shop_ids, coerce_product, new_record_id
from ..reporting import DepotReport, aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DepotReportView:
    depot: str
    period: Period
    company_name: str
    title: str
    product_names: List[str]
    report: DepotReport


def require_depot(depot: str | None) -> str:
    resolved = resolve_depot(depot)
    if resolved is None:
        if not depot or not depot.strip():
            raise PreconditionError("Please select a depot first.")
        raise PreconditionError(f"Unknown depot '{depot}'")
    return resolved


def _parse_shop_ids(shop_ids: str | Iterable[Any] | None) -> tuple[str, ...]:
    if shop_ids is None:
        return ()
    if isinstance(shop_ids, str):
        return split_shop_ids(shop_ids)
    return clean_shop_ids(shop_ids)


def submit_entry(
    store: SalesStore,
    depot: str,
    syndicate: str,
    shop_ids: str | Iterable[Any] | None,
    products: Sequence[Any] | None,
) -> DepotRecord:
    """Create or update the record for ``syndicate`` in ``depot``.

    Resubmitting a syndicate unions its shop IDs and replaces its product
    figures with the submitted ones.
    """
    depot = require_depot(depot)
    syndicate = (syndicate or "").strip()
    cleaned_shop_ids = _parse_shop_ids(shop_ids)
    if not syndicate or not cleaned_shop_ids:
        raise PreconditionError("Enter Syndicate and at least one Shop ID")

    with store.lock:
        entries = fit_products(
            tuple(coerce_product(product) for product in (products or [])[: store.product_count]),
            store.product_count,
        )
        records = store.records(depot)
        saved: DepotRecord | None = None
        for index, record in enumerate(records):
            if record.syndicate == syndicate:
                saved = DepotRecord(
                    id=record.id,
                    syndicate=syndicate,
                    shop_ids=union_shop_ids(record.shop_ids, cleaned_shop_ids),
                    products=entries,
                )
                records[index] = saved
                break
        if saved is None:
            saved = DepotRecord(id=new_record_id(), syndicate=syndicate, shop_ids=cleaned_shop_ids, products=entries)
            records.append(saved)

        store.set_records(depot, sort_records(records))
        store.save()
    logger.info("Saved syndicate '%s' in depot %s (%d shops)", syndicate, depot, len(saved.shop_ids))
    return saved


def delete_record(store: SalesStore, depot: str, record_id: str) -> DepotRecord:
    depot = require_depot(depot)
    with store.lock:
        records = store.records(depot)
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            raise RecordNotFoundError(depot, record_id)
        removed = next(record for record in records if record.id == record_id)
        store.set_records(depot, remaining)
        store.save()
    logger.info("Deleted record %s (%s) from depot %s", record_id, removed.syndicate, depot)
    return removed


def clear_depot(store: SalesStore, depot: str) -> int:
    """Remove every record in one depot; returns how many were removed."""
    depot = require_depot(depot)
    with store.lock:
        removed = len(store.records(depot))
        store.set_records(depot, [])
        store.save()
    logger.info("Cleared %d records from depot %s", removed, depot)
    return removed


def set_product_names(store: SalesStore, names: Sequence[str]) -> List[str]:
    if len(names) < 1:
        raise PreconditionError("At least one product must remain!")
    cleaned = [(name or "").strip() or f"Product {index + 1}" for index, name in enumerate(names)]
    with store.lock:
        store.set_products(cleaned)
        store.save()
        return list(store.products)


def add_product(store: SalesStore) -> List[str]:
    with store.lock:
        names = list(store.products)
        names.append(f"P{len(names) + 1}")
        store.set_products(names)
        store.save()
        return list(store.products)


def remove_product(store: SalesStore) -> List[str]:
    with store.lock:
        if store.product_count <= 1:
            raise PreconditionError("At least one product must remain!")
        store.set_products(store.products[:-1])
        store.save()
        return list(store.products)


def reset_product_names(store: SalesStore) -> List[str]:
    with store.lock:
        store.set_products([default_product_name(index) for index in range(store.product_count)])
        store.save()
        return list(store.products)


def list_depots() -> List[str]:
    return list(DEPOTS)


def selected_depot(store: SalesStore) -> str:
    return store.get_last_depot() or DEPOTS[0]


def select_depot(store: SalesStore, depot: str) -> str:
    depot = require_depot(depot)
    store.set_last_depot(depot)
    return depot


def selectable_years(today: date | None = None) -> List[int]:
    this_year = (today or date.today()).year
    return list(range(this_year - settings.years_back, this_year + settings.years_ahead + 1))


def selected_period(store: SalesStore) -> Period:
    return store.get_period() or Period.current()


def select_period(store: SalesStore, month: int, year: int) -> Period:
    if not 1 <= month <= 12:
        raise PreconditionError(f"Invalid month {month}; expected 1-12")
    if year not in selectable_years():
        raise PreconditionError(f"Year {year} is outside the selectable range")
    period = Period(month=month, year=year)
    store.set_period(period)
    return period


def report_title(depot: str, period: Period) -> str:
    return settings.report_title_template.format(depot=depot, month_name=period.month_name, year=period.year)


def build_depot_report(store: SalesStore, depot: str, period: Period | None = None) -> DepotReportView:
    depot = require_depot(depot)
    period = period or selected_period(store)
    return DepotReportView(
        depot=depot,
        period=period,
        company_name=settings.company_name,
        title=report_title(depot, period),
        product_names=list(store.products),
        report=aggregate(store.records(depot), store.product_count),
    )
