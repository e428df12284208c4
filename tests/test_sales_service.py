from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path

import pytest

from depot_sales.errors import PreconditionError, RecordNotFoundError
from depot_sales.models.domain import Period, ProductEntry
from depot_sales.persistence.filesystem import FileStorage
from depot_sales.persistence.store import SalesStore
from depot_sales.services import sales


@pytest.fixture
def store(tmp_path: Path) -> SalesStore:
    return SalesStore(FileStorage(root=tmp_path)).load()


def _reloaded(store: SalesStore) -> SalesStore:
    return SalesStore(store.storage, key=store.key).load()


def test_submit_entry_creates_sorted_records(store: SalesStore):
    sales.submit_entry(store, "KNL", "Zulu", "S1", [{"cases": 1, "rate": 2}])
    sales.submit_entry(store, "KNL", "alpha", ["S2"], [])

    records = store.records("KNL")
    assert [record.syndicate for record in records] == ["alpha", "Zulu"]
    assert len(records[0].products) == store.product_count
    assert _reloaded(store).records("KNL") == records


def test_resubmission_unions_shops_and_replaces_products(store: SalesStore):
    first = sales.submit_entry(store, "KNL", "ACME", "S1, S2", [{"cases": 50, "rate": 10}])
    second = sales.submit_entry(store, "KNL", " ACME ", "S2,S3", [{"cases": 1, "rate": 1}])

    assert second.id == first.id
    assert second.shop_ids == ("S1", "S2", "S3")
    assert second.products[0] == ProductEntry(1.0, 1.0)
    assert len(store.records("KNL")) == 1


def test_submit_entry_rejects_missing_syndicate_or_shops(store: SalesStore):
    with pytest.raises(PreconditionError):
        sales.submit_entry(store, "KNL", "   ", "S1", [])
    with pytest.raises(PreconditionError):
        sales.submit_entry(store, "KNL", "ACME", " , ", [])
    with pytest.raises(PreconditionError):
        sales.submit_entry(store, "NOWHERE", "ACME", "S1", [])
    with pytest.raises(PreconditionError, match="select a depot"):
        sales.submit_entry(store, "", "ACME", "S1", [])

    assert store.data == {}


def test_delete_record_and_clear_depot(store: SalesStore):
    kept = sales.submit_entry(store, "KNL", "Keep", "S1", [])
    gone = sales.submit_entry(store, "KNL", "Gone", "S2", [])
    sales.submit_entry(store, "ATP", "Other", "S3", [])

    removed = sales.delete_record(store, "KNL", gone.id)

    assert removed.syndicate == "Gone"
    assert store.records("KNL") == [kept]
    with pytest.raises(RecordNotFoundError):
        sales.delete_record(store, "KNL", "missing")

    assert sales.clear_depot(store, "KNL") == 1
    assert store.records("KNL") == []
    assert len(store.records("ATP")) == 1
    assert _reloaded(store).records("KNL") == []


def test_product_edits(store: SalesStore):
    sales.submit_entry(store, "KNL", "ACME", "S1", [{"cases": i + 1, "rate": 1} for i in range(8)])

    names = sales.add_product(store)
    assert names[-1] == "P9"
    assert len(store.records("KNL")[0].products) == 9

    names = sales.set_product_names(store, ["One", "  ", "Three"])
    assert names == ["One", "Product 2", "Three"]
    (record,) = store.records("KNL")
    assert [p.cases for p in record.products] == [1.0, 2.0, 3.0]

    assert sales.reset_product_names(store) == ["MC VSOP", "MCB", "SSW"]

    sales.remove_product(store)
    sales.remove_product(store)
    with pytest.raises(PreconditionError, match="At least one product"):
        sales.remove_product(store)
    assert store.products == ["MC VSOP"]

    with pytest.raises(PreconditionError):
        sales.set_product_names(store, [])


def test_shrinking_products_keeps_leading_values(store: SalesStore):
    entries = [{"cases": i + 1, "rate": 2 * (i + 1)} for i in range(8)]
    sales.submit_entry(store, "KNL", "ACME", "S1", entries)
    before = store.records("KNL")[0].products

    sales.set_product_names(store, store.products[:5])

    assert store.records("KNL")[0].products == before[:5]


def test_depot_and_period_selection(store: SalesStore):
    assert sales.selected_depot(store) == "KNL"
    assert sales.select_depot(store, " ATP ") == "ATP"
    assert sales.selected_depot(store) == "ATP"
    with pytest.raises(PreconditionError):
        sales.select_depot(store, "NOWHERE")

    this_year = date.today().year
    period = sales.select_period(store, 2, this_year)
    assert sales.selected_period(store) == period
    with pytest.raises(PreconditionError):
        sales.select_period(store, 13, this_year)
    with pytest.raises(PreconditionError):
        sales.select_period(store, 1, this_year + 10)


def test_selectable_years_span():
    years = sales.selectable_years(date(2026, 6, 1))

    assert years[0] == 2021
    assert years[-1] == 2028


def test_build_depot_report(store: SalesStore):
    sales.set_product_names(store, ["P1", "P2"])
    sales.submit_entry(store, "KNL", "X", "S1", [{"cases": 10, "rate": 5}, {"cases": 0, "rate": 100}])

    view = sales.build_depot_report(store, "KNL", Period(month=5, year=2026))

    assert view.title == "Claim Report From - KNL for May 2026"
    assert view.company_name == "SRIVEN ENTERPRISES"
    (row,) = view.report.rows
    assert (row.cases, row.amount, row.per_case) == (10, 50, 5)
    assert view.report.products[1].effective_rate == 0


def test_concurrent_submits_keep_every_record(store: SalesStore):
    def submit(i: int):
        return sales.submit_entry(store, "KNL", f"SYN{i:02d}", f"S{i}", [{"cases": 1, "rate": i}])

    with ThreadPoolExecutor(max_workers=16) as pool:
        saved = list(pool.map(submit, range(16)))

    assert len({record.id for record in saved}) == 16
    assert [record.syndicate for record in store.records("KNL")] == [f"SYN{i:02d}" for i in range(16)]
    assert len(_reloaded(store).records("KNL")) == 16
    assert list(store.storage.state_root.glob("*.tmp")) == []
