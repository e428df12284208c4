import json
import logging
from datetime import date
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from depot_sales.api.dependencies import get_store
from depot_sales.config import settings
from depot_sales.main import create_app
from depot_sales.persistence.filesystem import FileStorage
from depot_sales.persistence.store import SalesStore


@pytest.fixture
def store(tmp_path: Path) -> SalesStore:
    return SalesStore(FileStorage(root=tmp_path)).load()


@pytest.fixture
def api_client(store: SalesStore) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


def _submit(client: TestClient, depot: str, syndicate: str, shop_ids, products) -> dict:
    response = client.post(
        f"/api/depots/{depot}/records",
        json={"syndicate": syndicate, "shopIds": shop_ids, "products": products},
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health_endpoint(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_depot_listing_and_selection(api_client: TestClient):
    payload = api_client.get("/api/depots").json()
    assert len(payload["depots"]) == 29
    assert payload["depots"][0] == "KNL"
    assert payload["depots"][-1] == "SKLM"
    assert payload["selected"] == "KNL"

    response = api_client.put("/api/depots/selected", json={"depot": "VZM"})
    assert response.status_code == 200
    assert api_client.get("/api/depots").json()["selected"] == "VZM"

    response = api_client.put("/api/depots/selected", json={"depot": "NOWHERE"})
    assert response.status_code == 400


def test_period_selection(api_client: TestClient):
    this_year = date.today().year

    response = api_client.put("/api/period", json={"month": 4, "year": this_year})
    assert response.status_code == 200
    payload = api_client.get("/api/period").json()
    assert payload["month"] == 4
    assert payload["monthName"] == "April"
    assert this_year in payload["years"]

    assert api_client.put("/api/period", json={"month": 0, "year": this_year}).status_code == 400


def test_product_endpoints(api_client: TestClient):
    assert api_client.get("/api/products").json()["count"] == 8

    payload = api_client.post("/api/products/add").json()
    assert payload["products"][-1] == "P9"

    payload = api_client.put("/api/products", json={"names": ["A", ""]}).json()
    assert payload["products"] == ["A", "Product 2"]

    assert api_client.post("/api/products/remove").json()["products"] == ["A"]
    response = api_client.post("/api/products/remove")
    assert response.status_code == 400
    assert "At least one product" in response.json()["detail"]

    assert api_client.post("/api/products/reset").json()["products"] == ["MC VSOP"]


def test_submit_and_report(api_client: TestClient):
    api_client.put("/api/products", json={"names": ["P1", "P2"]})
    record = _submit(api_client, "KNL", "X", "S1, S2", [{"cases": 10, "rate": 5}, {"cases": 0, "rate": 100}])
    assert record["shopIds"] == ["S1", "S2"]

    report = api_client.get("/api/depots/KNL/records").json()

    assert report["companyName"] == "SRIVEN ENTERPRISES"
    assert report["title"].startswith("Claim Report From - KNL for ")
    assert report["rowCount"] == 1
    row = report["rows"][0]
    assert (row["cases"], row["perCase"], row["amount"]) == (10, 5, 50)
    assert row["amountText"] == "50"
    assert report["productTotals"][1] == {"name": "P2", "cases": 0, "effectiveRate": 0, "amount": 0}
    assert report["totals"] == {"cases": 10, "perCase": 5, "amount": 50, "amountText": "50"}
    assert report["records"][0]["id"] == record["id"]


def test_submit_validation(api_client: TestClient):
    response = api_client.post("/api/depots/KNL/records", json={"syndicate": " ", "shopIds": ["S1"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Enter Syndicate and at least one Shop ID"

    response = api_client.post("/api/depots/KNL/records", json={"syndicate": "X", "shopIds": []})
    assert response.status_code == 400


def test_malformed_numbers_are_coerced_to_zero(api_client: TestClient):
    products = [
        {"cases": "", "rate": 5},
        {"cases": "abc", "rate": None},
        {"cases": -1, "rate": "1,200"},
        {"cases": "3", "rate": "nan"},
    ]

    record = _submit(api_client, "KNL", "X", ["S1"], products)

    assert record["products"][:4] == [
        {"cases": 0.0, "rate": 5.0},
        {"cases": 0.0, "rate": 0.0},
        {"cases": 0.0, "rate": 1200.0},
        {"cases": 3.0, "rate": 0.0},
    ]
    totals = api_client.get("/api/depots/KNL/records").json()["totals"]
    assert (totals["cases"], totals["amount"]) == (3, 0)


def test_totals_use_thousands_separators(api_client: TestClient):
    _submit(api_client, "KNL", "Big", ["S1"], [{"cases": 1000, "rate": 1234.6}])

    report = api_client.get("/api/depots/KNL/records").json()

    assert report["rows"][0]["amountText"] == "1,234,600"
    assert report["totals"]["amountText"] == "1,234,600"


def test_delete_and_clear(api_client: TestClient):
    first = _submit(api_client, "KNL", "A", ["S1"], [])
    _submit(api_client, "KNL", "B", ["S2"], [])

    response = api_client.delete(f"/api/depots/KNL/records/{first['id']}")
    assert response.status_code == 200
    assert api_client.delete("/api/depots/KNL/records/missing").status_code == 404

    response = api_client.delete("/api/depots/KNL/records")
    assert response.json() == {"depot": "KNL", "removed": 1}
    assert api_client.get("/api/depots/KNL/records").json()["rowCount"] == 0


def test_json_export_and_import(api_client: TestClient, store: SalesStore):
    _submit(api_client, "KNL", "Keep", ["S1"], [{"cases": 1, "rate": 1}])

    response = api_client.get("/api/depots/KNL/export/json")
    assert response.status_code == 200
    assert 'filename="KNL.json"' in response.headers["content-disposition"]
    exported = json.loads(response.content)
    assert exported["depot"] == "KNL"
    assert exported["rows"][0]["syndicate"] == "Keep"

    bad = {"depot": "KNL", "rows": "bad"}
    response = api_client.post(
        "/api/depots/KNL/import",
        files={"file": ("bad.json", json.dumps(bad).encode("utf-8"), "application/json")},
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Import failed")
    assert [record.syndicate for record in store.records("KNL")] == ["Keep"]

    legacy = {
        "depot": "KNL",
        "products": ["P1", "P2"],
        "rows": [
            {"syndicate": "ACME", "shopId": "S1", "products": [{"cases": 10, "rate": 10}]},
            {"syndicate": "ACME", "shopIds": ["S2", "S1"], "products": [{"cases": 5, "rate": 20}]},
        ],
    }
    response = api_client.post(
        "/api/depots/ATP/import",
        files={"file": ("legacy.json", json.dumps(legacy).encode("utf-8"), "application/json")},
    )
    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["depot"] == "ATP"
    assert payload["importedRows"] == 2
    assert payload["products"] == ["P1", "P2"]
    (record,) = payload["records"]
    assert sorted(record["shopIds"]) == ["S1", "S2"]
    assert record["products"][0] == {"cases": 5.0, "rate": 20.0}
    assert len(store.records("KNL")[0].products) == 2


def test_xlsx_export_and_report_manifest(api_client: TestClient):
    response = api_client.get("/api/depots/KNL/export/xlsx")
    assert response.status_code == 400
    assert response.json()["detail"] == "No data found in the table for this depot."

    _submit(api_client, "KNL", "X", ["S1"], [{"cases": 3, "rate": 7}])
    response = api_client.get("/api/depots/KNL/export/xlsx", params={"persist": True})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    wb = load_workbook(BytesIO(response.content))
    assert wb.sheetnames == ["KNL"]

    runs = api_client.get("/api/reports/runs", params={"depot": "KNL"}).json()
    assert len(runs) == 1
    assert runs[0]["kind"] == "workbook"
    assert runs[0]["totalAmount"] == 21

    exports = api_client.get("/api/reports/exports", params={"file_type": "XLSX"}).json()
    assert len(exports) == 1
    download = api_client.get(exports[0]["downloadPath"])
    assert download.status_code == 200
    assert download.content == response.content

    missing = api_client.get(f"/api/reports/exports/{exports[0]['runId']}/nope.xlsx")
    assert missing.status_code == 404


def test_unknown_depot_is_rejected(api_client: TestClient):
    assert api_client.get("/api/depots/NOWHERE/records").status_code == 400
    assert api_client.get("/api/depots/NOWHERE/export/json").status_code == 400


def test_get_store_loads_from_configured_root(tmp_path: Path, monkeypatch, caplog):
    monkeypatch.setattr(settings, "data_root", tmp_path)
    get_store.cache_clear()
    caplog.set_level(logging.INFO, logger="depot_sales.api.dependencies")
    try:
        store = get_store()
    finally:
        get_store.cache_clear()

    assert store.storage.root == tmp_path.resolve()
    assert any(
        record.name == "depot_sales.api.dependencies" and "Loaded sales store" in record.getMessage()
        for record in caplog.records
    )
