from fastapi.testclient import TestClient

from quickcalc.api.app import app


def test_health_reports_catalog_size():
    with TestClient(app) as client:
        resp = client.get("/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["units"] > 100
    assert resp.headers.get("X-Run-ID")


def test_evaluate_returns_structured_result():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={"expression": "5m as cm"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["display"] == "500 cm"
    assert body["value"] == "500"
    assert body["unit"] == "cm"
    assert body["si_value"] == 5.0
    assert body["dimensions"] == "m"


def test_evaluate_long_names():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={"expression": "2 h as min", "long_names": True})
    assert resp.json()["display"] == "120 minutes"


def test_evaluate_error_is_422_with_kind():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={"expression": "5 m as s"})
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["kind"] == "incompatible_unit"
    assert "cannot convert" in detail["message"]


def test_validation_errors_are_normalized():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["fields"][0]["path"] == "request.expression"


def test_query_returns_ranked_entries():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/query", json={"query": "5m as cm", "limit": 3})
    assert resp.status_code == 200
    entries = resp.json()["entries"]
    assert entries[0] == {
        "text": "500 cm",
        "priority": 8.0,
        "source": "unit-calc",
        "payload": "500 cm",
    }


def test_query_error_entry_is_serializable():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/query", json={"query": "1/0"})
    assert resp.status_code == 200
    entry = resp.json()["entries"][0]
    assert entry["text"].startswith("error: ")
    assert entry["payload"] is None


def test_units_listing_filters_by_query():
    with TestClient(app) as client:
        resp = client.get("/v1/calc/units", params={"q": "kilometer"})
    assert resp.status_code == 200
    units = resp.json()
    assert [u["abbreviation"] for u in units] == ["km"]
    assert units[0]["factor"] == 1000.0
    assert units[0]["dimensions"] == "m"
    assert "kilometre" in units[0]["aliases"]


def test_incoming_run_id_is_echoed():
    with TestClient(app) as client:
        resp = client.get("/v1/health", headers={"X-Run-ID": "run-from-caller"})
    assert resp.headers["X-Run-ID"] == "run-from-caller"


def test_deeply_nested_expression_is_a_422():
    expression = "(" * 200 + "1" + ")" * 200
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={"expression": expression})
    assert resp.status_code == 422
    assert resp.json()["detail"]["kind"] == "parse"


def test_overflow_is_a_422():
    with TestClient(app) as client:
        resp = client.post("/v1/calc/evaluate", json={"expression": "10^200*10^200"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["kind"] == "evaluation"
