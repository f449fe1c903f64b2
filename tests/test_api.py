"""
TEST: REST API
==============
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.main import app

DATA_DIR = Path(__file__).parent.parent / "demos" / "data"

client = TestClient(app)


@pytest.fixture
def result_payload():
    return json.loads((DATA_DIR / "two_rod_result.json").read_text(encoding="utf-8"))


@pytest.fixture
def structure_payload():
    return json.loads((DATA_DIR / "two_rod_structure.json").read_text(encoding="utf-8"))


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_layout(structure_payload):
    response = client.post("/api/layout", json=structure_payload)

    assert response.status_code == 200
    data = response.json()
    assert len(data["rods"]) == 2
    assert len(data["nodeXs"]) == 3
    assert len(data["labels"]) == 3
    assert data["labels"][1]["offset"] == pytest.approx(-10.0)
    assert data["canvasWidth"] >= 400


def test_layout_rejects_node_mismatch(structure_payload):
    structure_payload["nodes"] = structure_payload["nodes"][:2]
    response = client.post("/api/layout", json=structure_payload)
    assert response.status_code == 400


def test_layout_validates_rods(structure_payload):
    structure_payload["rods"][0]["length"] = -1.0
    response = client.post("/api/layout", json=structure_payload)
    assert response.status_code == 422


def test_step_table(result_payload):
    response = client.post("/api/step-table", json={"result": result_payload, "step": 0.5})

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 8
    assert rows[0] == {
        "rodId": 0, "x": 0.0, "N": 1000.0, "sigma": 100000.0, "u": 0.0, "isBoundary": True,
    }


def test_step_table_non_positive_step(result_payload):
    response = client.post("/api/step-table", json={"result": result_payload, "step": 0})
    assert response.status_code == 200
    assert response.json() == []


def test_step_table_csv(result_payload):
    response = client.post("/api/step-table/csv", json={"result": result_payload, "step": 0.5})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "step_table_0.5m.csv" in response.headers["content-disposition"]
    assert response.text.splitlines()[0] == "Rod,x,N(x),σ(x),u(x)"


def test_report(result_payload):
    response = client.post("/api/report", json={
        "result": result_payload,
        "step": 1.0,
        "queries": [{"rodId": 1, "x": 0.42}],
        "sections": {"construction": False, "epure_n": False},
    })

    assert response.status_code == 200
    html = response.text
    assert "Rod structure calculation report" in html
    assert 'id="construction"' not in html
    assert 'id="epure_sigma"' in html
    assert 'id="section_queries"' in html
    assert 'id="step_table"' in html
    print("✓ Report endpoint returns HTML with the selected sections")


def test_report_rejects_unknown_section(result_payload):
    response = client.post("/api/report", json={
        "result": result_payload, "sections": {"bending": True},
    })
    assert response.status_code == 400


def test_report_rejects_unknown_rod_query(result_payload):
    response = client.post("/api/report", json={
        "result": result_payload, "queries": [{"rodId": 9, "x": 0.0}],
    })
    assert response.status_code == 400
