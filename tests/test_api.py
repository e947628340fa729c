"""Tests for the HTTP API."""

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from tabular_agent.api.server import app, get_sessions
from tabular_agent.session import SessionManager


@pytest.fixture
def manager(settings):
    return SessionManager(settings=settings)


@pytest.fixture
def client(manager):
    app.dependency_overrides[get_sessions] = lambda: manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client):
    response = client.post("/api/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


def test_upload_and_query(client, session_id) -> None:
    response = client.post(
        f"/api/sessions/{session_id}/datasets",
        json={"name": "sales", "rows": [{"city": "X", "amt": "10"}, {"city": "Y", "amt": "20"}]},
    )
    assert response.status_code == 200
    assert response.json() == {
        "id": "sales", "name": "sales", "source": "file", "columns": ["city", "amt"], "rowCount": 2,
    }

    response = client.post(
        f"/api/sessions/{session_id}/tools/queryDataset",
        json={"dataset_id": "sales", "sort_by": "amt", "limit": 1},
    )
    body = response.json()
    assert body["kind"] == "ok"
    assert body["value"] == [{"city": "Y", "amt": "20"}]


def test_tool_failures_are_reported_in_body(client, session_id) -> None:
    response = client.post(
        f"/api/sessions/{session_id}/tools/analyzeColumn",
        json={"dataset_id": "x", "column_name": "a", "analysis_type": "frequency"},
    )
    assert response.status_code == 200
    assert response.json()["kind"] == "hard_failure"
    assert response.json()["failure"] == "dataset_not_found"

    response = client.post(f"/api/sessions/{session_id}/tools/getDatasetStats", json={"dataset_id": "x"})
    assert response.json()["kind"] == "soft_error"


def test_tool_without_body(client, session_id) -> None:
    response = client.post(f"/api/sessions/{session_id}/tools/listDatasets")
    assert response.json() == {"kind": "ok", "value": []}


def test_upload_over_capacity(client, session_id) -> None:
    for i in range(3):
        client.post(f"/api/sessions/{session_id}/datasets", json={"name": f"d{i}", "rows": [{"a": 1}]})

    response = client.post(f"/api/sessions/{session_id}/datasets", json={"name": "d3", "rows": [{"a": 1}]})

    assert response.status_code == 409
    assert "Maximum number of datasets" in response.json()["detail"]


def test_list_and_remove_datasets(client, session_id) -> None:
    client.post(f"/api/sessions/{session_id}/datasets", json={"name": "a", "rows": [{"x": 1}]})

    listed = client.get(f"/api/sessions/{session_id}/datasets").json()
    assert [d["id"] for d in listed] == ["a"]

    response = client.delete(f"/api/sessions/{session_id}/datasets/a")
    assert response.json() == {"removed": True}
    assert client.get(f"/api/sessions/{session_id}/datasets").json() == []


def test_unknown_session(client) -> None:
    assert client.get("/api/sessions/nope/datasets").status_code == 404
    assert client.delete("/api/sessions/nope").status_code == 404


def test_delete_session(client, session_id, manager) -> None:
    assert client.delete(f"/api/sessions/{session_id}").json() == {"status": "deleted"}
    assert manager.active_count == 0


def test_list_tools(client) -> None:
    names = {t["function"]["name"] for t in client.get("/api/tools").json()}
    assert "renderChart" in names
    assert "fetchDataset" in names
