"""Shared test fixtures and configuration."""

import httpx
import pytest

from tabular_agent.catalog import CatalogClient
from tabular_agent.config import Settings
from tabular_agent.data.registry import DatasetRegistry
from tabular_agent.session import AnalysisSession
from tabular_agent.types import Dataset, DatasetSource

SALES_ROWS = [
    {"city": "X", "amt": "10"},
    {"city": "Y", "amt": "20"},
    {"city": "X", "amt": "5"},
]


@pytest.fixture
def settings():
    """Default settings, independent of the caller's .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def sales():
    """The small sales dataset used across tests."""
    return Dataset.from_rows("sales", [dict(r) for r in SALES_ROWS])


@pytest.fixture
def registry(sales):
    """A registry holding only the sales dataset."""
    reg = DatasetRegistry(max_datasets=3)
    reg.add(sales)
    return reg


@pytest.fixture
def catalog_requests():
    """Requests received by the fake catalog."""
    return []


@pytest.fixture
def catalog(catalog_requests):
    """A catalog client backed by an in-process fake Socrata portal."""

    def handler(request: httpx.Request) -> httpx.Response:
        catalog_requests.append(request)
        path = request.url.path
        if path == "/resource/abcd-1234.json":
            return httpx.Response(200, json=[
                {"municipio": "Cali", "casos": "12"},
                {"municipio": "Bogota", "casos": "30"},
            ])
        if path == "/resource/empty-0000.json":
            return httpx.Response(200, json=[])
        if path == "/api/catalog/v1":
            return httpx.Response(200, json={"results": [
                {"resource": {
                    "id": "abcd-1234",
                    "name": "Casos por municipio",
                    "description": "Conteo de casos",
                    "updatedAt": "2024-01-01T00:00:00.000Z",
                    "type": "dataset",
                }},
            ]})
        if path == "/api/views/abcd-1234.json":
            return httpx.Response(200, json={
                "id": "abcd-1234",
                "name": "Casos por municipio",
                "description": "Conteo de casos",
                "columns": [
                    {"name": "Municipio", "fieldName": "municipio", "dataTypeName": "text"},
                    {"name": "Casos", "fieldName": "casos", "dataTypeName": "number"},
                ],
            })
        return httpx.Response(404, json={"error": "not found"})

    client = CatalogClient(domain="data.example.org", transport=httpx.MockTransport(handler))
    yield client
    client.close()


@pytest.fixture
def session(settings, catalog):
    """An empty analysis session wired to the fake catalog."""
    return AnalysisSession.create(session_id="test", settings=settings, catalog=catalog)


@pytest.fixture
def sales_session(session):
    """A session with the sales dataset loaded."""
    session.add_rows("sales", [dict(r) for r in SALES_ROWS], source=DatasetSource.FILE)
    return session
