"""Open-data catalog tools."""

from __future__ import annotations

from typing import Any

from ..catalog import CatalogClient
from ..config import Settings, get_settings
from ..data.registry import DatasetRegistry
from ..exceptions import EmptyResultError
from ..types import Dataset, DatasetSource
from .base import BaseTool


def create_catalog_client(settings: Settings) -> CatalogClient:
    return CatalogClient(
        domain=settings.catalog_domain,
        app_token=settings.socrata_app_token,
        timeout=settings.catalog_timeout,
    )


class CatalogTool(BaseTool):
    def __init__(self, client: CatalogClient | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.client = client or create_catalog_client(self.settings)


class SearchCatalogTool(CatalogTool):
    @property
    def name(self) -> str:
        return "searchCatalog"

    @property
    def description(self) -> str:
        return "Search the open-data catalog for datasets matching a query."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search terms."},
                "limit": {"type": "integer", "description": "Maximum results.", "default": 10},
            },
            "required": ["query"],
        }

    def execute(self, query: str, limit: int | None = None) -> list[dict[str, Any]]:
        return self.client.search(query, limit=limit or 10)


class GetDatasetMetadataTool(CatalogTool):
    @property
    def name(self) -> str:
        return "getDatasetMetadata"

    @property
    def description(self) -> str:
        return "Get the name, description and column schema of a catalog dataset before fetching it."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {"catalog_id": {"type": "string", "description": "Catalog dataset id (e.g. abcd-1234)."}},
            "required": ["catalog_id"],
        }

    def execute(self, catalog_id: str) -> dict[str, Any]:
        return self.client.metadata(catalog_id)


class FetchDatasetTool(CatalogTool):
    """Download catalog rows and register them as a new dataset."""

    def __init__(
        self,
        registry: DatasetRegistry,
        client: CatalogClient | None = None,
        settings: Settings | None = None,
    ):
        super().__init__(client=client, settings=settings)
        self.registry = registry

    @property
    def name(self) -> str:
        return "fetchDataset"

    @property
    def description(self) -> str:
        return (
            "Download rows of a catalog dataset into memory. Use SoQL 'where', 'select' "
            "and 'order' clauses to filter on the server instead of downloading everything."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "catalog_id": {"type": "string", "description": "Catalog dataset id."},
                "where": {"type": "string", "description": "SoQL $where clause."},
                "select": {"type": "string", "description": "SoQL $select clause."},
                "order": {"type": "string", "description": "SoQL $order clause."},
                "limit": {"type": "integer", "description": "Maximum rows to download."},
            },
            "required": ["catalog_id"],
        }

    def execute(
        self,
        catalog_id: str,
        where: str | None = None,
        select: str | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        self.registry.ensure_capacity()
        rows = self.client.fetch_rows(
            catalog_id,
            limit=limit or self.settings.catalog_default_limit,
            where=where,
            select=select,
            order=order,
        )
        if not rows:
            raise EmptyResultError(catalog_id)
        dataset = Dataset.from_rows(catalog_id, rows, source=DatasetSource.CATALOG)
        return self.registry.add(dataset).summary()
