"""Open-data catalog client (Socrata SODA API).

Search, metadata and row fetches against one Socrata domain. Row fetches
accept SoQL clauses (``$where``, ``$select``, ``$order``) and return plain
row dicts ready to become a catalog Dataset.
"""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import CatalogError
from .logging import get_logger

logger = get_logger(__name__)


class CatalogClient:
    """Thin synchronous client for a Socrata open-data portal.

    Args:
        domain: Portal host, e.g. ``www.datos.gov.co``
        app_token: Optional Socrata app token, sent as ``X-App-Token``
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass a MockTransport)
    """

    def __init__(
        self,
        domain: str = "www.datos.gov.co",
        app_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if app_token:
            headers["X-App-Token"] = app_token
        self.domain = domain
        self._client = httpx.Client(
            base_url=f"https://{domain}",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogError(f"Catalog request to {path} failed", e.response.status_code) from e
        except httpx.RequestError as e:
            raise CatalogError(f"Catalog request to {path} failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"Catalog response from {path} is not JSON") from e

    def search(self, query: str, limit: int = 10) -> list[dict[str, Any]]:
        """Full-text search of the domain's catalog."""
        payload = self._get(
            "/api/catalog/v1",
            {"domains": self.domain, "search_context": self.domain, "q": query, "limit": limit},
        )
        results = []
        for item in payload.get("results", []):
            resource = item.get("resource", {})
            results.append({
                "id": resource.get("id"),
                "name": resource.get("name"),
                "description": resource.get("description", ""),
                "updatedAt": resource.get("updatedAt"),
                "type": resource.get("type"),
            })
        return results

    def metadata(self, dataset_id: str) -> dict[str, Any]:
        """Name, description and column schema of a catalog dataset."""
        view = self._get(f"/api/views/{dataset_id}.json")
        return {
            "id": view.get("id", dataset_id),
            "name": view.get("name"),
            "description": view.get("description", ""),
            "columns": [
                {
                    "name": col.get("name"),
                    "fieldName": col.get("fieldName"),
                    "dataTypeName": col.get("dataTypeName"),
                }
                for col in view.get("columns", [])
            ],
        }

    def fetch_rows(
        self,
        dataset_id: str,
        limit: int = 10000,
        offset: int = 0,
        where: str | None = None,
        select: str | None = None,
        order: str | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch rows of a catalog dataset with optional SoQL clauses."""
        params: dict[str, Any] = {"$limit": limit, "$offset": offset}
        if where:
            params["$where"] = where
        if select:
            params["$select"] = select
        if order:
            params["$order"] = order
        logger.info("Fetching catalog dataset %s (limit=%d)", dataset_id, limit)
        rows = self._get(f"/resource/{dataset_id}.json", params)
        if not isinstance(rows, list):
            raise CatalogError(f"Unexpected payload for dataset {dataset_id}")
        return [r for r in rows if isinstance(r, dict)]
