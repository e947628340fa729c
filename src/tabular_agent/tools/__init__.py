"""Tool implementations for the tabular agent.

All tools inherit from BaseTool and implement the execute method.
"""

from ..catalog import CatalogClient
from ..config import Settings, get_settings
from ..data.registry import DatasetRegistry
from .base import BaseTool
from .catalog import (
    FetchDatasetTool,
    GetDatasetMetadataTool,
    SearchCatalogTool,
    create_catalog_client,
)
from .charts import RenderChartTool
from .datasets import (
    AnalyzeColumnTool,
    CleanDatasetTool,
    GetDatasetStatsTool,
    ListDatasetsTool,
    LoadFileTool,
    QueryDatasetTool,
    RemoveDatasetTool,
)

__all__ = [
    "BaseTool",
    "AnalyzeColumnTool",
    "CleanDatasetTool",
    "FetchDatasetTool",
    "GetDatasetMetadataTool",
    "GetDatasetStatsTool",
    "ListDatasetsTool",
    "LoadFileTool",
    "QueryDatasetTool",
    "RemoveDatasetTool",
    "RenderChartTool",
    "SearchCatalogTool",
    "create_catalog_client",
    "get_default_tools",
]


def get_default_tools(
    registry: DatasetRegistry,
    settings: Settings | None = None,
    catalog: CatalogClient | None = None,
) -> list[BaseTool]:
    """Get the default set of tools bound to ``registry``."""
    settings = settings or get_settings()
    catalog = catalog or create_catalog_client(settings)
    return [
        GetDatasetStatsTool(registry, settings),
        AnalyzeColumnTool(registry, settings),
        QueryDatasetTool(registry, settings),
        CleanDatasetTool(registry, settings),
        LoadFileTool(registry, settings),
        ListDatasetsTool(registry, settings),
        RemoveDatasetTool(registry, settings),
        RenderChartTool(registry, settings),
        SearchCatalogTool(catalog, settings),
        GetDatasetMetadataTool(catalog, settings),
        FetchDatasetTool(registry, catalog, settings),
    ]
