"""Dataset tools.

These tools expose the in-memory analysis engine to the conversational
layer. They intentionally avoid arbitrary code execution and instead expose
a fixed set of operations as explicit tools.

All tools operate on the registry they are constructed with and resolve
their ``dataset_id`` argument with the registry's forgiving lookup (id, then
name, then the most recently added dataset).
"""

from __future__ import annotations

from typing import Any

from ..config import Settings, get_settings
from ..data.analyzer import analyze_column
from ..data.cleaning import clean_dataset
from ..data.loaders import load_file
from ..data.query import query_rows
from ..data.registry import DatasetRegistry
from ..data.stats import compute_stats
from ..exceptions import DatasetNotFoundError
from ..types import CleanAction, SortOrder
from .base import BaseTool

_DATASET_ID = {"type": "string", "description": "Dataset id or name."}


class RegistryTool(BaseTool):
    """Base for tools bound to one session registry."""

    def __init__(self, registry: DatasetRegistry, settings: Settings | None = None):
        self.registry = registry
        self.settings = settings or get_settings()


class GetDatasetStatsTool(RegistryTool):
    @property
    def name(self) -> str:
        return "getDatasetStats"

    @property
    def description(self) -> str:
        return (
            "Compute per-column statistics of a dataset: null and empty counts, "
            "inferred type (text/numeric/mixed) and number of unique values."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {"dataset_id": _DATASET_ID},
            "required": ["dataset_id"],
        }

    def execute(self, dataset_id: str) -> dict[str, Any]:
        try:
            dataset = self.registry.resolve(dataset_id)
        except DatasetNotFoundError as e:
            return {"error": str(e)}
        return compute_stats(dataset)


class AnalyzeColumnTool(RegistryTool):
    @property
    def name(self) -> str:
        return "analyzeColumn"

    @property
    def description(self) -> str:
        return (
            "Analyze one column. analysis_type 'frequency' returns the top value counts, "
            "'numeric_stats' returns count, sum, mean, min and max."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "dataset_id": _DATASET_ID,
                "column_name": {"type": "string", "description": "Column to analyze."},
                "analysis_type": {
                    "type": "string",
                    "description": "Either 'frequency' or 'numeric_stats'.",
                },
            },
            "required": ["dataset_id", "column_name", "analysis_type"],
        }

    def execute(self, dataset_id: str, column_name: str, analysis_type: str) -> dict[str, Any]:
        dataset = self.registry.resolve(dataset_id)
        return analyze_column(
            dataset,
            column_name,
            analysis_type,
            top_n=self.settings.frequency_top_n,
            null_label=self.settings.null_label,
        )


class QueryDatasetTool(RegistryTool):
    @property
    def name(self) -> str:
        return "queryDataset"

    @property
    def description(self) -> str:
        return (
            "Return rows of a dataset, optionally sorted by a column, limited to the "
            "first N rows and projected to the requested columns. Use it for top/ranking questions."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "dataset_id": _DATASET_ID,
                "columns": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Columns to return (default: all).",
                },
                "sort_by": {"type": "string", "description": "Optional column to sort by."},
                "order": {
                    "type": "string",
                    "enum": [o.value for o in SortOrder],
                    "description": "Sort direction.",
                    "default": "desc",
                },
                "limit": {"type": "integer", "description": "Maximum number of rows."},
            },
            "required": ["dataset_id"],
        }

    def execute(
        self,
        dataset_id: str,
        columns: list[str] | None = None,
        sort_by: str | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        dataset = self.registry.resolve(dataset_id)
        return query_rows(
            dataset,
            columns=columns,
            sort_by=sort_by,
            order=order or SortOrder.DESC,
            limit=self.settings.query_default_limit if limit is None else limit,
        )


class CleanDatasetTool(RegistryTool):
    @property
    def name(self) -> str:
        return "cleanDataset"

    @property
    def description(self) -> str:
        return (
            "Handle missing values and replace the dataset with the cleaned version. "
            "Actions: " + ", ".join(a.value for a in CleanAction) + ". "
            "Columns default to all columns."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "dataset_id": _DATASET_ID,
                "action": {"type": "string", "description": "Cleaning action."},
                "columns": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Target columns (default: all).",
                },
                "fill_value": {
                    "type": ["string", "number"],
                    "description": "Replacement for fill_value.",
                },
            },
            "required": ["dataset_id", "action"],
        }

    def execute(
        self,
        dataset_id: str,
        action: str,
        columns: list[str] | None = None,
        fill_value: str | float | None = None,
    ) -> dict[str, Any]:
        return clean_dataset(
            self.registry,
            dataset_id,
            action,
            columns,
            fill_value,
            default_fill=self.settings.fill_default_value,
            mean_decimals=self.settings.fill_mean_decimals,
        )


class LoadFileTool(RegistryTool):
    """Load a local file into the registry."""

    @property
    def name(self) -> str:
        return "loadFile"

    @property
    def description(self) -> str:
        return "Load a local csv, json, jsonl or xlsx file as a new dataset."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Path to the file."},
                "name": {"type": "string", "description": "Optional dataset name."},
            },
            "required": ["path"],
        }

    def execute(self, path: str, name: str | None = None) -> dict[str, Any]:
        self.registry.ensure_capacity()
        dataset = load_file(path, name=name, max_file_size_mb=self.settings.max_file_size_mb)
        return self.registry.add(dataset).summary()


class ListDatasetsTool(RegistryTool):
    @property
    def name(self) -> str:
        return "listDatasets"

    @property
    def description(self) -> str:
        return "List the datasets currently loaded."

    @property
    def parameters(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def execute(self) -> list[dict[str, Any]]:
        return [ds.summary() for ds in self.registry]


class RemoveDatasetTool(RegistryTool):
    @property
    def name(self) -> str:
        return "removeDataset"

    @property
    def description(self) -> str:
        return "Remove a dataset by its exact id to free a slot."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {"dataset_id": {"type": "string", "description": "Exact dataset id."}},
            "required": ["dataset_id"],
        }

    def execute(self, dataset_id: str) -> dict[str, Any]:
        removed = self.registry.remove(dataset_id)
        return {"removed": removed, "dataset_id": dataset_id, "remaining": self.registry.ids()}
