"""Tabular Agent - in-memory tabular analysis for conversational agents.

This package provides the dataset registry and the fixed set of data
operations (statistics, column analysis, querying, cleaning and chart data
resolution) that an LLM agent invokes through tool calls.
"""

from .charts import resolve_chart
from .data import (
    DatasetRegistry,
    analyze_column,
    clean_dataset,
    compute_stats,
    query_rows,
)
from .exceptions import (
    AgentError,
    ColumnNotFoundError,
    DatasetNotFoundError,
    EmptyResultError,
    RegistryCapacityError,
    ToolError,
)
from .session import AnalysisSession, SessionManager
from .types import (
    ChartConfig,
    ChartType,
    Dataset,
    DatasetSource,
    ResultKind,
    ToolCall,
    ToolResult,
)

__all__ = [
    # sessions
    "AnalysisSession",
    "SessionManager",
    # engine
    "DatasetRegistry",
    "analyze_column",
    "clean_dataset",
    "compute_stats",
    "query_rows",
    "resolve_chart",
    # types
    "ChartConfig",
    "ChartType",
    "Dataset",
    "DatasetSource",
    "ResultKind",
    "ToolCall",
    "ToolResult",
    # exceptions
    "AgentError",
    "ColumnNotFoundError",
    "DatasetNotFoundError",
    "EmptyResultError",
    "RegistryCapacityError",
    "ToolError",
]
