"""In-memory tabular analysis engine.

- coercion: cell classification shared by every other module
- registry: the bounded dataset registry of a session
- stats, analyzer, query, cleaning: the data operations
- loaders: local file parsing into Dataset values
"""

from .analyzer import analyze_column
from .cleaning import clean_dataset, clean_rows
from .coercion import classify, display_string, is_missing, try_numeric
from .query import query_rows
from .registry import DatasetRegistry
from .stats import compute_stats

__all__ = [
    "DatasetRegistry",
    "analyze_column",
    "classify",
    "clean_dataset",
    "clean_rows",
    "compute_stats",
    "display_string",
    "is_missing",
    "query_rows",
    "try_numeric",
]
