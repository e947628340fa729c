"""Single-column analysis: frequency tables and numeric summaries.

Unsupported modes and columns without numeric values are reported as
``{"error": ...}`` payloads so the calling agent can pick another argument;
a column that does not exist raises ColumnNotFoundError.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import ColumnNotFoundError
from ..types import AnalysisMode, CellKind, Dataset
from .coercion import classify, display_string, try_numeric

DEFAULT_TOP_N = 20
DEFAULT_NULL_LABEL = "Nulo"


def frequency_table(
    values: list[Any],
    *,
    top_n: int = DEFAULT_TOP_N,
    null_label: str = DEFAULT_NULL_LABEL,
) -> dict[str, Any]:
    """Count labels, most frequent first, ties in first-seen order.

    None and NaN cells are counted under ``null_label``.
    """
    counts: dict[str, int] = {}
    for v in values:
        key = null_label if classify(v) is CellKind.NULL else display_string(v)
        counts[key] = counts.get(key, 0) + 1

    # sorted() is stable, so equal counts keep insertion order
    items = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return {
        "type": AnalysisMode.FREQUENCY.value,
        "data": [{"label": k, "value": v} for k, v in items[:top_n]],
        "total_categories": len(counts),
    }


def numeric_summary(values: list[Any]) -> dict[str, Any]:
    """count/sum/mean/min/max over the numeric-coercible values."""
    nums = [n for n in (try_numeric(v) for v in values) if n is not None]
    if not nums:
        return {"error": "no numeric values"}

    total = sum(nums)
    return {
        "type": AnalysisMode.NUMERIC_STATS.value,
        "count": len(nums),
        "sum": total,
        "mean": total / len(nums),
        "min": min(nums),
        "max": max(nums),
    }


def analyze_column(
    dataset: Dataset,
    column: str,
    mode: str | AnalysisMode,
    *,
    top_n: int = DEFAULT_TOP_N,
    null_label: str = DEFAULT_NULL_LABEL,
) -> dict[str, Any]:
    """Analyze one column of ``dataset``.

    Args:
        dataset: Dataset to read
        column: Column name, must be one of ``dataset.columns``
        mode: "frequency" or "numeric_stats"
        top_n: Rows kept in a frequency table
        null_label: Label for null cells in a frequency table

    Returns:
        The analysis result, or ``{"error": ...}`` for an unsupported mode
        or a column without numeric values.

    Raises:
        ColumnNotFoundError: If the column is not part of the dataset.
    """
    if column not in dataset.columns:
        raise ColumnNotFoundError(column, dataset.columns)

    try:
        mode = AnalysisMode(mode)
    except ValueError:
        return {"error": "unsupported analysis type"}

    values = [row.get(column) for row in dataset.rows]
    if mode is AnalysisMode.FREQUENCY:
        return frequency_table(values, top_n=top_n, null_label=null_label)
    return numeric_summary(values)
