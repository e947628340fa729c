"""Missing-value transforms.

Cleaning never edits rows in place: every action copies the rows it keeps
and the registry receives a new Dataset snapshot under the same id.
"""

from __future__ import annotations

from typing import Any

from ..logging import get_logger
from ..types import CleanAction, Dataset, Row
from .coercion import is_missing, try_numeric
from .registry import DatasetRegistry

logger = get_logger(__name__)

DEFAULT_FILL_VALUE = "Desconocido"
DEFAULT_MEAN_DECIMALS = 2


def column_mean(rows: list[Row], column: str, decimals: int = DEFAULT_MEAN_DECIMALS) -> float:
    """Rounded mean of the numeric cells of ``column``, 0 when there are none."""
    nums = [n for n in (try_numeric(r.get(column)) for r in rows) if n is not None]
    if not nums:
        return 0
    return round(sum(nums) / len(nums), decimals)


def _fill(rows: list[Row], fills: dict[str, Any]) -> list[Row]:
    out = []
    for row in rows:
        new_row = dict(row)
        for col, value in fills.items():
            if is_missing(new_row.get(col)):
                new_row[col] = value
        out.append(new_row)
    return out


def clean_rows(
    rows: list[Row],
    action: CleanAction,
    columns: list[str],
    fill_value: Any = None,
    *,
    default_fill: str = DEFAULT_FILL_VALUE,
    mean_decimals: int = DEFAULT_MEAN_DECIMALS,
) -> list[Row]:
    """Apply one cleaning action to ``rows`` and return new rows.

    Args:
        rows: Source rows (left untouched)
        action: Transform to apply
        columns: Target columns
        fill_value: Replacement for fill_value; ``default_fill`` when it is
            None or a blank string
        default_fill: Fallback replacement for fill_value
        mean_decimals: Rounding of the fill_mean replacement
    """
    if action is CleanAction.DROP_NA:
        return [dict(r) for r in rows if not any(is_missing(r.get(c)) for c in columns)]
    if action is CleanAction.FILL_MEAN:
        return _fill(rows, {c: column_mean(rows, c, mean_decimals) for c in columns})
    if action is CleanAction.FILL_ZERO:
        return _fill(rows, {c: 0 for c in columns})
    replacement = default_fill if is_missing(fill_value) else fill_value
    return _fill(rows, {c: replacement for c in columns})


def clean_dataset(
    registry: DatasetRegistry,
    reference: str | None,
    action: str | CleanAction,
    columns: list[str] | None = None,
    fill_value: Any = None,
    *,
    default_fill: str = DEFAULT_FILL_VALUE,
    mean_decimals: int = DEFAULT_MEAN_DECIMALS,
) -> dict[str, Any]:
    """Clean a registered dataset and replace it under the same id.

    Columns default to all of the dataset's columns when omitted or empty.
    An unknown action is reported as ``{"error": ...}`` and leaves the
    registry unchanged.

    Returns:
        ``{"status", "initialRows", "finalRows", "action"}``

    Raises:
        DatasetNotFoundError: If the registry is empty.
    """
    dataset = registry.resolve(reference)
    try:
        action = CleanAction(action)
    except ValueError:
        return {"error": f"unsupported cleaning action: {action}"}

    targets = list(columns) if columns else list(dataset.columns)
    new_rows = clean_rows(
        dataset.rows,
        action,
        targets,
        fill_value,
        default_fill=default_fill,
        mean_decimals=mean_decimals,
    )
    cleaned = dataset.with_rows(new_rows)
    registry.replace(dataset.id, cleaned)
    logger.debug("Cleaned %s with %s on %s", dataset.id, action.value, targets)

    return {
        "status": "success",
        "initialRows": dataset.row_count,
        "finalRows": cleaned.row_count,
        "action": action.value,
    }
