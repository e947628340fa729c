"""Sort, limit and project dataset rows."""

from __future__ import annotations

import functools
from typing import Any

from ..types import Dataset, Row, SortOrder
from .coercion import try_numeric

DEFAULT_LIMIT = 10


def compare_cells(a: Any, b: Any) -> int:
    """Three-way comparison used for sorting.

    When both cells coerce to numbers they compare numerically. Otherwise
    values of the same natural ordering (two strings, two booleans) compare
    directly; anything else, including None, compares as equal so the
    stable sort leaves it where it was.
    """
    num_a = try_numeric(a)
    num_b = try_numeric(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)
    if a is None or b is None:
        return 0
    try:
        return (a > b) - (a < b)
    except TypeError:
        return 0


def sort_rows(rows: list[Row], sort_by: str, order: str | SortOrder = SortOrder.DESC) -> list[Row]:
    """Return ``rows`` stably sorted on one column.

    Sorting on a column no row has leaves the order unchanged.
    """
    descending = SortOrder(order) is SortOrder.DESC
    key = functools.cmp_to_key(lambda r1, r2: compare_cells(r1.get(sort_by), r2.get(sort_by)))
    return sorted(rows, key=key, reverse=descending)


def project(rows: list[Row], columns: list[str]) -> list[Row]:
    """Keep only ``columns``; keys a row lacks come out as None."""
    return [{col: row.get(col) for col in columns} for row in rows]


def query_rows(
    dataset: Dataset,
    columns: list[str] | None = None,
    sort_by: str | None = None,
    order: str | SortOrder = SortOrder.DESC,
    limit: int = DEFAULT_LIMIT,
) -> list[Row]:
    """Sort, truncate and project the rows of ``dataset``.

    Args:
        dataset: Dataset to read (never modified)
        columns: Columns to return; all dataset columns when None. An empty
            list projects every row to an empty dict
        sort_by: Optional column to sort on
        order: "asc" or "desc"
        limit: Maximum number of rows returned

    Returns:
        New row dicts, at most ``limit`` of them.
    """
    result = list(dataset.rows)
    if sort_by:
        result = sort_rows(result, sort_by, order)
    result = result[: max(0, int(limit))]
    return project(result, list(dataset.columns) if columns is None else list(columns))
