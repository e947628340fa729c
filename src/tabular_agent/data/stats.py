"""Per-column statistics: null/empty counts, inferred type and cardinality."""

from __future__ import annotations

from typing import Any

from ..types import CellKind, Dataset
from .coercion import classify, hashable_cell


def column_stats(rows: list[dict[str, Any]], column: str) -> dict[str, Any]:
    """Summarize one column in a single pass over ``rows``.

    ``inferredType`` is the single kind observed among non-missing cells, or
    ``"mixed"`` when several were seen. A column with no non-missing cells is
    ``"empty"`` if it holds blank strings and ``"null"`` otherwise.
    ``uniqueCount`` counts distinct raw values over all rows, missing values
    included.
    """
    nulls = 0
    empty = 0
    kinds: list[CellKind] = []
    distinct: set[Any] = set()

    for row in rows:
        value = row.get(column)
        distinct.add(hashable_cell(value))
        kind = classify(value)
        if kind is CellKind.NULL:
            nulls += 1
        elif kind is CellKind.EMPTY:
            empty += 1
        elif kind not in kinds:
            kinds.append(kind)

    if len(kinds) == 1:
        inferred = kinds[0].value
    elif kinds:
        inferred = "mixed"
    elif empty:
        inferred = CellKind.EMPTY.value
    else:
        inferred = CellKind.NULL.value

    return {
        "nulls": nulls,
        "empty": empty,
        "inferredType": inferred,
        "uniqueCount": len(distinct),
    }


def compute_stats(dataset: Dataset) -> dict[str, Any]:
    """Column statistics for every column of ``dataset``.

    This is an exact scan over all rows and columns; datasets are small
    enough that no sampling is done.
    """
    return {
        "dataset": dataset.id,
        "rowCount": dataset.row_count,
        "columns": {col: column_stats(dataset.rows, col) for col in dataset.columns},
    }
