"""Turn a partially specified chart request into renderable chart data.

The conversational layer often sends charts with no data, raw rows instead
of aggregates, or axis keys that do not exist. ``resolve_chart`` fills those
gaps with a fixed sequence of fallbacks:

1. missing data -> every row of the most recently added dataset
2. bar/pie over many rows with few distinct categories -> frequency table
3. more than ``max_rows`` rows -> head truncation
4. missing/invalid keys -> inferred from the first row
5. numeric-looking series cells -> floats

The same request and registry state always produce the same result.
"""

from __future__ import annotations

from typing import Any

from ..logging import get_logger
from ..types import ChartConfig, ChartType, Row
from ..data.coercion import display_string, try_numeric
from ..data.registry import DatasetRegistry

logger = get_logger(__name__)

AGGREGATION_MIN_ROWS = 20
AGGREGATION_RATIO = 0.8
AGGREGATION_TOP_N = 20
MAX_CHART_ROWS = 1000

_CATEGORICAL = {ChartType.BAR, ChartType.PIE}


def aggregate_categories(
    rows: list[Row],
    x_axis_key: str,
    value_key: str,
    *,
    ratio: float = AGGREGATION_RATIO,
    top_n: int = AGGREGATION_TOP_N,
) -> list[Row] | None:
    """Count rows per ``x_axis_key`` value.

    Returns None when the field has too many distinct values to be a useful
    category axis (distinct keys >= ``len(rows) * ratio``).
    """
    counts: dict[str, int] = {}
    for row in rows:
        key = display_string(row.get(x_axis_key))
        counts[key] = counts.get(key, 0) + 1

    if len(counts) >= len(rows) * ratio:
        return None

    items = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [{x_axis_key: key, value_key: count} for key, count in items[:top_n]]


def infer_x_axis_key(first_row: Row, x_axis_key: str | None) -> str | None:
    """Keep a valid key, else the first key holding a string value."""
    if x_axis_key and x_axis_key in first_row:
        return x_axis_key
    for key, value in first_row.items():
        if isinstance(value, str):
            logger.debug("Inferred x axis key %r", key)
            return key
    return x_axis_key


def infer_series_keys(first_row: Row, series_keys: list[str], x_axis_key: str | None) -> list[str]:
    """Keep the requested keys if any exists, else every numeric key.

    Falls back to the first key other than the x axis when nothing in the
    row looks numeric.
    """
    if series_keys and any(k in first_row for k in series_keys):
        return list(series_keys)

    numeric = [
        k for k, v in first_row.items()
        if k != x_axis_key and try_numeric(v) is not None
    ]
    if numeric:
        logger.debug("Inferred series keys %s", numeric)
        return numeric

    others = [k for k in first_row if k != x_axis_key]
    if others:
        return [others[0]]
    # single-column rows: plot the only column against itself
    return list(first_row)[:1]


def sanitize_series(rows: list[Row], series_keys: list[str]) -> list[Row]:
    """Copy rows, replacing numeric-coercible series cells by floats."""
    out = []
    for row in rows:
        new_row = dict(row)
        for key in series_keys:
            num = try_numeric(row.get(key))
            if num is not None:
                new_row[key] = num
        out.append(new_row)
    return out


def resolve_chart(
    config: ChartConfig,
    registry: DatasetRegistry,
    *,
    aggregation_min_rows: int = AGGREGATION_MIN_ROWS,
    aggregation_ratio: float = AGGREGATION_RATIO,
    aggregation_top_n: int = AGGREGATION_TOP_N,
    max_rows: int = MAX_CHART_ROWS,
) -> ChartConfig | dict[str, Any]:
    """Resolve a chart request against the registry.

    Args:
        config: The (possibly partial) chart request; not modified
        registry: Source of fallback data
        aggregation_min_rows: Aggregation needs strictly more rows than this
        aggregation_ratio: Aggregate only when distinct keys < rows * ratio
        aggregation_top_n: Categories kept after aggregation
        max_rows: Safety cap on the rows handed to the renderer

    Returns:
        A fully resolved ChartConfig, or ``{"error": "no data available"}``.
    """
    data = list(config.data)
    if not data:
        latest = registry.latest()
        if latest is not None:
            logger.debug("Chart has no data, using all rows of %s", latest.id)
            data = list(latest.rows)
    if not data:
        return {"error": "no data available"}

    x_axis_key = config.x_axis_key
    series_keys = list(config.series_keys)

    if config.type in _CATEGORICAL and x_axis_key and len(data) > aggregation_min_rows:
        value_key = series_keys[0] if series_keys else "count"
        aggregated = aggregate_categories(
            data, x_axis_key, value_key, ratio=aggregation_ratio, top_n=aggregation_top_n,
        )
        if aggregated is None:
            logger.debug("Skipping aggregation on high-cardinality field %r", x_axis_key)
        else:
            data = aggregated

    if len(data) > max_rows:
        logger.debug("Truncating chart data from %d to %d rows", len(data), max_rows)
        data = data[:max_rows]

    first_row = data[0]
    x_axis_key = infer_x_axis_key(first_row, x_axis_key)
    series_keys = infer_series_keys(first_row, series_keys, x_axis_key)

    return ChartConfig(
        type=config.type,
        title=config.title,
        data=sanitize_series(data, series_keys),
        x_axis_key=x_axis_key,
        series_keys=series_keys,
        description=config.description,
    )
