"""Tests for chart data resolution."""

import copy

from tabular_agent.charts.resolver import (
    aggregate_categories,
    infer_series_keys,
    infer_x_axis_key,
    resolve_chart,
)
from tabular_agent.data.registry import DatasetRegistry
from tabular_agent.types import ChartConfig, ChartType, Dataset


def _city_rows() -> list[dict]:
    """25 rows over 4 cities: A x10, B x8, C x5, D x2."""
    cities = ["A"] * 10 + ["B"] * 8 + ["C"] * 5 + ["D"] * 2
    return [{"city": c, "amount": str(i)} for i, c in enumerate(cities)]


def _registry(rows: list[dict]) -> DatasetRegistry:
    registry = DatasetRegistry()
    registry.add(Dataset.from_rows("data", rows))
    return registry


class TestAggregation:
    """Tests for automatic categorical aggregation."""

    def test_bar_chart_is_aggregated(self):
        config = ChartConfig(type=ChartType.BAR, title="By city", data=_city_rows(), x_axis_key="city")
        chart = resolve_chart(config, DatasetRegistry())

        assert chart.x_axis_key == "city"
        assert chart.series_keys == ["count"]
        assert [r["city"] for r in chart.data] == ["A", "B", "C", "D"]
        assert [r["count"] for r in chart.data] == [10, 8, 5, 2]

    def test_requested_series_key_names_the_counts(self):
        config = ChartConfig(
            type=ChartType.PIE, data=_city_rows(), x_axis_key="city", series_keys=["total"],
        )
        chart = resolve_chart(config, DatasetRegistry())
        assert chart.series_keys == ["total"]
        assert chart.data[0] == {"city": "A", "total": 10}

    def test_high_cardinality_is_not_aggregated(self):
        rows = [{"id": f"r{i}", "v": i} for i in range(25)]
        config = ChartConfig(type=ChartType.BAR, data=rows, x_axis_key="id", series_keys=["v"])
        chart = resolve_chart(config, DatasetRegistry())
        assert len(chart.data) == 25

    def test_line_chart_is_not_aggregated(self):
        config = ChartConfig(type=ChartType.LINE, data=_city_rows(), x_axis_key="city")
        chart = resolve_chart(config, DatasetRegistry())
        assert len(chart.data) == 25

    def test_twenty_rows_are_not_aggregated(self):
        rows = _city_rows()[:20]
        config = ChartConfig(type=ChartType.BAR, data=rows, x_axis_key="city")
        chart = resolve_chart(config, DatasetRegistry())
        assert len(chart.data) == 20

    def test_aggregate_top_n(self):
        rows = [{"k": f"c{i % 30}"} for i in range(300)]
        aggregated = aggregate_categories(rows, "k", "count", top_n=20)
        assert len(aggregated) == 20

    def test_aggregate_returns_none_when_too_many_keys(self):
        rows = [{"k": i} for i in range(10)]
        assert aggregate_categories(rows, "k", "count") is None


class TestDataFallback:
    """Tests for data fallback and truncation."""

    def test_uses_latest_dataset(self):
        rows = [{"day": f"d{i}", "n": str(i)} for i in range(30)]
        registry = _registry(rows)
        chart = resolve_chart(ChartConfig(type=ChartType.LINE, title="t"), registry)

        assert len(chart.data) == 30
        assert chart.x_axis_key == "day"
        assert chart.series_keys == ["n"]
        assert chart.data[3]["n"] == 3.0

    def test_no_data_available(self):
        result = resolve_chart(ChartConfig(type=ChartType.BAR), DatasetRegistry())
        assert result == {"error": "no data available"}

    def test_safety_cap(self):
        rows = [{"x": f"p{i}", "y": i} for i in range(1500)]
        chart = resolve_chart(ChartConfig(type=ChartType.LINE, data=rows), DatasetRegistry())
        assert len(chart.data) == 1000
        assert chart.data[-1]["x"] == "p999"

    def test_configurable_cap(self):
        rows = [{"x": f"p{i}", "y": i} for i in range(50)]
        chart = resolve_chart(ChartConfig(type=ChartType.SCATTER, data=rows), DatasetRegistry(), max_rows=10)
        assert len(chart.data) == 10


class TestKeyInference:
    """Tests for x axis and series key inference."""

    def test_invalid_keys_are_inferred(self):
        rows = [{"name": "a", "v": "3", "w": 4, "flag": "x"}]
        config = ChartConfig(type=ChartType.BAR, data=rows, x_axis_key="missing", series_keys=["nope"])
        chart = resolve_chart(config, DatasetRegistry())

        assert chart.x_axis_key == "name"
        assert chart.series_keys == ["v", "w"]
        assert chart.data == [{"name": "a", "v": 3.0, "w": 4.0, "flag": "x"}]

    def test_valid_keys_are_kept(self):
        row = {"name": "a", "v": "3"}
        assert infer_x_axis_key(row, "v") == "v"
        assert infer_series_keys(row, ["v", "other"], "name") == ["v", "other"]

    def test_no_numeric_key_falls_back_to_first_other_key(self):
        row = {"name": "a", "cat": "b"}
        assert infer_series_keys(row, [], "name") == ["cat"]

    def test_single_column_row(self):
        assert infer_series_keys({"name": "a"}, [], "name") == ["name"]

    def test_x_axis_without_string_values(self):
        assert infer_x_axis_key({"a": 1, "b": 2}, None) is None

    def test_sanitization_leaves_text_cells(self):
        rows = [{"k": "a", "v": "12.5"}, {"k": "b", "v": "n/a"}]
        chart = resolve_chart(
            ChartConfig(type=ChartType.LINE, data=rows, x_axis_key="k", series_keys=["v"]),
            DatasetRegistry(),
        )
        assert [r["v"] for r in chart.data] == [12.5, "n/a"]


class TestDeterminism:
    """The same request resolves to the same chart."""

    def test_repeatable_and_non_mutating(self):
        rows = _city_rows()
        config = ChartConfig(type=ChartType.BAR, title="t", data=rows, x_axis_key="city")
        snapshot = copy.deepcopy(config)

        first = resolve_chart(config, DatasetRegistry())
        second = resolve_chart(config, DatasetRegistry())

        assert first.to_dict() == second.to_dict()
        assert config == snapshot

    def test_from_dict_wraps_single_series(self):
        config = ChartConfig.from_dict({"type": "pie", "title": "t", "seriesKeys": "v", "xAxisKey": "k"})
        assert config.series_keys == ["v"]
        assert config.x_axis_key == "k"
        assert config.type is ChartType.PIE
