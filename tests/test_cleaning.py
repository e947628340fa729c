"""Tests for the cleaning engine."""

import pytest

from tabular_agent.data.cleaning import clean_dataset, column_mean
from tabular_agent.data.coercion import is_missing
from tabular_agent.data.registry import DatasetRegistry
from tabular_agent.exceptions import DatasetNotFoundError
from tabular_agent.types import Dataset

ROWS = [
    {"name": "a", "score": "10"},
    {"name": None, "score": None},
    {"name": "c", "score": "20"},
    {"name": "  ", "score": "abc"},
]


@pytest.fixture
def dirty_registry():
    registry = DatasetRegistry()
    registry.add(Dataset.from_rows("dirty", [dict(r) for r in ROWS]))
    return registry


class TestDropNa:
    """Tests for drop_na."""

    def test_drops_rows_with_missing_cells(self, dirty_registry):
        result = clean_dataset(dirty_registry, "dirty", "drop_na")

        assert result == {"status": "success", "initialRows": 4, "finalRows": 2, "action": "drop_na"}
        rows = dirty_registry.get("dirty").rows
        assert [r["name"] for r in rows] == ["a", "c"]

    def test_only_target_columns(self, dirty_registry):
        result = clean_dataset(dirty_registry, "dirty", "drop_na", columns=["score"])
        assert result["finalRows"] == 3

    def test_never_increases_rows(self, dirty_registry):
        result = clean_dataset(dirty_registry, "dirty", "drop_na")
        assert result["finalRows"] <= result["initialRows"]

    def test_dropping_everything_clears_columns(self):
        registry = DatasetRegistry()
        registry.add(Dataset.from_rows("t", [{"a": None}]))
        clean_dataset(registry, "t", "drop_na")
        assert registry.get("t").row_count == 0
        assert registry.get("t").columns == []


class TestFill:
    """Tests for the fill actions."""

    def test_fill_zero_leaves_no_missing(self, dirty_registry):
        result = clean_dataset(dirty_registry, "dirty", "fill_zero", columns=["name", "score"])

        assert result["finalRows"] == result["initialRows"]
        rows = dirty_registry.get("dirty").rows
        assert not any(is_missing(r[c]) for r in rows for c in ("name", "score"))
        assert rows[1]["score"] == 0

    def test_fill_value(self, dirty_registry):
        clean_dataset(dirty_registry, "dirty", "fill_value", columns=["name"], fill_value="Unknown")
        rows = dirty_registry.get("dirty").rows
        assert [r["name"] for r in rows] == ["a", "Unknown", "c", "Unknown"]
        assert rows[1]["score"] is None

    def test_fill_value_default(self, dirty_registry):
        clean_dataset(dirty_registry, "dirty", "fill_value", columns=["name"])
        assert dirty_registry.get("dirty").rows[1]["name"] == "Desconocido"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_fill_value_uses_default(self, dirty_registry, blank):
        clean_dataset(dirty_registry, "dirty", "fill_value", columns=["name"], fill_value=blank)
        rows = dirty_registry.get("dirty").rows
        assert [r["name"] for r in rows] == ["a", "Desconocido", "c", "Desconocido"]

    def test_zero_fill_value_is_kept(self, dirty_registry):
        clean_dataset(dirty_registry, "dirty", "fill_value", columns=["score"], fill_value=0)
        assert dirty_registry.get("dirty").rows[1]["score"] == 0

    def test_fill_mean(self, dirty_registry):
        clean_dataset(dirty_registry, "dirty", "fill_mean", columns=["score"])
        rows = dirty_registry.get("dirty").rows
        assert rows[1]["score"] == 15.0
        assert rows[3]["score"] == "abc"

    def test_column_mean_rounding(self):
        rows = [{"v": 1}, {"v": 2}, {"v": 2}]
        assert column_mean(rows, "v") == 1.67

    def test_column_mean_without_numbers(self):
        assert column_mean([{"v": "x"}, {"v": None}], "v") == 0

    def test_columns_default_to_all(self, dirty_registry):
        clean_dataset(dirty_registry, "dirty", "fill_zero")
        rows = dirty_registry.get("dirty").rows
        assert rows[1] == {"name": 0, "score": 0}


class TestCleanDataset:
    """Tests for registry interaction."""

    def test_replaces_under_same_id(self, dirty_registry):
        original = dirty_registry.get("dirty")
        clean_dataset(dirty_registry, "dirty", "fill_zero")

        assert dirty_registry.ids() == ["dirty"]
        assert dirty_registry.get("dirty") is not original
        assert original.rows[1]["score"] is None

    def test_unknown_action(self, dirty_registry):
        original = dirty_registry.get("dirty")
        result = clean_dataset(dirty_registry, "dirty", "interpolate")

        assert result == {"error": "unsupported cleaning action: interpolate"}
        assert dirty_registry.get("dirty") is original

    def test_falls_back_to_latest(self, dirty_registry):
        result = clean_dataset(dirty_registry, "missing-id", "drop_na")
        assert result["status"] == "success"

    def test_empty_registry(self):
        with pytest.raises(DatasetNotFoundError):
            clean_dataset(DatasetRegistry(), "x", "drop_na")


def test_sales_fill_value_scenario() -> None:
    registry = DatasetRegistry()
    registry.add(Dataset.from_rows("sales", [
        {"city": "X", "amt": "10"},
        {"city": None, "amt": "20"},
        {"city": "X", "amt": "5"},
    ]))

    result = clean_dataset(registry, "sales", "fill_value", columns=["city"], fill_value="Unknown")

    assert result["finalRows"] == 3
    assert registry.get("sales").rows[1]["city"] == "Unknown"
