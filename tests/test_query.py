"""Tests for the query engine."""

from tabular_agent.data.query import compare_cells, query_rows, sort_rows
from tabular_agent.types import Dataset


class TestSorting:
    """Tests for sort/compare."""

    def test_numeric_strings_sort_numerically(self, sales):
        rows = query_rows(sales, sort_by="amt", order="desc")
        assert [r["amt"] for r in rows] == ["20", "10", "5"]

    def test_ascending(self, sales):
        rows = query_rows(sales, sort_by="amt", order="asc")
        assert [r["amt"] for r in rows] == ["5", "10", "20"]

    def test_stable_for_equal_keys(self):
        rows = [{"k": 1, "i": 0}, {"k": 2, "i": 1}, {"k": 1, "i": 2}, {"k": 2, "i": 3}]
        assert [r["i"] for r in sort_rows(rows, "k", "desc")] == [1, 3, 0, 2]
        assert [r["i"] for r in sort_rows(rows, "k", "asc")] == [0, 2, 1, 3]

    def test_sorting_is_idempotent(self, sales):
        once = query_rows(sales, sort_by="amt", order="asc", limit=100)
        twice = sort_rows(once, "amt", "asc")
        assert twice == once

    def test_unknown_sort_column_keeps_order(self, sales):
        rows = query_rows(sales, sort_by="nope")
        assert [r["amt"] for r in rows] == ["10", "20", "5"]

    def test_none_compares_equal(self):
        assert compare_cells(None, "5") == 0
        assert compare_cells("5", None) == 0

    def test_compare_text_and_numbers(self):
        assert compare_cells("10", "9") == 1
        assert compare_cells("a", "b") == -1
        assert compare_cells(3, "3.0") == 0


class TestQueryRows:
    """Tests for limit and projection."""

    def test_limit(self, sales):
        assert len(query_rows(sales, limit=2)) == 2
        assert query_rows(sales, limit=0) == []

    def test_default_limit_is_ten(self):
        ds = Dataset.from_rows("t", [{"i": i} for i in range(15)])
        assert len(query_rows(ds)) == 10

    def test_projection_fills_missing_keys(self, sales):
        rows = query_rows(sales, columns=["city", "price"])
        assert rows[0] == {"city": "X", "price": None}

    def test_omitted_columns_means_all(self, sales):
        rows = query_rows(sales)
        assert list(rows[0]) == ["city", "amt"]

    def test_empty_columns_project_nothing(self, sales):
        assert query_rows(sales, columns=[]) == [{}, {}, {}]

    def test_does_not_mutate_dataset(self, sales):
        before = [dict(r) for r in sales.rows]
        rows = query_rows(sales, columns=["city"], sort_by="amt")
        rows[0]["city"] = "changed"
        assert sales.rows == before
