"""Core types for the tabular agent.

A row is a plain ``dict`` mapping column names to loosely typed scalars
(str, int, float, bool or None). Datasets wrap an ordered list of rows and
are treated as immutable snapshots: operations that change data build a new
``Dataset`` rather than mutating the old one.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

Row = dict[str, Any]


class CellKind(Enum):
    """Scalar kind of a single cell, as decided by ``classify``."""
    NULL = "null"
    EMPTY = "empty"
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"


class DatasetSource(Enum):
    """Where a dataset came from."""
    FILE = "file"
    CATALOG = "catalog"


class ChartType(Enum):
    """Chart kinds understood by the renderer."""
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"


class AnalysisMode(Enum):
    """Column analysis modes."""
    FREQUENCY = "frequency"
    NUMERIC_STATS = "numeric_stats"


class CleanAction(Enum):
    """Missing-value transforms supported by the cleaning engine."""
    DROP_NA = "drop_na"
    FILL_MEAN = "fill_mean"
    FILL_ZERO = "fill_zero"
    FILL_VALUE = "fill_value"


class SortOrder(Enum):
    """Sort direction for queries."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Dataset:
    """A named snapshot of tabular rows plus its derived column list.

    Attributes:
        id: Unique identifier inside a registry
        name: Human-friendly name (file name or catalog id)
        source: Where the rows came from
        rows: Ordered rows
        columns: Keys of the first row, in order (empty when there are no rows)
    """
    id: str
    name: str
    source: DatasetSource
    rows: list[Row]
    columns: list[str] = field(default_factory=list)

    @classmethod
    def from_rows(
        cls,
        id: str,
        rows: list[Row],
        name: str | None = None,
        source: DatasetSource = DatasetSource.FILE,
    ) -> "Dataset":
        """Build a dataset, deriving ``columns`` from the first row."""
        rows = list(rows)
        columns = [str(k) for k in rows[0].keys()] if rows else []
        return cls(id=id, name=name or id, source=source, rows=rows, columns=columns)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def with_rows(self, rows: list[Row]) -> "Dataset":
        """Return a new snapshot with the same identity and different rows."""
        rows = list(rows)
        columns = [str(k) for k in rows[0].keys()] if rows else []
        return replace(self, rows=rows, columns=columns)

    def summary(self) -> dict[str, Any]:
        """Describe the dataset without its rows."""
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source.value,
            "columns": list(self.columns),
            "rowCount": self.row_count,
        }


@dataclass
class ChartConfig:
    """A chart request, possibly only partially specified.

    Attributes:
        type: Chart kind
        title: Chart title
        data: Rows to plot (may be empty, the resolver fills it in)
        x_axis_key: Category/x field (may be missing or invalid)
        series_keys: Value fields (may be empty or invalid)
        description: Optional subtitle
    """
    type: ChartType
    title: str = ""
    data: list[Row] = field(default_factory=list)
    x_axis_key: str | None = None
    series_keys: list[str] = field(default_factory=list)
    description: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ChartConfig":
        """Build a config from a loosely shaped tool payload.

        ``seriesKeys`` given as a single string is wrapped in a list.
        """
        series = payload.get("seriesKeys", payload.get("series_keys"))
        if series is None:
            series = []
        elif isinstance(series, str):
            series = [series]
        return cls(
            type=ChartType(payload.get("type", "bar")),
            title=payload.get("title") or "",
            data=list(payload.get("data") or []),
            x_axis_key=payload.get("xAxisKey", payload.get("x_axis_key")) or None,
            series_keys=[str(s) for s in series],
            description=payload.get("description"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the renderer's wire format."""
        result: dict[str, Any] = {
            "type": self.type.value,
            "title": self.title,
            "data": self.data,
            "xAxisKey": self.x_axis_key,
            "seriesKeys": list(self.series_keys),
        }
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass
class ToolCall:
    """A tool call requested by the conversational layer."""
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    id: str | None = None


class ResultKind(Enum):
    """Outcome channel of a tool call."""
    OK = "ok"
    SOFT_ERROR = "soft_error"
    HARD_FAILURE = "hard_failure"


@dataclass
class ToolResult:
    """Tagged result of a single tool call.

    ``OK`` carries the tool's value, ``SOFT_ERROR`` carries the recoverable
    error message the agent can react to, and ``HARD_FAILURE`` carries the
    failure kind and message of an aborted call.
    """
    kind: ResultKind
    value: Any = None
    error: str | None = None
    failure: str | None = None

    @classmethod
    def ok(cls, value: Any) -> "ToolResult":
        return cls(kind=ResultKind.OK, value=value)

    @classmethod
    def soft_error(cls, error: str, value: Any = None) -> "ToolResult":
        return cls(kind=ResultKind.SOFT_ERROR, value=value, error=error)

    @classmethod
    def hard_failure(cls, failure: str, error: str) -> "ToolResult":
        return cls(kind=ResultKind.HARD_FAILURE, error=error, failure=failure)

    @property
    def is_ok(self) -> bool:
        return self.kind is ResultKind.OK

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {"kind": self.kind.value}
        if self.value is not None:
            result["value"] = self.value
        if self.error is not None:
            result["error"] = self.error
        if self.failure is not None:
            result["failure"] = self.failure
        return result
