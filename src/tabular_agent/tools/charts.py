from __future__ import annotations

from typing import Any

from ..charts.resolver import resolve_chart
from ..types import ChartConfig, ChartType
from .datasets import RegistryTool


class RenderChartTool(RegistryTool):
    """Resolve a chart request into data the renderer can draw."""

    @property
    def name(self) -> str:
        return "renderChart"

    @property
    def description(self) -> str:
        return (
            "Display a chart. Pass aggregated data when you have it; without data the "
            "latest dataset is used and large categorical charts are aggregated automatically."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": [t.value for t in ChartType], "description": "Chart type."},
                "title": {"type": "string", "description": "Chart title."},
                "description": {"type": "string", "description": "Short explanation of the chart."},
                "data": {"type": "array", "items": {"type": "object"}, "description": "Rows to plot."},
                "xAxisKey": {"type": "string", "description": "Field for the x axis / categories."},
                "seriesKeys": {
                    "type": ["array", "string"],
                    "items": {"type": "string"},
                    "description": "Numeric fields to plot.",
                },
            },
            "required": ["type", "title"],
        }

    def execute(self, **kwargs: Any) -> dict[str, Any]:
        config = ChartConfig.from_dict(kwargs)
        resolved = resolve_chart(config, self.registry, **self.settings.chart_options())
        if isinstance(resolved, ChartConfig):
            return resolved.to_dict()
        return resolved
