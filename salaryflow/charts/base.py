"""
Base dataclass for chart specifications.

A ChartSpec holds the data and configuration for one chart, independent of
how it is drawn. The plotly renderer turns specs into figures; the HTML
renderer embeds those figures in a static page.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ChartSpec:
    """Specification for a chart.

    Contains the data and configuration needed to render a chart.
    The actual drawing is done by a renderer; this just provides the spec.
    """

    chart_id: str
    chart_type: str  # "bar", "line", "sankey"

    # Data for the chart (JSON-serializable)
    data: dict[str, Any] = field(default_factory=dict)

    # Chart configuration
    config: dict[str, Any] = field(default_factory=dict)

    # Annotations to show on the chart
    annotations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "chart_id": self.chart_id,
            "chart_type": self.chart_type,
            "data": self.data,
            "config": self.config,
            "annotations": self.annotations,
        }


def format_salary(value: float | None) -> str:
    """Format a salary as whole dollars; missing values read as n/a."""
    if value is None:
        return "n/a"
    return f"${value:,.0f}"


def padded_max(values: list[float | None], *, padding: float = 1.1) -> float:
    """Upper end of a value axis: max value plus 10% headroom."""
    present = [v for v in values if v is not None]
    if not present:
        return 1.0
    return max(present) * padding
