"""
Line chart specification for mean salary over time.

One line per experience level. The x axis carries a horizontal brush that
selects the year range for the flow diagram.
"""

from salaryflow.charts.base import ChartSpec, format_salary, padded_max
from salaryflow.data.schemas import ExperienceLevel, TrendPoint


def create_line_spec(
    points: list[TrendPoint],
    years: list[int],
    *,
    chart_id: str = "trends",
    height: int = 400,
) -> ChartSpec:
    """Create a line chart spec.

    Args:
        points: Mean salary per (year, level); empty groups already skipped
        years: Years shown on the x axis
        chart_id: Unique identifier
        height: Chart height in pixels

    Returns:
        ChartSpec with one series per level that has at least one point
    """
    series = []
    for level in ExperienceLevel.ordered():
        level_points = sorted(
            (p for p in points if p.experience_level == level),
            key=lambda p: p.year,
        )
        if not level_points:
            continue
        series.append({
            "level": level.value,
            "label": level.label,
            "color": level.color,
            "points": [
                {
                    "x": p.year,
                    "y": p.mean,
                    "count": p.count,
                    "value_label": format_salary(p.mean),
                }
                for p in level_points
            ],
        })

    return ChartSpec(
        chart_id=chart_id,
        chart_type="line",
        data={"series": series},
        config={
            "height": height,
            "years": list(years),
            "xLabel": "Year (Brush to Select Time Range)",
            "yLabel": "Average Salary (USD)",
            "yMax": padded_max([p.mean for p in points]),
            "brush": {"axis": "x", "bounds": [years[0], years[-1]] if years else []},
        },
    )
