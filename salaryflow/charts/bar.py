"""
Bar chart specification for mean salary by experience level.

The overview chart. Clicking a bar toggles its level in the selection;
selected bars are drawn solid, deselected bars faded.
"""

from salaryflow.charts.base import ChartSpec, format_salary, padded_max
from salaryflow.data.schemas import AggregateBucket, ExperienceLevel, Selection

SELECTED_OPACITY = 1.0
DESELECTED_OPACITY = 0.35


def bar_opacity(level: ExperienceLevel, selection: Selection) -> float:
    return SELECTED_OPACITY if level in selection.experience_levels else DESELECTED_OPACITY


def create_bar_spec(
    buckets: list[AggregateBucket],
    selection: Selection,
    *,
    chart_id: str = "overview",
    height: int = 400,
) -> ChartSpec:
    """Create a bar chart spec.

    Args:
        buckets: Mean salary per experience level (labels are level codes)
        selection: Current selection, used to mark selected bars
        chart_id: Unique identifier
        height: Chart height in pixels

    Returns:
        ChartSpec with one bar per bucket
    """
    bars = []
    for bucket in buckets:
        level = ExperienceLevel(bucket.label)
        bars.append({
            "level": level.value,
            "label": level.label,
            "value": bucket.mean,
            "count": bucket.count,
            "color": level.color,
            "selected": level in selection.experience_levels,
            "opacity": bar_opacity(level, selection),
            "value_label": format_salary(bucket.mean),
            "count_label": f"n = {bucket.count}",
        })

    return ChartSpec(
        chart_id=chart_id,
        chart_type="bar",
        data={"bars": bars},
        config={
            "height": height,
            "xLabel": "Experience Level (Click to Select/Deselect)",
            "yLabel": "Average Salary (USD)",
            "yMax": padded_max([bucket.mean for bucket in buckets]),
        },
    )
