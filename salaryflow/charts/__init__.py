"""
Chart specifications.

Each builder turns aggregates into a renderer-independent ChartSpec; the
renderers package draws them.
"""

from salaryflow.charts.bar import create_bar_spec
from salaryflow.charts.base import ChartSpec, format_salary
from salaryflow.charts.line import create_line_spec
from salaryflow.charts.sankey import create_sankey_spec

__all__ = [
    "ChartSpec",
    "create_bar_spec",
    "create_line_spec",
    "create_sankey_spec",
    "format_salary",
]
