"""Renderers for chart specs: plotly figures and static HTML snapshots."""

from salaryflow.renderers.figures import bar_figure, line_figure, render_figure, sankey_figure
from salaryflow.renderers.html import render_dashboard_html, save_dashboard_html

__all__ = [
    "bar_figure",
    "line_figure",
    "render_figure",
    "sankey_figure",
    "render_dashboard_html",
    "save_dashboard_html",
]
