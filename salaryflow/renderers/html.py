"""
HTML renderer for static dashboard snapshots using Jinja2 templates.

Renders the three charts for one selection into a single self-contained
page with:
- The selection and dataset summary
- Each plotly figure embedded as a div
- plotly.js loaded from a CDN
"""

import logging
from datetime import datetime
from pathlib import Path

import plotly.graph_objects as go
from jinja2 import Environment, FileSystemLoader, select_autoescape

from salaryflow.data.schemas import Selection

logger = logging.getLogger(__name__)

PLOTLY_CDN_URL = "https://cdn.plot.ly/plotly-2.35.2.min.js"


# =============================================================================
# TEMPLATE LOADING
# =============================================================================


def get_template_env(template_dir: Path | None = None) -> Environment:
    """Get Jinja2 environment with templates.

    Args:
        template_dir: Optional custom template directory

    Returns:
        Jinja2 Environment configured for snapshot templates
    """
    if template_dir and template_dir.exists():
        loader = FileSystemLoader(str(template_dir))
    else:
        loader = FileSystemLoader(
            str(Path(__file__).parent / "templates"),
            encoding="utf-8",
        )

    env = Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.filters["format_number"] = _format_number

    return env


def _format_number(value: float | int, decimals: int = 0) -> str:
    """Format number with thousand separators."""
    if isinstance(value, int) or decimals == 0:
        return f"{int(value):,}"
    return f"{value:,.{decimals}f}"


# =============================================================================
# HTML RENDERING
# =============================================================================


def render_dashboard_html(
    figures: dict[str, go.Figure],
    selection: Selection,
    *,
    title: str = "Data Science Salaries",
    row_count: int = 0,
    flow_row_count: int = 0,
    plotly_url: str = PLOTLY_CDN_URL,
    template_dir: Path | None = None,
) -> str:
    """Render a dashboard snapshot to complete HTML.

    Args:
        figures: Figures keyed by region ("overview", "trends", "sankey")
        selection: Selection the snapshot was taken with
        title: Page title
        row_count: Rows in the dataset
        flow_row_count: Rows feeding the flow diagram
        plotly_url: Where the page loads plotly.js from
        template_dir: Optional directory holding a custom dashboard.html

    Returns:
        Complete HTML document as string
    """
    charts = {
        region: fig.to_html(full_html=False, include_plotlyjs=False, div_id=f"{region}-chart")
        for region, fig in figures.items()
    }

    context = {
        "title": title,
        "charts": charts,
        "levels": [level.label for level in selection.ordered_levels],
        "year_range": selection.year_range,
        "row_count": row_count,
        "flow_row_count": flow_row_count,
        "plotly_url": plotly_url,
        "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M"),
    }

    env = get_template_env(template_dir)
    template = env.get_template("dashboard.html")
    return template.render(**context)


def save_dashboard_html(html: str, output_path: Path | str) -> None:
    """Save rendered HTML to file.

    Args:
        html: Rendered HTML string
        output_path: Path to save the HTML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html)

    logger.info(f"Snapshot saved to {output_path}")
