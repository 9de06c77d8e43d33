#!/usr/bin/env python3
"""
Script: export_snapshot.py

Purpose: Render the dashboard for one selection to a static HTML page.

The snapshot shows the fully drawn state of all three charts; no
transitions are played.

Usage:
    python scripts/export_snapshot.py --output output/snapshot.html
    python scripts/export_snapshot.py --levels SE,EX --years 2021-2023
    python scripts/export_snapshot.py --synthetic --output output/sample.html
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from salaryflow.config import load_config
from salaryflow.data.schemas import ExperienceLevel, Selection
from salaryflow.exceptions import SalaryFlowError
from salaryflow.pipeline import load_dashboard_data
from salaryflow.renderers.figures import bar_figure, line_figure, sankey_figure
from salaryflow.renderers.html import render_dashboard_html, save_dashboard_html
from salaryflow.state.selection import reset_selection, set_year_range

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_levels(value: str | None) -> frozenset[ExperienceLevel] | None:
    """Parse a comma separated list of level codes, e.g. "EN,MI"."""
    if value is None:
        return None
    codes = [code.strip().upper() for code in value.split(",") if code.strip()]
    try:
        return frozenset(ExperienceLevel(code) for code in codes)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Unknown experience level in {value!r}") from e


def parse_years(value: str | None) -> tuple[int, int] | None:
    """Parse "2021-2023" or a single year."""
    if value is None:
        return None
    try:
        if "-" in value:
            start, end = value.split("-", 1)
            return int(start), int(end)
        return int(value), int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid year range: {value!r}") from e


def build_selection(levels, years, bounds: tuple[int, int]) -> Selection:
    selection = reset_selection(bounds)
    if levels is not None:
        selection = selection.model_copy(update={"experience_levels": levels})
    if years is not None:
        selection = set_year_range(selection, years[0], years[1], bounds=bounds)
    return selection


def main():
    parser = argparse.ArgumentParser(
        description="Export a static HTML snapshot of the salary dashboard"
    )
    parser.add_argument("--config", type=str, help="YAML configuration file (optional)")
    parser.add_argument("--data", type=str, help="Salary CSV to load")
    parser.add_argument(
        "--levels",
        type=str,
        help="Comma separated experience level codes (default: all)",
    )
    parser.add_argument(
        "--years",
        type=str,
        help="Year range such as 2021-2023 (default: full range)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="output/salary_snapshot.html",
        help="Output HTML file (default: output/salary_snapshot.html)",
    )
    parser.add_argument(
        "--synthetic",
        action="store_true",
        help="Use a generated sample dataset",
    )

    args = parser.parse_args()

    try:
        levels = parse_levels(args.levels)
        years = parse_years(args.years)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        config = load_config(args.config, data_path=args.data)
        data = load_dashboard_data(config, synthetic=args.synthetic)
    except SalaryFlowError as e:
        logger.error(f"Could not prepare dashboard data: {e.message}")
        sys.exit(1)

    selection = build_selection(levels, years, config.year_bounds)
    graph = data.flow_graph(selection)

    figures = {
        "overview": bar_figure(data.bar_spec(selection)),
        "trends": line_figure(data.line_spec()),
        "sankey": sankey_figure(data.sankey_spec(selection)),
    }
    html = render_dashboard_html(
        figures,
        selection,
        title=config.title,
        row_count=len(data.rows),
        flow_row_count=graph.row_count,
    )
    save_dashboard_html(html, args.output)
    print(f"Snapshot written to {args.output}")


if __name__ == "__main__":
    main()
