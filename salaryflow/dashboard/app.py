"""
Module: dashboard.app

Purpose: Build the Dash application for the salary dashboard.

Key Functions:
- create_app: Load (or accept) dashboard data, lay out the page and attach
  the callbacks

Architecture Notes:
- A dataset that fails to load is reported once and the page shows an
  error panel instead of the charts
- The returned app exposes `server` for WSGI hosting
"""

import logging
from pathlib import Path

import dash

from salaryflow.config import DashboardConfig
from salaryflow.dashboard.callbacks import register_callbacks
from salaryflow.dashboard.layout import build_layout, error_layout
from salaryflow.exceptions import DatasetLoadError
from salaryflow.pipeline import DashboardData, load_dashboard_data

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets"


def create_app(
    config: DashboardConfig | None = None,
    *,
    data: DashboardData | None = None,
    synthetic: bool = False,
) -> dash.Dash:
    """Create the dashboard app.

    Args:
        config: Dashboard settings (defaults used when None)
        data: Already prepared data; loaded from config when None
        synthetic: Generate a sample dataset instead of reading the CSV

    Returns:
        Configured Dash app
    """
    config = config or (data.config if data is not None else DashboardConfig())

    app = dash.Dash(
        __name__,
        title=config.title,
        assets_folder=str(ASSETS_DIR),
    )

    if data is None:
        try:
            data = load_dashboard_data(config, synthetic=synthetic)
        except DatasetLoadError as e:
            logger.error(f"Dashboard started without data: {e.message}")
            app.layout = error_layout(config.title, e.message)
            return app

    app.layout = build_layout(data, config)
    register_callbacks(app, data)
    logger.info(f"Dashboard ready with {len(data.rows):,} records")
    return app
