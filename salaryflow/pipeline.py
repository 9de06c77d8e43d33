"""
Module: pipeline

Purpose: Prepare everything the dashboard draws from a loaded dataset.

Key Functions:
- prepare_dashboard_data: Aggregate rows for the bar and line charts
- DashboardData: Rows plus the static aggregates
- FlowGraphCache: Memoised flow-graph builds keyed by selection snapshot

Architecture Notes:
- The bar and line aggregates are computed once; only the flow graph
  depends on the selection
- Selections are frozen and hashable, so a snapshot can key the cache
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from salaryflow.charts.bar import create_bar_spec
from salaryflow.charts.base import ChartSpec
from salaryflow.charts.line import create_line_spec
from salaryflow.charts.sankey import create_sankey_spec
from salaryflow.config import DashboardConfig
from salaryflow.data.loader import load_salary_data
from salaryflow.data.schemas import AggregateBucket, FlowGraph, SalaryRow, Selection, TrendPoint
from salaryflow.data.synthetic_generator import generate_sample_dataset
from salaryflow.features.aggregators import average_salary_by_experience, average_salary_by_year
from salaryflow.flow.builder import build_flow_graph
from salaryflow.state.transitions import TransitionStage

logger = logging.getLogger(__name__)


class FlowGraphCache:
    """Builds flow graphs for a fixed row set, memoised per selection."""

    def __init__(self, rows: list[SalaryRow], *, top_n: int = 10, maxsize: int = 64) -> None:
        self._rows = tuple(rows)
        self.top_n = top_n
        self._build = lru_cache(maxsize=maxsize)(self._build_uncached)

    def _build_uncached(self, selection: Selection) -> FlowGraph:
        return build_flow_graph(self._rows, selection, top_n=self.top_n)

    def get(self, selection: Selection) -> FlowGraph:
        return self._build(selection)

    def cache_info(self):
        return self._build.cache_info()


@dataclass
class DashboardData:
    """Rows plus the aggregates behind the static charts."""

    rows: list[SalaryRow]
    config: DashboardConfig
    by_experience: list[AggregateBucket] = field(default_factory=list)
    trend_points: list[TrendPoint] = field(default_factory=list)
    flow_graphs: FlowGraphCache | None = None

    def flow_graph(self, selection: Selection) -> FlowGraph:
        if self.flow_graphs is None:
            self.flow_graphs = FlowGraphCache(self.rows, top_n=self.config.top_n_titles)
        return self.flow_graphs.get(selection)

    def bar_spec(self, selection: Selection) -> ChartSpec:
        return create_bar_spec(self.by_experience, selection, height=self.config.chart_height)

    def line_spec(self) -> ChartSpec:
        return create_line_spec(self.trend_points, self.config.years, height=self.config.chart_height)

    def sankey_spec(
        self,
        selection: Selection,
        stage: TransitionStage = TransitionStage.IDLE,
        *,
        previous: Selection | None = None,
    ) -> ChartSpec:
        # Fading out dims the diagram that was on screen before the change
        if stage == TransitionStage.FADE_OUT:
            graph = self.flow_graph(previous) if previous is not None else FlowGraph()
        else:
            graph = self.flow_graph(selection)
        return create_sankey_spec(
            graph,
            stage=stage,
            height=self.config.sankey_height,
        )


def prepare_dashboard_data(rows: list[SalaryRow], config: DashboardConfig) -> DashboardData:
    """Aggregate rows for the bar and line charts."""
    data = DashboardData(
        rows=list(rows),
        config=config,
        by_experience=average_salary_by_experience(rows),
        trend_points=average_salary_by_year(rows, config.years),
        flow_graphs=FlowGraphCache(list(rows), top_n=config.top_n_titles),
    )
    logger.info(
        f"Prepared dashboard data: {len(data.rows):,} rows, "
        f"{len(data.trend_points)} trend points"
    )
    return data


def load_dashboard_data(
    config: DashboardConfig,
    *,
    synthetic: bool = False,
    synthetic_rows: int = 3000,
    seed: int = 42,
) -> DashboardData:
    """Load rows (from CSV, or generated) and prepare them.

    Raises:
        DatasetLoadError: If the CSV cannot be loaded
    """
    if synthetic:
        logger.info(f"Generating {synthetic_rows:,} synthetic salary records (seed={seed})")
        rows = generate_sample_dataset(synthetic_rows, seed=seed, year_bounds=config.year_bounds)
    else:
        rows = load_salary_data(Path(config.data_path)).rows
    return prepare_dashboard_data(rows, config)
