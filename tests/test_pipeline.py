"""
Tests for dashboard data preparation.
"""

from pathlib import Path

import pytest

from salaryflow.config import DashboardConfig
from salaryflow.data.schemas import ExperienceLevel, SalaryRow, Selection
from salaryflow.data.synthetic_generator import write_sample_csv
from salaryflow.exceptions import DatasetLoadError
from salaryflow.pipeline import FlowGraphCache, load_dashboard_data, prepare_dashboard_data
from salaryflow.state.transitions import TransitionStage


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def rows() -> list[SalaryRow]:
    return [
        SalaryRow(work_year=2020, experience_level="EN", job_title="Engineer", salary_in_usd=40_000),
        SalaryRow(work_year=2021, experience_level="EN", job_title="Engineer", salary_in_usd=60_000),
        SalaryRow(work_year=2021, experience_level="SE", job_title="Engineer", salary_in_usd=220_000),
    ]


# =============================================================================
# PREPARATION TESTS
# =============================================================================


class TestPrepareDashboardData:
    """Tests for prepare_dashboard_data."""

    def test_static_aggregates(self, rows: list[SalaryRow]) -> None:
        data = prepare_dashboard_data(rows, DashboardConfig())

        assert [b.label for b in data.by_experience] == ["EN", "MI", "SE", "EX"]
        assert data.by_experience[0].mean == pytest.approx(50_000)
        assert len(data.trend_points) == 3

    def test_bar_average_ignores_selection(self, rows: list[SalaryRow]) -> None:
        """The overview bars always show the whole dataset."""
        data = prepare_dashboard_data(rows, DashboardConfig())
        selection = Selection(experience_levels=frozenset({ExperienceLevel.EN}), year_range=(2020, 2020))

        bars = data.bar_spec(selection).data["bars"]

        assert bars[0]["value"] == pytest.approx(50_000)
        assert bars[2]["value"] == pytest.approx(220_000)
        assert bars[2]["selected"] is False

    def test_sankey_spec_for_selection(self, rows: list[SalaryRow]) -> None:
        data = prepare_dashboard_data(rows, DashboardConfig(sankey_height=500))
        selection = Selection(experience_levels=frozenset({ExperienceLevel.EN}), year_range=(2020, 2021))

        spec = data.sankey_spec(selection, TransitionStage.NODES)

        assert spec.config["height"] == 500
        assert spec.config["layers"]["nodes"] is True
        assert spec.config["layers"]["links"] is False
        assert spec.data["row_count"] == 2

    def test_line_spec_uses_config_years(self, rows: list[SalaryRow]) -> None:
        data = prepare_dashboard_data(rows, DashboardConfig(year_bounds=(2020, 2022)))
        assert data.line_spec().config["years"] == [2020, 2021, 2022]

    def test_fade_out_shows_previous_selection(self, rows: list[SalaryRow]) -> None:
        data = prepare_dashboard_data(rows, DashboardConfig())
        previous = Selection()
        selection = Selection(experience_levels=frozenset({ExperienceLevel.SE}))

        fading = data.sankey_spec(selection, TransitionStage.FADE_OUT, previous=previous)
        building = data.sankey_spec(selection, TransitionStage.NODES, previous=previous)

        assert fading.config["dimmed"] is True
        assert fading.data["row_count"] == 3
        assert building.data["row_count"] == 1

    def test_fade_out_without_previous_is_empty(self, rows: list[SalaryRow]) -> None:
        data = prepare_dashboard_data(rows, DashboardConfig())
        spec = data.sankey_spec(Selection(), TransitionStage.FADE_OUT)
        assert spec.config["empty"] is True


class TestFlowGraphCache:
    """Tests for FlowGraphCache."""

    def test_equal_snapshots_hit_cache(self, rows: list[SalaryRow]) -> None:
        cache = FlowGraphCache(rows)

        first = cache.get(Selection(year_range=(2020, 2021)))
        second = cache.get(Selection(year_range=(2020, 2021)))

        assert first is second
        assert cache.cache_info().hits == 1

    def test_top_n_passed_through(self, rows: list[SalaryRow]) -> None:
        rows = rows + [
            SalaryRow(work_year=2022, experience_level="MI", job_title="Analyst", salary_in_usd=80_000)
        ]
        graph = FlowGraphCache(rows, top_n=1).get(Selection())
        assert [n.key for n in graph.nodes if n.kind.value == "job_title"] == ["Engineer"]


# =============================================================================
# LOADING TESTS
# =============================================================================


class TestLoadDashboardData:
    """Tests for load_dashboard_data."""

    def test_loads_csv(self, tmp_path: Path) -> None:
        path = write_sample_csv(tmp_path / "ds.csv", 150, seed=1)
        data = load_dashboard_data(DashboardConfig(data_path=path))
        assert len(data.rows) == 150

    def test_synthetic(self) -> None:
        data = load_dashboard_data(DashboardConfig(), synthetic=True, synthetic_rows=80)
        assert len(data.rows) == 80

    def test_synthetic_respects_year_bounds(self) -> None:
        config = DashboardConfig(year_bounds=(2021, 2022))
        data = load_dashboard_data(config, synthetic=True, synthetic_rows=200)
        assert {row.work_year for row in data.rows} <= {2021, 2022}

    def test_missing_csv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetLoadError):
            load_dashboard_data(DashboardConfig(data_path=tmp_path / "none.csv"))
