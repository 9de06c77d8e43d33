"""
Tests for dashboard configuration loading.
"""

from pathlib import Path

import pytest

from salaryflow.config import AnimationTimings, DashboardConfig, load_config
from salaryflow.exceptions import ConfigurationError
from salaryflow.state.transitions import TransitionStage


class TestDashboardConfig:
    """Tests for DashboardConfig validation."""

    def test_defaults(self) -> None:
        config = DashboardConfig()
        assert config.year_bounds == (2020, 2023)
        assert config.years == [2020, 2021, 2022, 2023]
        assert config.top_n_titles == 10
        assert config.port == 8050

    def test_reversed_bounds_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            DashboardConfig(year_bounds=(2023, 2020))
        assert exc_info.value.key == "year_bounds"

    def test_bad_port_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            DashboardConfig(port=70_000)

    def test_negative_timing_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            DashboardConfig(timings=AnimationTimings(links_ms=-1))


class TestAnimationTimings:
    """Tests for AnimationTimings."""

    def test_duration_per_stage(self) -> None:
        timings = AnimationTimings()
        assert timings.duration_for(TransitionStage.FADE_OUT) == 400
        assert timings.duration_for(TransitionStage.LINKS) == 800
        assert timings.duration_for(TransitionStage.IDLE) == 0

    def test_total(self) -> None:
        assert AnimationTimings().total_ms == 2600

    def test_entrance_is_not_a_sankey_stage(self) -> None:
        timings = AnimationTimings(entrance_ms=5000)
        assert timings.total_ms == 2600
        assert timings.entrance_ms not in [timings.duration_for(stage) for stage in TransitionStage]


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults_without_sources(self) -> None:
        assert load_config(env={}) == DashboardConfig()

    def test_yaml_section(self, tmp_path: Path) -> None:
        path = tmp_path / "dashboard.yaml"
        path.write_text(
            "dashboard:\n"
            "  title: Team Salaries\n"
            "  year_bounds: [2021, 2023]\n"
            "  timings:\n"
            "    links_ms: 1000\n"
            "    entrance_ms: 600\n",
            encoding="utf-8",
        )
        config = load_config(path, env={})

        assert config.title == "Team Salaries"
        assert config.year_bounds == (2021, 2023)
        assert config.timings.links_ms == 1000
        assert config.timings.nodes_ms == 600
        assert config.timings.entrance_ms == 600

    def test_flat_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "flat.yaml"
        path.write_text("port: 9000\n", encoding="utf-8")
        assert load_config(path, env={}).port == 9000

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "dashboard.yaml"
        path.write_text("port: 9000\ndebug: false\n", encoding="utf-8")

        config = load_config(path, env={"SALARYFLOW_PORT": "9100", "SALARYFLOW_DEBUG": "true"})

        assert config.port == 9100
        assert config.debug is True

    def test_explicit_overrides_win(self) -> None:
        config = load_config(env={"SALARYFLOW_PORT": "9100"}, port=9200, host=None)
        assert config.port == 9200
        assert config.host == "127.0.0.1"

    def test_data_path_becomes_path(self) -> None:
        config = load_config(env={"SALARYFLOW_DATA_PATH": "/tmp/salaries.csv"})
        assert config.data_path == Path("/tmp/salaries.csv")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml", env={})

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("colour: red\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, env={})
        assert exc_info.value.key == "colour"

    def test_invalid_value(self) -> None:
        with pytest.raises(ConfigurationError):
            load_config(env={"SALARYFLOW_PORT": "eighty"})

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("dashboard: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path, env={})

    def test_example_config_loads(self) -> None:
        path = Path(__file__).parent.parent / "config" / "dashboard.yaml"
        config = load_config(path, env={})
        assert config == DashboardConfig()
