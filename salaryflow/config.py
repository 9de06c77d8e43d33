"""
Module: config

Purpose: Configuration for the salary dashboard.

Key Functions:
- load_config: Build a DashboardConfig from defaults, an optional YAML file
  and SALARYFLOW_* environment variables
- DashboardConfig: Dashboard settings
- AnimationTimings: Per-stage durations of the Sankey transition

Architecture Notes:
- Defaults match the public ds_salaries.csv dataset
- Precedence: defaults < YAML file < environment < explicit overrides
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from salaryflow.data.schemas import DEFAULT_YEAR_BOUNDS
from salaryflow.exceptions import ConfigurationError
from salaryflow.features.aggregators import years_in_bounds
from salaryflow.state.transitions import TransitionStage

logger = logging.getLogger(__name__)

ENV_PREFIX = "SALARYFLOW_"


@dataclass(frozen=True)
class AnimationTimings:
    """How long each Sankey transition stage stays on screen, in milliseconds."""

    fade_out_ms: int = 400
    nodes_ms: int = 600
    labels_ms: int = 400
    links_ms: int = 800
    legend_ms: int = 400
    # Bar and line charts growing in on first draw; not a Sankey stage
    entrance_ms: int = 800

    def duration_for(self, stage: TransitionStage) -> int:
        durations = {
            TransitionStage.FADE_OUT: self.fade_out_ms,
            TransitionStage.NODES: self.nodes_ms,
            TransitionStage.LABELS: self.labels_ms,
            TransitionStage.LINKS: self.links_ms,
            TransitionStage.LEGEND: self.legend_ms,
        }
        return durations.get(stage, 0)

    @property
    def total_ms(self) -> int:
        return self.fade_out_ms + self.nodes_ms + self.labels_ms + self.links_ms + self.legend_ms


@dataclass(frozen=True)
class DashboardConfig:
    """Settings for the dashboard and snapshot export."""

    data_path: Path = Path("data/ds_salaries.csv")
    title: str = "Data Science Salaries"

    # Filtering
    year_bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS
    top_n_titles: int = 10

    # Chart sizing (pixels); widths follow the container
    chart_height: int = 400
    sankey_height: int = 600

    # Serving
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False

    timings: AnimationTimings = field(default_factory=AnimationTimings)

    def __post_init__(self) -> None:
        if self.year_bounds[0] > self.year_bounds[1]:
            raise ConfigurationError(
                f"year_bounds is reversed: {self.year_bounds}", key="year_bounds"
            )
        if self.top_n_titles < 1:
            raise ConfigurationError("top_n_titles must be at least 1", key="top_n_titles")
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Invalid port: {self.port}", key="port")
        for f in fields(self.timings):
            if getattr(self.timings, f.name) < 0:
                raise ConfigurationError(f"{f.name} must not be negative", key=f"timings.{f.name}")

    @property
    def years(self) -> list[int]:
        return years_in_bounds(self.year_bounds)


# =============================================================================
# LOADING
# =============================================================================


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _normalize(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Convert raw YAML / env values to DashboardConfig field types."""
    known = {f.name for f in fields(DashboardConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            key=sorted(unknown)[0],
        )

    values: dict[str, Any] = {}
    try:
        for key, value in raw.items():
            if value is None:
                continue
            if key == "data_path":
                values[key] = Path(value)
            elif key == "year_bounds":
                low, high = value
                values[key] = (int(low), int(high))
            elif key in {"top_n_titles", "chart_height", "sankey_height", "port"}:
                values[key] = int(value)
            elif key == "debug":
                values[key] = _as_bool(value)
            elif key == "timings":
                if isinstance(value, AnimationTimings):
                    values[key] = value
                else:
                    values[key] = AnimationTimings(**{k: int(v) for k, v in dict(value).items()})
            else:
                values[key] = str(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e
    return values


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}", key="config_path")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")

    # Allow the settings to sit under a `dashboard:` section
    section = data.get("dashboard", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid 'dashboard' section in {path}, expected mapping")
    return section


def _read_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in ("data_path", "title", "host", "port", "debug", "top_n_titles"):
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in env:
            values[key] = env[env_key]
    return values


def load_config(
    path: Path | str | None = None,
    *,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> DashboardConfig:
    """Load dashboard configuration.

    Args:
        path: Optional YAML file
        env: Environment mapping (defaults to os.environ)
        **overrides: Explicit values, e.g. from command line flags. None
            values are ignored.

    Returns:
        Validated DashboardConfig

    Raises:
        ConfigurationError: If the file is missing or a value is invalid
    """
    config = DashboardConfig()

    if path is not None:
        config = replace(config, **_normalize(_read_yaml(Path(path))))
        logger.debug(f"Loaded configuration from {path}")

    env_values = _read_env(os.environ if env is None else env)
    if env_values:
        config = replace(config, **_normalize(env_values))

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        config = replace(config, **_normalize(explicit))

    return config
