"""
Module: schemas

Purpose: Pydantic models for all data structures in the salary dashboard.

All models use Pydantic v2. Loaded rows and selection snapshots are frozen:
changing a selection produces a new snapshot instead of editing in place.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_YEAR_BOUNDS: tuple[int, int] = (2020, 2023)


# =============================================================================
# ENUMS
# =============================================================================


class ExperienceLevel(str, Enum):
    """Seniority tag used throughout the dataset."""

    EN = "EN"
    MI = "MI"
    SE = "SE"
    EX = "EX"

    @property
    def label(self) -> str:
        """Human-readable name."""
        return EXPERIENCE_LABELS[self]

    @property
    def color(self) -> str:
        """Color shared by every chart that shows this level."""
        return EXPERIENCE_COLORS[self]

    @classmethod
    def ordered(cls) -> tuple["ExperienceLevel", ...]:
        """Levels in canonical junior-to-senior order."""
        return (cls.EN, cls.MI, cls.SE, cls.EX)


EXPERIENCE_LABELS: dict[ExperienceLevel, str] = {
    ExperienceLevel.EN: "Entry Level",
    ExperienceLevel.MI: "Mid Level",
    ExperienceLevel.SE: "Senior",
    ExperienceLevel.EX: "Executive",
}

EXPERIENCE_COLORS: dict[ExperienceLevel, str] = {
    ExperienceLevel.EN: "#4e79a7",
    ExperienceLevel.MI: "#f28e2c",
    ExperienceLevel.SE: "#59a14f",
    ExperienceLevel.EX: "#e15759",
}


class NodeKind(str, Enum):
    """Column a flow-graph node belongs to."""

    EXPERIENCE_LEVEL = "experience_level"
    JOB_TITLE = "job_title"
    SALARY_BUCKET = "salary_bucket"


# =============================================================================
# BASE MODELS
# =============================================================================


class BaseSchema(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


# =============================================================================
# DATASET ROWS
# =============================================================================


class SalaryRow(BaseSchema):
    """One record of the salary dataset."""

    work_year: int
    experience_level: ExperienceLevel
    job_title: str = Field(min_length=1)
    salary_in_usd: float
    remote_ratio: float = 0.0

    # Carried from the source file, not used by the charts
    salary: float | None = None
    salary_currency: str | None = None
    employment_type: str | None = None
    employee_residence: str | None = None
    company_location: str | None = None
    company_size: str | None = None

    @field_validator("salary_in_usd")
    @classmethod
    def salary_must_be_finite(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("salary_in_usd must be a finite number")
        return v

    def __repr__(self) -> str:
        return (
            f"SalaryRow(year={self.work_year}, level={self.experience_level.value!r}, "
            f"title={self.job_title!r}, salary_in_usd={self.salary_in_usd})"
        )


# =============================================================================
# SELECTION
# =============================================================================


class Selection(BaseSchema):
    """Snapshot of the cross-chart filter: chosen levels and an inclusive year range."""

    experience_levels: frozenset[ExperienceLevel] = Field(
        default_factory=lambda: frozenset(ExperienceLevel)
    )
    year_range: tuple[int, int] = DEFAULT_YEAR_BOUNDS

    @model_validator(mode="after")
    def check_year_range(self) -> "Selection":
        if self.year_range[0] > self.year_range[1]:
            raise ValueError(f"year_range is reversed: {self.year_range}")
        return self

    @property
    def ordered_levels(self) -> list[ExperienceLevel]:
        """Selected levels in canonical order."""
        return [level for level in ExperienceLevel.ordered() if level in self.experience_levels]

    def includes(self, row: SalaryRow) -> bool:
        """Check whether a row passes this selection."""
        return (
            row.experience_level in self.experience_levels
            and self.year_range[0] <= row.work_year <= self.year_range[1]
        )

    def to_store(self) -> dict[str, Any]:
        """JSON-safe form with levels in canonical order."""
        return {
            "experience_levels": [level.value for level in self.ordered_levels],
            "year_range": [self.year_range[0], self.year_range[1]],
        }

    @classmethod
    def from_store(cls, data: dict[str, Any] | None) -> "Selection":
        """Rebuild a snapshot from `to_store` output; None yields the default."""
        if not data:
            return cls()
        return cls.model_validate({
            "experience_levels": data.get("experience_levels", []),
            "year_range": tuple(data.get("year_range", DEFAULT_YEAR_BOUNDS)),
        })


# =============================================================================
# AGGREGATES
# =============================================================================


class AggregateBucket(BaseSchema):
    """Mean and sample count for one group. mean is None for an empty group."""

    label: str
    mean: float | None = None
    count: int = Field(ge=0, default=0)

    @property
    def is_empty(self) -> bool:
        return self.count == 0


class TrendPoint(BaseSchema):
    """Mean salary for one (year, experience level) pair with at least one row."""

    year: int
    experience_level: ExperienceLevel
    mean: float
    count: int = Field(ge=1)


# =============================================================================
# FLOW GRAPH
# =============================================================================


class FlowNode(BaseSchema):
    """A node of the salary flow graph, identified by kind and key."""

    kind: NodeKind
    key: str
    label: str

    @property
    def node_id(self) -> str:
        return f"{self.kind.value}:{self.key}"


class FlowEdge(BaseSchema):
    """Weighted edge between two node ids."""

    source: str
    target: str
    weight: int = Field(ge=1)


class FlowGraph(BaseSchema):
    """Experience level -> job title -> salary bucket flow.

    Edges reference nodes by stable node id. Positional indices are derived on
    demand for layout and must not be kept across rebuilds.
    """

    nodes: tuple[FlowNode, ...] = ()
    edges: tuple[FlowEdge, ...] = ()
    row_count: int = Field(ge=0, default=0)

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    def node_index(self) -> dict[str, int]:
        """Map node id to its position in `nodes`."""
        return {node.node_id: i for i, node in enumerate(self.nodes)}

    def indexed_edges(self) -> list[tuple[int, int, int]]:
        """Edges as (source index, target index, weight) for layout engines."""
        index = self.node_index()
        return [(index[e.source], index[e.target], e.weight) for e in self.edges]

    def nodes_of_kind(self, kind: NodeKind) -> list[FlowNode]:
        return [node for node in self.nodes if node.kind == kind]

    def outgoing_weight(self, node_id: str) -> int:
        return sum(e.weight for e in self.edges if e.source == node_id)

    def incoming_weight(self, node_id: str) -> int:
        return sum(e.weight for e in self.edges if e.target == node_id)

    def edge_weight(self, source: str, target: str) -> int:
        """Weight of the edge source -> target, 0 when absent."""
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge.weight
        return 0
