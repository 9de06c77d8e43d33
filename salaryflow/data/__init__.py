"""
Data layer: row schemas, CSV loading and synthetic sample data.
"""

from salaryflow.data.loader import LoadResult, SalaryDataLoader, load_salary_data
from salaryflow.data.schemas import (
    DEFAULT_YEAR_BOUNDS,
    AggregateBucket,
    ExperienceLevel,
    FlowEdge,
    FlowGraph,
    FlowNode,
    NodeKind,
    SalaryRow,
    Selection,
    TrendPoint,
)
from salaryflow.data.synthetic_generator import (
    SyntheticSalaryGenerator,
    generate_sample_dataset,
    write_sample_csv,
)

__all__ = [
    # Schemas
    "DEFAULT_YEAR_BOUNDS",
    "AggregateBucket",
    "ExperienceLevel",
    "FlowEdge",
    "FlowGraph",
    "FlowNode",
    "NodeKind",
    "SalaryRow",
    "Selection",
    "TrendPoint",
    # Loading
    "LoadResult",
    "SalaryDataLoader",
    "load_salary_data",
    # Synthetic data
    "SyntheticSalaryGenerator",
    "generate_sample_dataset",
    "write_sample_csv",
]
