"""
Dataset loader for the salary CSV.

Reads the data-science salaries file with pandas, coerces the numeric columns
and converts each record into a frozen SalaryRow. Records that fail schema
validation are skipped and counted rather than aborting the load.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from salaryflow.data.schemas import SalaryRow
from salaryflow.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)


# =============================================================================
# COLUMN LAYOUT
# =============================================================================

REQUIRED_COLUMNS: tuple[str, ...] = (
    "work_year",
    "experience_level",
    "job_title",
    "salary_in_usd",
    "remote_ratio",
)

OPTIONAL_COLUMNS: tuple[str, ...] = (
    "salary",
    "salary_currency",
    "employment_type",
    "employee_residence",
    "company_location",
    "company_size",
)

NUMERIC_COLUMNS: tuple[str, ...] = ("work_year", "salary", "salary_in_usd", "remote_ratio")


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class LoadResult:
    """Result of loading the salary dataset."""

    rows: list[SalaryRow] = field(default_factory=list)
    source: Path | None = None

    # Statistics
    total_records: int = 0
    skipped_records: int = 0
    load_duration_ms: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def loaded_records(self) -> int:
        return len(self.rows)


# =============================================================================
# LOADER
# =============================================================================


class SalaryDataLoader:
    """
    Load salary records from a CSV file.

    Usage:
        loader = SalaryDataLoader("data/ds_salaries.csv")
        result = loader.load()
        rows = result.rows
    """

    def __init__(self, path: str | Path, *, max_logged_errors: int = 5) -> None:
        self.path = Path(path)
        self.max_logged_errors = max_logged_errors

    def load(self) -> LoadResult:
        """
        Read the CSV and convert it to rows.

        Returns:
            LoadResult with rows and load statistics

        Raises:
            DatasetLoadError: If the file is missing, unreadable or lacks a
                required column
        """
        start_time = time.perf_counter()

        if not self.path.exists():
            raise DatasetLoadError(f"Dataset not found: {self.path}", path=self.path)

        try:
            df = pd.read_csv(self.path)
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise DatasetLoadError(
                f"Could not read dataset {self.path}: {e}",
                path=self.path,
            ) from e

        result = self.load_frame(df)
        result.source = self.path
        result.load_duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Loaded {result.loaded_records:,} of {result.total_records:,} records "
            f"from {self.path.name} in {result.load_duration_ms:.0f}ms"
        )
        return result

    def load_frame(self, df: pd.DataFrame) -> LoadResult:
        """Convert an already-read DataFrame into rows."""
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DatasetLoadError(
                f"Dataset is missing required columns: {', '.join(missing)}",
                path=self.path,
                context={"missing_columns": missing},
            )

        df = _coerce_columns(df)
        result = LoadResult(total_records=len(df))

        for position, record in enumerate(df.to_dict(orient="records")):
            try:
                result.rows.append(_record_to_row(record))
            except ValidationError as e:
                result.skipped_records += 1
                if len(result.errors) < self.max_logged_errors:
                    error_msg = f"Record {position}: {e.errors()[0]['msg']}"
                    result.errors.append(error_msg)
                    logger.debug(error_msg)

        if result.skipped_records:
            logger.warning(
                f"Skipped {result.skipped_records:,} malformed records in {self.path.name}"
            )
        return result


# =============================================================================
# HELPERS
# =============================================================================


def _coerce_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce numeric columns; unparseable values become NaN."""
    df = df.copy()
    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    for col in ("experience_level", "job_title"):
        df[col] = df[col].astype("string").str.strip()
    return df


def _clean(value: Any) -> Any:
    """Turn pandas missing markers into None."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return value


def _record_to_row(record: dict[str, Any]) -> SalaryRow:
    year = _clean(record["work_year"])
    payload: dict[str, Any] = {
        "work_year": int(year) if year is not None and float(year).is_integer() else year,
        "experience_level": _clean(record["experience_level"]),
        "job_title": _clean(record["job_title"]),
        "salary_in_usd": _clean(record["salary_in_usd"]),
        "remote_ratio": _clean(record["remote_ratio"]) or 0.0,
    }
    for col in OPTIONAL_COLUMNS:
        if col in record:
            payload[col] = _clean(record[col])
    return SalaryRow.model_validate(payload)


def load_salary_data(path: str | Path) -> LoadResult:
    """Convenience wrapper around SalaryDataLoader."""
    return SalaryDataLoader(path).load()
