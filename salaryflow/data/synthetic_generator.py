"""
Module: synthetic_generator

Purpose: Generate a realistic data-science salary dataset for demos and tests.

Generates records with:
- Deterministic generation with seed for reproducibility
- Log-normal salaries whose median rises with seniority and year
- A long-tailed job title distribution so top-N selection is meaningful
- The same column layout as the public ds_salaries.csv file
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from salaryflow.data.schemas import DEFAULT_YEAR_BOUNDS, ExperienceLevel, SalaryRow

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

JOB_TITLES: dict[str, float] = {
    "Data Engineer": 0.20,
    "Data Scientist": 0.19,
    "Data Analyst": 0.15,
    "Machine Learning Engineer": 0.09,
    "Analytics Engineer": 0.04,
    "Data Architect": 0.03,
    "Research Scientist": 0.03,
    "Applied Scientist": 0.03,
    "Data Science Manager": 0.02,
    "Research Engineer": 0.02,
    "ML Engineer": 0.02,
    "Data Manager": 0.02,
    "Machine Learning Scientist": 0.02,
    "Computer Vision Engineer": 0.02,
    "Business Data Analyst": 0.02,
    "AI Scientist": 0.02,
    "Head of Data": 0.02,
    "BI Analyst": 0.02,
    "Data Specialist": 0.02,
    "Director of Data Science": 0.02,
}

LEVEL_WEIGHTS: dict[ExperienceLevel, float] = {
    ExperienceLevel.EN: 0.09,
    ExperienceLevel.MI: 0.21,
    ExperienceLevel.SE: 0.67,
    ExperienceLevel.EX: 0.03,
}

# Median salary in USD per level for the first year
LEVEL_MEDIANS: dict[ExperienceLevel, float] = {
    ExperienceLevel.EN: 70_000,
    ExperienceLevel.MI: 100_000,
    ExperienceLevel.SE: 150_000,
    ExperienceLevel.EX: 190_000,
}

YEAR_WEIGHTS: dict[int, float] = {2020: 0.02, 2021: 0.06, 2022: 0.44, 2023: 0.48}

ANNUAL_GROWTH = 0.05
EMPLOYMENT_TYPES = ["FT", "PT", "CT", "FL"]
LOCATIONS = ["US", "GB", "CA", "ES", "IN", "DE", "FR", "PT", "AU", "NL"]
COMPANY_SIZES = ["S", "M", "L"]
REMOTE_RATIOS = [0, 50, 100]


# =============================================================================
# SYNTHETIC DATA GENERATOR
# =============================================================================


class SyntheticSalaryGenerator:
    """
    Generate ds_salaries-compatible synthetic records.

    Uses numpy random generator with seed for reproducibility.
    """

    def __init__(self, *, seed: int = 42, year_bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS) -> None:
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.years = [y for y in YEAR_WEIGHTS if year_bounds[0] <= y <= year_bounds[1]]
        if not self.years:
            self.years = list(range(year_bounds[0], year_bounds[1] + 1))

    def _pick(self, weights: dict, size: int) -> np.ndarray:
        keys = list(weights)
        probs = np.array([weights[k] for k in keys], dtype=float)
        indices = self.rng.choice(len(keys), size=size, p=probs / probs.sum())
        return np.array(keys, dtype=object)[indices]

    def generate_frame(self, n_rows: int = 3000) -> pd.DataFrame:
        """Generate a DataFrame with the ds_salaries column layout."""
        levels = self._pick(LEVEL_WEIGHTS, n_rows)
        titles = self._pick(JOB_TITLES, n_rows)
        years = self._pick({y: YEAR_WEIGHTS.get(y, 1.0) for y in self.years}, n_rows)

        medians = np.array([LEVEL_MEDIANS[level] for level in levels], dtype=float)
        growth = np.array([(1 + ANNUAL_GROWTH) ** (year - self.years[0]) for year in years])
        salaries = np.round(self.rng.lognormal(mean=np.log(medians * growth), sigma=0.4), -2)

        return pd.DataFrame({
            "work_year": years.astype(int),
            "experience_level": [level.value for level in levels],
            "employment_type": self.rng.choice(EMPLOYMENT_TYPES, size=n_rows, p=[0.97, 0.01, 0.01, 0.01]),
            "job_title": titles,
            "salary": salaries,
            "salary_currency": "USD",
            "salary_in_usd": salaries,
            "employee_residence": self.rng.choice(LOCATIONS, size=n_rows),
            "remote_ratio": self.rng.choice(REMOTE_RATIOS, size=n_rows),
            "company_location": self.rng.choice(LOCATIONS, size=n_rows),
            "company_size": self.rng.choice(COMPANY_SIZES, size=n_rows, p=[0.1, 0.8, 0.1]),
        })

    def generate_rows(self, n_rows: int = 3000) -> list[SalaryRow]:
        """Generate validated rows directly."""
        df = self.generate_frame(n_rows)
        return [SalaryRow.model_validate(record) for record in df.to_dict(orient="records")]


def generate_sample_dataset(
    n_rows: int = 3000,
    *,
    seed: int = 42,
    year_bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS,
) -> list[SalaryRow]:
    """Generate a sample dataset of `n_rows` rows within `year_bounds`."""
    return SyntheticSalaryGenerator(seed=seed, year_bounds=year_bounds).generate_rows(n_rows)


def write_sample_csv(path: str | Path, n_rows: int = 3000, *, seed: int = 42) -> Path:
    """Write a synthetic dataset to CSV and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    SyntheticSalaryGenerator(seed=seed).generate_frame(n_rows).to_csv(path, index=False)
    logger.info(f"Wrote {n_rows:,} synthetic salary records to {path}")
    return path
