"""
Fixed salary ranges used to discretize salaries for the flow diagram.

Buckets are closed on the left and open on the right, so every finite salary
falls into exactly one of them.
"""

import math
from dataclasses import dataclass

from salaryflow.exceptions import DataValidationError


@dataclass(frozen=True)
class SalaryBucket:
    """A salary range [lower, upper). None means unbounded on that side."""

    key: str
    label: str
    lower: float | None
    upper: float | None
    color: str

    def contains(self, salary: float) -> bool:
        above = self.lower is None or salary >= self.lower
        below = self.upper is None or salary < self.upper
        return above and below


SALARY_BUCKETS: tuple[SalaryBucket, ...] = (
    SalaryBucket("lt_50k", "<$50K", None, 50_000, "#66c2a5"),
    SalaryBucket("50k_100k", "$50K-$100K", 50_000, 100_000, "#fc8d62"),
    SalaryBucket("100k_150k", "$100K-$150K", 100_000, 150_000, "#8da0cb"),
    SalaryBucket("150k_200k", "$150K-$200K", 150_000, 200_000, "#e78ac3"),
    SalaryBucket("gte_200k", "$200K+", 200_000, None, "#a6d854"),
)

BUCKETS_BY_KEY: dict[str, SalaryBucket] = {bucket.key: bucket for bucket in SALARY_BUCKETS}


def bucket_for_salary(salary: float) -> SalaryBucket:
    """
    Find the bucket a salary falls into.

    Raises:
        DataValidationError: If the salary is NaN
    """
    if math.isnan(salary):
        raise DataValidationError("Cannot bucket a NaN salary", field="salary_in_usd", value=salary)

    for bucket in SALARY_BUCKETS:
        if bucket.contains(salary):
            return bucket

    # Only reachable if the table above stops covering the whole line
    raise DataValidationError("Salary outside every bucket", field="salary_in_usd", value=salary)
