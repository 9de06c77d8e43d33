"""Aggregations and salary bucketing over salary rows."""

from salaryflow.features.aggregators import (
    average_salary_by_experience,
    average_salary_by_year,
    frequency_counts,
    group_mean,
    top_n_categories,
)
from salaryflow.features.salary_buckets import SALARY_BUCKETS, SalaryBucket, bucket_for_salary

__all__ = [
    "average_salary_by_experience",
    "average_salary_by_year",
    "frequency_counts",
    "group_mean",
    "top_n_categories",
    "SALARY_BUCKETS",
    "SalaryBucket",
    "bucket_for_salary",
]
