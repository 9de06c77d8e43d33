"""
Module: aggregators

Purpose: Grouped statistics over salary rows.

Pure functions shared by all three charts: mean and count per group,
categorical frequencies and top-N selection. Empty input yields empty output,
and an empty group reports mean=None instead of NaN so nothing downstream
formats a missing value as a number.
"""

from collections import Counter
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

import numpy as np

from salaryflow.data.schemas import AggregateBucket, ExperienceLevel, SalaryRow, TrendPoint

K = TypeVar("K", bound=Hashable)


def salary_in_usd(row: SalaryRow) -> float:
    return row.salary_in_usd


def _label(key: Hashable) -> str:
    if isinstance(key, ExperienceLevel):
        return key.value
    return str(key)


def group_mean(
    rows: Iterable[SalaryRow],
    key: Callable[[SalaryRow], K],
    *,
    value: Callable[[SalaryRow], float] = salary_in_usd,
    order: Sequence[K] | None = None,
) -> list[AggregateBucket]:
    """
    Mean and count of `value` per group.

    Args:
        rows: Rows to aggregate
        key: Grouping key function
        value: Numeric field to average (defaults to salary_in_usd)
        order: Fixed group order. Groups listed here are always returned,
            with count=0 and mean=None when no row falls into them; groups
            not listed are dropped. Without it, groups come back in the order
            they were first encountered.

    Returns:
        One AggregateBucket per group
    """
    groups: dict[K, list[float]] = {}
    for row in rows:
        groups.setdefault(key(row), []).append(value(row))

    keys = list(order) if order is not None else list(groups)

    buckets = []
    for group_key in keys:
        values = groups.get(group_key, [])
        mean = float(np.mean(values)) if values else None
        buckets.append(AggregateBucket(label=_label(group_key), mean=mean, count=len(values)))
    return buckets


def frequency_counts(rows: Iterable[SalaryRow], key: Callable[[SalaryRow], K]) -> dict[K, int]:
    """Row count per category, in first-encountered order."""
    return dict(Counter(key(row) for row in rows))


def top_n_categories(
    rows: Iterable[SalaryRow],
    key: Callable[[SalaryRow], K],
    n: int,
) -> list[K]:
    """
    The n most frequent categories, most frequent first.

    Ties keep first-encountered order: the sort is stable over the
    insertion-ordered counts.
    """
    if n <= 0:
        return []
    counts = frequency_counts(rows, key)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [category for category, _ in ranked[:n]]


def average_salary_by_experience(rows: Iterable[SalaryRow]) -> list[AggregateBucket]:
    """Bar chart data: one bucket per experience level, in canonical order."""
    return group_mean(
        rows,
        lambda row: row.experience_level,
        order=ExperienceLevel.ordered(),
    )


def average_salary_by_year(
    rows: Iterable[SalaryRow],
    years: Sequence[int],
) -> list[TrendPoint]:
    """Line chart data: mean salary per (year, level), skipping empty groups."""
    rows = list(rows)
    points: list[TrendPoint] = []
    for year in years:
        year_rows = [row for row in rows if row.work_year == year]
        for bucket, level in zip(average_salary_by_experience(year_rows), ExperienceLevel.ordered()):
            if bucket.is_empty or bucket.mean is None:
                continue
            points.append(TrendPoint(
                year=year,
                experience_level=level,
                mean=bucket.mean,
                count=bucket.count,
            ))
    return points


def years_in_bounds(bounds: tuple[int, int]) -> list[int]:
    """Every year from bounds[0] to bounds[1] inclusive."""
    return list(range(bounds[0], bounds[1] + 1))
