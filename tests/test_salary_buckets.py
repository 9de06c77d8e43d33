"""
Tests for salary bucketing.
"""

import math

import pytest

from salaryflow.exceptions import DataValidationError
from salaryflow.features.salary_buckets import SALARY_BUCKETS, bucket_for_salary


class TestBucketForSalary:
    """Tests for bucket_for_salary."""

    @pytest.mark.parametrize("salary, label", [
        (0, "<$50K"),
        (49_999.99, "<$50K"),
        (50_000.0, "$50K-$100K"),
        (99_999, "$50K-$100K"),
        (100_000, "$100K-$150K"),
        (150_000, "$150K-$200K"),
        (199_999.5, "$150K-$200K"),
        (200_000, "$200K+"),
        (5_000_000, "$200K+"),
    ])
    def test_boundaries_are_closed_left(self, salary: float, label: str) -> None:
        assert bucket_for_salary(salary).label == label

    def test_negative_salary_goes_to_lowest_bucket(self) -> None:
        assert bucket_for_salary(-10).key == "lt_50k"

    def test_nan_rejected(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            bucket_for_salary(math.nan)
        assert exc_info.value.field == "salary_in_usd"

    def test_buckets_partition_the_line(self) -> None:
        """Each probe salary lands in exactly one bucket."""
        for salary in range(0, 400_001, 2_500):
            matches = [bucket for bucket in SALARY_BUCKETS if bucket.contains(salary)]
            assert len(matches) == 1

    def test_five_buckets_in_ascending_order(self) -> None:
        assert [bucket.label for bucket in SALARY_BUCKETS] == [
            "<$50K",
            "$50K-$100K",
            "$100K-$150K",
            "$150K-$200K",
            "$200K+",
        ]
