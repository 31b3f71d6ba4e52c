"""Tests for the oracle and property helpers."""

from __future__ import annotations

import pytest

from cyclesort.validate import (
    ORACLE_NAME,
    assert_no_mutation,
    count_displaced,
    equals_oracle,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    permutation_counter_diff,
)


def test_oracle_does_not_mutate() -> None:
    a = [3, 1, 2]
    assert oracle_sort(a) == [1, 2, 3]
    assert oracle_sort(a, reverse=True) == [3, 2, 1]
    assert a == [3, 1, 2]
    assert ORACLE_NAME == "python_sorted_timsort"


def test_equals_oracle() -> None:
    assert equals_oracle([2, 1], [1, 2])
    assert equals_oracle([2, 1], (1, 2))
    assert not equals_oracle([2, 1], [2, 1])
    assert equals_oracle([1, 2], [2, 1], reverse=True)


def test_nondecreasing_with_custom_order() -> None:
    desc = [5, 3, 3, 1]
    assert not is_nondecreasing(desc)
    assert is_nondecreasing(desc, lambda a, b: b < a)
    assert first_nondecreasing_violation_index(desc) == 0
    assert first_nondecreasing_violation_index([1, 2, 2, 1]) == 2
    assert first_nondecreasing_violation_index([1, 2]) is None


def test_permutation_helpers() -> None:
    assert is_permutation([1, 2, 2], [2, 1, 2])
    assert not is_permutation([1, 2], [1, 2, 2])
    assert permutation_counter_diff([1, 2, 2], [2, 1, 2]) == {}
    assert permutation_counter_diff([1, 1, 3], [1, 4]) == {1: 1, 3: 1, 4: -1}


def test_count_displaced() -> None:
    assert count_displaced([], []) == 0
    assert count_displaced([3, 1, 2], [1, 2, 3]) == 3
    assert count_displaced([1, 4, 1, 5, 9, 2], [1, 1, 2, 4, 5, 9]) == 5
    with pytest.raises(ValueError):
        count_displaced([1], [1, 2])


def test_assert_no_mutation() -> None:
    assert_no_mutation([1, 2], [1, 2])
    with pytest.raises(AssertionError, match="index 1"):
        assert_no_mutation([1, 2], [1, 3])
    with pytest.raises(AssertionError, match="length changed"):
        assert_no_mutation([1, 2], [1])
