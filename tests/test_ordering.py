"""Tests for the ordering predicates and their adapters."""

from __future__ import annotations

import functools

import pytest
from hypothesis import given, strategies as st

from cyclesort.ordering import (
    are_equal,
    is_sorted,
    less_from_compare,
    less_from_key,
    natural_less,
)


def test_equality_matches_builtin() -> None:
    for a in range(-10, 11):
        for b in range(-10, 11):
            assert are_equal(a, b, natural_less) == (a == b)


def test_equality_under_key() -> None:
    by_len = less_from_key(len)
    assert are_equal("abc", "xyz", by_len)
    assert not are_equal("ab", "xyz", by_len)


@pytest.mark.parametrize(
    "xs, expected",
    [
        ([], True),
        ([1], True),
        ([1, 1, 2], True),
        ([2, 1], False),
        ([1, 3, 2, 4], False),
    ],
)
def test_is_sorted(xs, expected) -> None:
    assert is_sorted(xs) is expected


@given(st.lists(st.integers(), max_size=30))
def test_is_sorted_after_sorting(xs) -> None:
    assert is_sorted(sorted(xs))
    assert is_sorted(sorted(xs, reverse=True), lambda a, b: b < a)


def test_less_from_compare_follows_cmp_to_key_convention() -> None:
    def compare(a: int, b: int) -> int:
        return a - b

    is_less = less_from_compare(compare)
    assert is_less(1, 2)
    assert not is_less(2, 2)
    assert not is_less(3, 2)

    # agrees with the stdlib adapter for the same comparator
    key = functools.cmp_to_key(compare)
    for a, b in [(1, 2), (2, 2), (3, 2)]:
        assert is_less(a, b) == (key(a) < key(b))


def test_less_from_key_recomputes_key() -> None:
    seen = []

    def key(x: int) -> int:
        seen.append(x)
        return -x

    is_less = less_from_key(key)
    assert is_less(5, 1)
    assert is_less(5, 1)
    assert seen == [5, 1, 5, 1]
