"""
Property helpers for validating sorting results.

Used by the tests and by the benchmark runner to sanity-check every probe.

Public API (stable):
    is_nondecreasing(xs, is_less=natural_less) -> bool
    first_nondecreasing_violation_index(xs, is_less=natural_less) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    count_displaced(before, after) -> int
    assert_no_mutation(before, after) -> None

Notes
-----
- "Nondecreasing" is judged with the same strict predicate the sort used, so
  descending and key-based orders are checked by passing their `is_less`.
- `is_permutation` and `permutation_counter_diff` need hashable elements.
- `count_displaced` is the minimum number of writes any in-place sort can
  make to turn `before` into `after`: the positions whose value changed.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable, Sequence

from cyclesort.ordering import IsLess, is_sorted, natural_less

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "count_displaced",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[Any], is_less: IsLess = natural_less) -> bool:
    """Return True iff not is_less(xs[i+1], xs[i]) for all i."""
    return is_sorted(xs, is_less)


def first_nondecreasing_violation_index(
    xs: Sequence[Any], is_less: IsLess = natural_less
) -> int | None:
    """
    Return the first index i where is_less(xs[i+1], xs[i]), or None.

    Handy for error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not sorted at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if is_less(xs[i + 1], xs[i]):
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """Return True iff `a` and `b` hold the same multiset of values."""
    return len(a) == len(b) and Counter(a) == Counter(b)


def permutation_counter_diff(
    a: Sequence[Hashable], b: Sequence[Hashable]
) -> Dict[Hashable, int]:
    """
    Return value -> (count in a) - (count in b), omitting zero entries.

    An empty dict means identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def count_displaced(before: Sequence[Any], after: Sequence[Any]) -> int:
    """Number of positions i where before[i] != after[i]."""
    if len(before) != len(after):
        raise ValueError(
            f"sequences differ in length: {len(before)} != {len(after)}"
        )
    return sum(1 for x, y in zip(before, after) if x != y)


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert two sequences are element-wise equal.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")
