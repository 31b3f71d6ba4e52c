"""
Ordering predicates shared by the sorter and the validators.

Every algorithm in this package is written against a single strict
"less than" predicate:

    is_less(a, b) -> bool

The helpers below build that predicate from the other two ways callers
usually describe an order (a three-way comparator, or a key function), and
derive equality / sortedness from it.

Public API (stable):
    natural_less(a, b) -> bool
    less_from_compare(compare) -> IsLess
    less_from_key(key) -> IsLess
    are_equal(a, b, is_less) -> bool
    is_sorted(seq, is_less=natural_less) -> bool
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

T = TypeVar("T")

IsLess = Callable[[Any, Any], bool]
Compare = Callable[[Any, Any], int]
KeyFn = Callable[[Any], Any]

__all__ = [
    "IsLess",
    "Compare",
    "KeyFn",
    "natural_less",
    "less_from_compare",
    "less_from_key",
    "are_equal",
    "is_sorted",
]


def natural_less(a: Any, b: Any) -> bool:
    """Intrinsic order of the element type."""
    return a < b


def less_from_compare(compare: Compare) -> IsLess:
    """
    Build `is_less` from a three-way comparator.

    `compare(a, b)` follows the `functools.cmp_to_key` convention: a negative
    number if a < b, zero if equal, positive if a > b.
    """

    def is_less(a: Any, b: Any) -> bool:
        return compare(a, b) < 0

    return is_less


def less_from_key(key: KeyFn) -> IsLess:
    """
    Build `is_less` as `key(a) < key(b)`.

    The key is recomputed on every comparison; nothing is cached.
    """

    def is_less(a: Any, b: Any) -> bool:
        return key(a) < key(b)

    return is_less


def are_equal(a: T, b: T, is_less: IsLess) -> bool:
    return not is_less(a, b) and not is_less(b, a)


def is_sorted(seq: Sequence[T], is_less: IsLess = natural_less) -> bool:
    """Return True iff no element is less than its left neighbour."""
    return all(not is_less(seq[i + 1], seq[i]) for i in range(len(seq) - 1))
