"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth. Cycle sort is unstable, but
for plain values (ints, strings) equal elements are indistinguishable, so the
outputs must match exactly.

Public API (stable):
    oracle_sort(a, *, reverse=False) -> list
    equals_oracle(a, out, *, reverse=False) -> bool

The oracle never mutates its input and always returns a new list.
"""

from __future__ import annotations

from typing import Any, List, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[Any], *, reverse: bool = False) -> List[Any]:
    """Return a new list with the elements of `a` in sorted order."""
    return sorted(a, reverse=reverse)


def equals_oracle(a: Sequence[Any], out: Sequence[Any], *, reverse: bool = False) -> bool:
    """True iff `out` equals `oracle_sort(a)` element-wise."""
    return list(out) == oracle_sort(a, reverse=reverse)
