"""
Write-minimal in-place cycle sort.

Cycle sort is an unstable comparison sort that minimizes the number of
writes: every element that is not already in its final position is written
exactly once, and nothing else is written. It costs O(n^2) comparisons in
every case, so it suits small collections on media where writes are
expensive.

    from cyclesort import cycle_sort, cycle_sort_by, cycle_sort_by_key

    a = [1, 4, 1, 5, 9, 2]
    writes = cycle_sort(a)          # a == [1, 1, 2, 4, 5, 9], writes == 5

If the comparator or key function raises, the exception propagates and the
sequence is left in an unspecified state (same length, but one element may
be lost and another duplicated).

Sub-packages:
    algorithms  cycle sort plus a Timsort baseline
    datasets    integer input generators
    validate    oracle and property checks
    bench       write/comparison instrumentation, timing, experiment runner
"""

from .algorithms.cycle_sort import (
    cycle_sort,
    cycle_sort_by,
    cycle_sort_by_key,
    cycle_sort_with,
)
from .ordering import are_equal, is_sorted

__all__ = [
    "cycle_sort",
    "cycle_sort_by",
    "cycle_sort_by_key",
    "cycle_sort_with",
    "are_equal",
    "is_sorted",
]

__version__ = "0.1.0"
