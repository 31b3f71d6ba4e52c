"""
Cycle sort: an unstable, in-place comparison sort that makes the minimum
possible number of writes to the sequence being sorted.

Every element is written at most once. The number of writes returned equals
the number of positions whose occupant changes, which is the lower bound for
any in-place rearrangement. The price is O(n^2) comparisons in every case,
including already-sorted input (which costs a full counting pass per element
but zero writes). Use it when writes are expensive and n is small.

Public API (stable):
    cycle_sort(seq) -> int
    cycle_sort_by(seq, compare) -> int
    cycle_sort_by_key(seq, key) -> int
    cycle_sort_with(seq, is_less) -> int
    sort(a, *, config=None) -> int          # benchmark harness entry point

Conventions:
- `seq` is any mutable, randomly-indexable sequence supporting `len`,
  integer `__getitem__` and `__setitem__` (list, bytearray, array.array,
  1-D numpy.ndarray, ...). It is sorted in place.
- The return value is the number of `seq[i] = ...` assignments made.
- Ties are not kept in input order.

Hazards:
- If the ordering relation raises, the exception propagates unchanged and
  `seq` is left with its original length but unspecified contents: the
  element being relocated at that moment lives only in a local variable, so
  one input element may be missing and another duplicated. Nothing is rolled
  back. Copy the input first if you need it to survive a failing comparator.
- If `is_less` is not a strict weak ordering the result is an unspecified
  arrangement of the input and the sort is not guaranteed to terminate.
"""

from __future__ import annotations

from typing import Any, Dict, MutableSequence, Optional

from cyclesort.ordering import (
    Compare,
    IsLess,
    KeyFn,
    are_equal,
    less_from_compare,
    less_from_key,
    natural_less,
)

__all__ = [
    "cycle_sort",
    "cycle_sort_by",
    "cycle_sort_by_key",
    "cycle_sort_with",
    "sort",
]

_CONFIG_KEYS = {"reverse"}


def cycle_sort(seq: MutableSequence[Any]) -> int:
    """
    Sort `seq` in place by the elements' natural order; return the write count.

    >>> a = [1, 4, 1, 5, 9, 2]
    >>> cycle_sort(a)
    5
    >>> a
    [1, 1, 2, 4, 5, 9]
    """
    return cycle_sort_with(seq, natural_less)


def cycle_sort_by(seq: MutableSequence[Any], compare: Compare) -> int:
    """
    Sort `seq` in place with a three-way comparator; return the write count.

    `compare(a, b)` returns a negative number, zero, or a positive number when
    `a` is less than, equal to, or greater than `b`.

    >>> a = ["davidii", "demissa", "deltoidea", "decapetala", "dahurica"]
    >>> cycle_sort_by(a, lambda x, y: (y > x) - (y < x))  # descending
    4
    >>> a
    ['demissa', 'deltoidea', 'decapetala', 'davidii', 'dahurica']
    """
    return cycle_sort_with(seq, less_from_compare(compare))


def cycle_sort_by_key(seq: MutableSequence[Any], key: KeyFn) -> int:
    """
    Sort `seq` in place by `key(element)`; return the write count.

    The key is evaluated on every comparison, so keep it cheap.

    >>> a = ["zwölf", "zzxjoanw", "zymbel"]
    >>> cycle_sort_by_key(a, len)
    2
    >>> a
    ['zwölf', 'zymbel', 'zzxjoanw']
    """
    return cycle_sort_with(seq, less_from_key(key))


def cycle_sort_with(seq: MutableSequence[Any], is_less: IsLess) -> int:
    """
    Sort `seq` in place under the strict ordering `is_less`; return the
    number of writes made.

    For each start index `src`, the element there is taken into a temporary
    and its rank among `seq[src:]` is counted. If it is already in place
    nothing is written. Otherwise it is swapped into its slot (after any
    equal elements already there), the displaced element becomes the new
    temporary, and the chain is followed until a placement lands back on
    `src`. Each swap is one write.
    """
    length = len(seq)

    if length < 2:
        return 0

    writes = 0

    for src in range(length - 1):
        tmp = seq[src]
        dst = _rank(seq, tmp, src, is_less)

        # already in place
        if dst == src:
            continue

        while True:
            # land after any duplicates already placed
            while dst < length - 1 and are_equal(tmp, seq[dst], is_less):
                dst += 1

            tmp, seq[dst] = seq[dst], tmp
            writes += 1

            if dst == src:
                break

            dst = _rank(seq, tmp, src, is_less)

    return writes


def _rank(seq: MutableSequence[Any], item: Any, src: int, is_less: IsLess) -> int:
    # src + number of elements in seq[src + 1:] strictly less than item
    dst = src
    for i in range(src + 1, len(seq)):
        if is_less(seq[i], item):
            dst += 1
    return dst


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> int:
    """
    Benchmark entry point: sort `a` in place and return the write count.

    Config keys:
        reverse : bool   # default False; sort in non-increasing order
    """
    config = config or {}
    unknown = set(config) - _CONFIG_KEYS
    if unknown:
        raise ValueError(f"cycle_sort: unknown config keys {sorted(unknown)}")

    if config.get("reverse", False):
        return cycle_sort_by(a, _descending)
    return cycle_sort(a)


def _descending(a: Any, b: Any) -> int:
    # only `<` is assumed to exist on the elements
    if b < a:
        return -1
    if a < b:
        return 1
    return 0
