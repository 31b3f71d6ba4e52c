"""
Instrumentation for counting writes and comparisons made by a sort.

- WriteCountingList: a list that counts assignments into it. `a[i] = x`
  counts one write; `a[i:j] = xs` counts one write per assigned element.
- CountingItem: wraps a value and bumps a shared ComparisonCounter every
  time `<` is evaluated on it. Only `<` is defined, which is all the sorts
  in this package use.

These are for untimed probe runs only; the proxies make every comparison
noticeably slower.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

__all__ = [
    "ComparisonCounter",
    "CountingItem",
    "WriteCountingList",
    "wrap_items",
    "unwrap_items",
]


@dataclass
class ComparisonCounter:
    count: int = 0


class CountingItem:
    __slots__ = ("value", "counter")

    def __init__(self, value: Any, counter: ComparisonCounter) -> None:
        self.value = value
        self.counter = counter

    def __lt__(self, other: "CountingItem") -> bool:
        self.counter.count += 1
        return self.value < other.value

    def __repr__(self) -> str:
        return f"CountingItem({self.value!r})"


class WriteCountingList(list):
    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        super().__init__(iterable)
        self.writes = 0

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            value = list(value)
            self.writes += len(value)
        else:
            self.writes += 1
        super().__setitem__(index, value)


def wrap_items(values: Iterable[Any], counter: ComparisonCounter) -> List[CountingItem]:
    return [CountingItem(v, counter) for v in values]


def unwrap_items(items: Iterable[CountingItem]) -> List[Any]:
    return [it.value for it in items]
