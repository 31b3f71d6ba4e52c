"""
Baseline: Python's built-in Timsort.

Sorts in place with one whole-slice assignment, so an instrumented sequence
sees `len(a)` writes. The write count is not tracked by the algorithm itself.
"""

from __future__ import annotations

from typing import Any, Dict, MutableSequence, Optional

__all__ = ["sort"]


def sort(a: MutableSequence[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    config = config or {}
    unknown = set(config) - {"reverse"}
    if unknown:
        raise ValueError(f"builtin_timsort: unknown config keys {sorted(unknown)}")
    a[:] = sorted(a, reverse=bool(config.get("reverse", False)))
