"""
Measurement harness for in-place sorting algorithms.

Two kinds of measurement, kept apart so instrumentation never pollutes timing:

- time_sort_call: repeated timed calls to `algo_fn(arr, config=config)` on a
  fresh copy of the input each time. Copying, GC and warmup happen outside
  the timed block.
- probe_sort_call: one untimed call on an instrumented copy, reporting how
  many writes and comparisons the algorithm actually made and whether the
  result is correct.

Public API (stable):
    time_sort_call(...) -> dict
    probe_sort_call(...) -> dict

time_sort_call schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns per successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,
        "timed_out_on_repeat": int | None,  # 0-based repeat index
    }

probe_sort_call schema:
    {
        "algo": str,
        "status": "ok" | "error",
        "error": str | None,
        "writes_reported": int | None,      # what the algorithm returned
        "writes_observed": int | None,      # assignments seen on the sequence
        "displaced": int | None,            # lower bound: positions that changed
        "comparisons": int | None,          # `<` evaluations on elements
        "valid": bool | None,               # sorted and a permutation of input
    }
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, Optional

from cyclesort.bench.instrument import (
    ComparisonCounter,
    WriteCountingList,
    unwrap_items,
    wrap_items,
)
from cyclesort.ordering import natural_less
from cyclesort.validate.properties import (
    count_displaced,
    is_nondecreasing,
    is_permutation,
)

__all__ = ["time_sort_call", "probe_sort_call"]

SortFn = Callable[..., Optional[int]]


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: SortFn,
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(copy_of_a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for records).
    algo_fn : Callable
        In-place sort with signature sort(a, *, config=None).
    a : list
        Input; never passed to `algo_fn` directly, so it is not mutated.
    config : dict | None
        Passed through unchanged.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable GC for the timed loop; restored afterwards.
    timeout_seconds : float
        If one sample exceeds this, status becomes "timeout" and sampling stops.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            algo_fn(list(a), config=config)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # leave GC disabled if the caller had it disabled
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result


def probe_sort_call(
    *,
    algo_name: str,
    algo_fn: SortFn,
    a: List[Any],
    config: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Run `algo_fn` once on an instrumented copy of `a` and report its costs.

    Elements are wrapped so every `<` is counted, and the container counts
    every assignment. Validity is checked against the order implied by
    config["reverse"].
    """
    result: Dict[str, Any] = {
        "algo": algo_name,
        "status": "ok",
        "error": None,
        "writes_reported": None,
        "writes_observed": None,
        "displaced": None,
        "comparisons": None,
        "valid": None,
    }

    counter = ComparisonCounter()
    seq = WriteCountingList(wrap_items(a, counter))
    try:
        reported = algo_fn(seq, config=config)
    except Exception as e:
        result["status"] = "error"
        result["error"] = f"probe failed: {e!r}"
        return result

    out = unwrap_items(seq)
    reverse = bool((config or {}).get("reverse", False))
    is_less = _greater if reverse else natural_less

    result["writes_reported"] = None if reported is None else int(reported)
    result["writes_observed"] = seq.writes
    result["displaced"] = count_displaced(a, out)
    result["comparisons"] = counter.count
    result["valid"] = is_nondecreasing(out, is_less) and is_permutation(a, out)
    return result


def _greater(x: Any, y: Any) -> bool:
    return y < x
