"""
Integer dataset generators for write-count and timing experiments.

Supported distributions:
- "random":
    Integers drawn uniformly from params["range"] == [min, max] (inclusive).
- "permutation":
    A shuffle of [0, 1, ..., n-1]. Every value is also its own final index,
    so the minimum number of writes is the number of i with a[i] != i.
- "nearly_sorted":
    [0..n-1] degraded by ceil(swap_frac * n) random index swaps.
- "few_uniques":
    At most k distinct values from an optional inclusive range
    (default [0, 255]), sampled into n slots. Stresses duplicate handling.
- "sorted":
    [0, 1, ..., n-1]. Cycle sort writes nothing on it.
- "reversed":
    [n-1, ..., 0].

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- The caller owns and seeds the RNG; "sorted" and "reversed" ignore it.
- Returns a plain Python list so algorithms stay NumPy-agnostic.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import numpy as np

__all__ = ["SUPPORTED_DISTS", "make_dataset"]

_Generator = Callable[[int, Dict[str, Any], np.random.Generator], List[int]]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate `n` integers according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements, >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}; see the module docstring.
    rng : numpy.random.Generator
        Caller-owned generator.

    Raises
    ------
    ValueError
        On a negative/non-int `n`, an unknown dist, or bad params.
    """
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    if dist not in _GENERATORS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    return _GENERATORS[dist](int(n), params, rng)


# ------------------------- distributions ------------------------- #


def _random(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    lo, hi = _parse_range("random", params["range"])
    if n == 0:
        return []
    # integers() is half-open; +1 makes hi inclusive
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _permutation(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return rng.permutation(n).tolist()


def _nearly_sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    raw = params.get("swap_frac", 0.05)
    try:
        swap_frac = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {raw!r}"
        ) from e
    if not 0.0 <= swap_frac <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {swap_frac}")

    arr = list(range(n))
    num_swaps = int(np.ceil(swap_frac * n))
    if n == 0 or num_swaps == 0:
        return arr
    pairs = rng.integers(0, n, size=(num_swaps, 2))
    for i, j in pairs.tolist():
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _few_uniques(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    k = params.get("k")
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_range("few_uniques", params.get("range", [0, 255]))
    if n == 0:
        return []

    span = hi - lo + 1
    actual_k = min(k, n, span)
    # distinct values without replacement, drawn from the caller's RNG
    offsets = rng.choice(span, size=actual_k, replace=False)
    values = (offsets + lo).tolist()
    picks = rng.integers(0, actual_k, size=n)
    return [values[t] for t in picks.tolist()]


def _sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n))


def _reversed(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


_GENERATORS: Dict[str, _Generator] = {
    "random": _random,
    "permutation": _permutation,
    "nearly_sorted": _nearly_sorted,
    "few_uniques": _few_uniques,
    "sorted": _sorted,
    "reversed": _reversed,
}

SUPPORTED_DISTS = frozenset(_GENERATORS)


# ------------------------- helpers ------------------------- #


def _parse_range(dist: str, spec: Any) -> Tuple[int, int]:
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, not bools
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
