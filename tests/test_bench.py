"""Tests for instrumentation, measurement and the experiment runner."""

from __future__ import annotations

import gc
import json

import pandas as pd
import pytest
import yaml

from cyclesort.algorithms import builtin_timsort, cycle_sort as cycle_sort_module
from cyclesort.bench.instrument import (
    ComparisonCounter,
    WriteCountingList,
    unwrap_items,
    wrap_items,
)
from cyclesort.bench.measure import probe_sort_call, time_sort_call
from cyclesort.bench.runner import ExperimentConfig, load_config, run_experiment


# ------------------------- instrumentation ------------------------- #


def test_write_counting_list_counts_items_and_slices() -> None:
    seq = WriteCountingList([3, 1, 2])
    seq[0] = 9
    seq[1:3] = [7, 8]
    assert seq == [9, 7, 8]
    assert seq.writes == 3


def test_counting_items_count_comparisons() -> None:
    counter = ComparisonCounter()
    items = wrap_items([2, 1], counter)
    assert items[1] < items[0]
    assert not items[0] < items[1]
    assert counter.count == 2
    assert unwrap_items(items) == [2, 1]


# ------------------------- measurement ------------------------- #


def test_probe_cycle_sort_is_write_minimal() -> None:
    a = [1, 4, 1, 5, 9, 2]
    res = probe_sort_call(algo_name="cycle_sort", algo_fn=cycle_sort_module.sort, a=a, config={})
    assert res["status"] == "ok"
    assert res["valid"] is True
    assert res["writes_reported"] == 5
    assert res["writes_observed"] == 5
    assert res["displaced"] == 5
    assert res["comparisons"] > 0
    assert a == [1, 4, 1, 5, 9, 2]


def test_probe_builtin_writes_everything() -> None:
    a = [3, 2, 1, 0]
    res = probe_sort_call(algo_name="builtin", algo_fn=builtin_timsort.sort, a=a, config={"reverse": True})
    assert res["valid"] is True
    assert res["writes_reported"] is None
    assert res["writes_observed"] == 4
    assert res["displaced"] == 0


def test_probe_records_errors() -> None:
    def broken(a, *, config=None):
        raise RuntimeError("nope")

    res = probe_sort_call(algo_name="broken", algo_fn=broken, a=[1], config=None)
    assert res["status"] == "error"
    assert "nope" in res["error"]


def test_time_sort_call_ok_and_input_untouched() -> None:
    a = [5, 4, 3, 2, 1]
    res = time_sort_call(
        algo_name="cycle_sort",
        algo_fn=cycle_sort_module.sort,
        a=a,
        config=None,
        repeats=3,
        warmup=True,
        disable_gc=True,
        timeout_seconds=10.0,
    )
    assert res["status"] == "ok"
    assert len(res["samples_ns"]) == 3
    assert a == [5, 4, 3, 2, 1]
    assert gc.isenabled()


def test_time_sort_call_errors() -> None:
    res = time_sort_call(
        algo_name="cycle_sort",
        algo_fn=cycle_sort_module.sort,
        a=[2, 1],
        config={"bogus": 1},
        repeats=2,
        warmup=False,
        disable_gc=False,
        timeout_seconds=1.0,
    )
    assert res["status"] == "error"
    assert res["samples_ns"] == []
    with pytest.raises(ValueError):
        time_sort_call(
            algo_name="x", algo_fn=cycle_sort_module.sort, a=[], config=None,
            repeats=-1, warmup=False, disable_gc=False, timeout_seconds=1.0,
        )


# ------------------------- runner ------------------------- #


def _write_config(tmp_path, **overrides):
    cfg = {
        "experiment_name": "unit",
        "output_dir": str(tmp_path / "runs"),
        "seed": 7,
        "repeats": 2,
        "warmup": False,
        "disable_gc": False,
        "timeout_seconds": 30.0,
        "dataset": {"dist": "permutation", "params": {}},
        "sizes": [0, 8, 24],
        "algorithms": [
            {"name": "cycle_sort"},
            {"name": "builtin_timsort"},
            {"name": "cycle_sort", "label": "cycle_sort_desc", "config": {"reverse": True}},
        ],
    }
    cfg.update(overrides)
    path = tmp_path / "exp.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_load_config_validates(tmp_path) -> None:
    cfg = load_config(_write_config(tmp_path))
    assert isinstance(cfg, ExperimentConfig)
    assert cfg.sizes == [0, 8, 24]

    with pytest.raises(ValueError, match="Missing required config keys"):
        ExperimentConfig.from_dict({"seed": 1})
    with pytest.raises(ValueError, match="sizes"):
        load_config(_write_config(tmp_path, sizes=[]))


def test_run_experiment_end_to_end(tmp_path) -> None:
    run_dir = run_experiment(_write_config(tmp_path), show_progress=False)

    for name in ("config_resolved.yaml", "meta.json", "results.jsonl", "summary.csv"):
        assert (run_dir / name).exists()

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert meta["machine"]["cores_logical"] >= 1

    summary = pd.read_csv(run_dir / "summary.csv")
    assert set(summary["algo"]) == {"cycle_sort", "builtin_timsort", "cycle_sort_desc"}
    assert summary["valid"].all()

    cyc = summary[summary["algo"] == "cycle_sort"]
    assert (cyc["writes"] == cyc["displaced"]).all()

    timsort = summary[summary["algo"] == "builtin_timsort"]
    assert (timsort["writes"] == timsort["n"]).all()
    assert (summary["samples_ok"] == 2).all()


def test_run_experiment_unknown_algorithm(tmp_path) -> None:
    path = _write_config(tmp_path, algorithms=[{"name": "bogosort"}])
    with pytest.raises(ImportError, match="bogosort"):
        run_experiment(path, show_progress=False)
