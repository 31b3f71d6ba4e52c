"""
Experiment runner: a write-count and timing sweep driven by a YAML config.

Usage (library only):
    from cyclesort.bench.runner import run_experiment
    run_dir = run_experiment(Path("experiments/configs/01_write_counts.yaml"))

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per probe, timing sample or failure
    - summary.csv             # per (algo, n): writes, displaced, comparisons, timing

Design notes:
- For each size n, ONE dataset is generated and every algorithm gets a copy.
- Each (algo, n) gets one instrumented probe (writes, comparisons, validity)
  and then `repeats` clean timed samples.
- On timeout/error for an algorithm at size n, larger sizes are skipped for it.
"""

from __future__ import annotations

import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from cyclesort.bench.measure import probe_sort_call, time_sort_call
from cyclesort.datasets import make_dataset

__all__ = ["AlgoSpec", "ExperimentConfig", "load_config", "run_experiment"]

_console = Console()

_REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]

_SUMMARY_COLUMNS = [
    "algo",
    "n",
    "valid",
    "writes",
    "displaced",
    "comparisons",
    "samples_ok",
    "median_ns",
    "iqr_ns",
    "min_ns",
    "max_ns",
]


# ------------------------- data structures ------------------------- #


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Any
    config: Dict[str, Any]


@dataclass(frozen=True)
class ExperimentConfig:
    experiment_name: str
    output_dir: Path
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    dataset: Dict[str, Any]
    sizes: List[int]
    algorithms: List[Dict[str, Any]]

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "ExperimentConfig":
        if not isinstance(cfg, dict):
            raise ValueError("Experiment config must be a YAML mapping")
        missing = [k for k in _REQUIRED_KEYS if k not in cfg]
        if missing:
            raise ValueError(f"Missing required config keys: {missing}")

        sizes = cfg["sizes"]
        if not isinstance(sizes, list) or not sizes:
            raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
        if any(not isinstance(n, int) or isinstance(n, bool) or n < 0 for n in sizes):
            raise ValueError(f"Config 'sizes' must hold nonnegative integers; got {sizes!r}")

        algorithms = cfg["algorithms"]
        if not isinstance(algorithms, list) or not algorithms:
            raise ValueError("Config 'algorithms' must be a non-empty list")

        if not isinstance(cfg["dataset"], dict):
            raise ValueError("Config 'dataset' must be a mapping with 'dist' and 'params'")

        return cls(
            experiment_name=str(cfg["experiment_name"]),
            output_dir=Path(cfg["output_dir"]),
            seed=int(cfg["seed"]),
            repeats=int(cfg["repeats"]),
            warmup=bool(cfg["warmup"]),
            disable_gc=bool(cfg["disable_gc"]),
            timeout_seconds=float(cfg["timeout_seconds"]),
            dataset=dict(cfg["dataset"]),
            sizes=[int(n) for n in sizes],
            algorithms=list(algorithms),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["output_dir"] = str(self.output_dir)
        return out


# ------------------------- helpers: IO & meta ------------------------- #


def load_config(path: Path) -> ExperimentConfig:
    with Path(path).open("r", encoding="utf-8") as f:
        return ExperimentConfig.from_dict(yaml.safe_load(f))


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{stamp}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        if not isinstance(entry, dict):
            raise ValueError(f"Algorithm entries must be mappings; got {entry!r}")
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        label = str(entry.get("label", name))
        if label in seen:
            raise ValueError(f"Duplicate algorithm label in config: {label}")
        seen.add(label)

        try:
            mod = importlib.import_module(f"cyclesort.algorithms.{name}")
        except ImportError as e:
            raise ImportError(
                f"Could not import algorithm module 'cyclesort.algorithms.{name}': {e!r}"
            ) from e

        sort_fn = getattr(mod, "sort", None)
        if not callable(sort_fn):
            raise AttributeError(
                f"Algorithm module '{name}' must define a callable `sort(a, *, config=None)`"
            )

        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Algorithm '{label}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=label, sort_fn=sort_fn, config=config))
    return specs


# ------------------------- aggregation ------------------------- #


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists() or jsonl_path.stat().st_size == 0:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    df = pd.read_json(jsonl_path, lines=True, convert_dates=False)

    probes = df[df["kind"] == "probe"]
    if probes.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    probes = probes[["algo", "n", "valid", "writes_observed", "displaced", "comparisons"]]
    probes = probes.rename(columns={"writes_observed": "writes"})

    samples = df[df["kind"] == "sample"]
    if samples.empty:
        out = probes.copy()
        for col in ["samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]:
            out[col] = np.nan
    else:
        timing = samples.groupby(["algo", "n"], as_index=False).agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            q1=("time_ns", lambda s: s.quantile(0.25)),
            q3=("time_ns", lambda s: s.quantile(0.75)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
        timing["iqr_ns"] = timing["q3"] - timing["q1"]
        timing = timing.drop(columns=["q1", "q3"])
        out = probes.merge(timing, on=["algo", "n"], how="left")

    int_cols = ["writes", "displaced", "comparisons", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]
    for col in int_cols:
        out[col] = pd.to_numeric(out[col], errors="coerce").round().astype("Int64")
    return out[_SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_summary(summary: pd.DataFrame) -> None:
    table = Table(title="Write-count summary")
    table.add_column("Algorithm", style="bold")
    table.add_column("n", justify="right")
    table.add_column("writes", justify="right")
    table.add_column("displaced", justify="right")
    table.add_column("comparisons", justify="right")
    table.add_column("median ms", justify="right")
    table.add_column("valid", justify="center")

    def _fmt(v: Any) -> str:
        return "—" if pd.isna(v) else str(int(v))

    for row in summary.itertuples(index=False):
        median = "—" if pd.isna(row.median_ns) else f"{row.median_ns / 1e6:.2f}"
        valid = "[green]yes[/]" if not pd.isna(row.valid) and bool(row.valid) else "[red]no[/]"
        table.add_row(
            row.algo,
            str(row.n),
            _fmt(row.writes),
            _fmt(row.displaced),
            _fmt(row.comparisons),
            median,
            valid,
        )
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #


def run_experiment(config_path: Path, *, show_progress: bool = True) -> Path:
    """
    Run the sweep described by the YAML file at `config_path`.

    Returns the run directory. Raises ValueError on a malformed config and
    ImportError/AttributeError on an unknown algorithm; algorithm failures
    during the sweep are recorded in results.jsonl instead of raised.
    """
    cfg = load_config(config_path)
    algos = _resolve_algorithms(cfg.algorithms)

    run_dir = _ensure_run_dir(cfg.output_dir, cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg.to_dict(), cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(cfg.seed)
    per_algo_skip = {a.name: False for a in algos}

    if show_progress:
        _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
        _console.print(f"[bold]Experiment:[/bold] {cfg.experiment_name}")
        _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
        _console.print()

    for n in tqdm(cfg.sizes, desc="Sizes", unit="n", disable=not show_progress):
        base_a = make_dataset(n, cfg.dataset, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            common = {"algo": a_spec.name, "n": n, "config": a_spec.config}

            probe = probe_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
            )
            if probe["status"] == "error":
                per_algo_skip[a_spec.name] = True
                _append_jsonl({**common, "kind": "status", "status": "error", "error": probe["error"]}, results_path)
                continue
            _append_jsonl(
                {
                    **common,
                    "kind": "probe",
                    "dataset": cfg.dataset,
                    "valid": probe["valid"],
                    "writes_reported": probe["writes_reported"],
                    "writes_observed": probe["writes_observed"],
                    "displaced": probe["displaced"],
                    "comparisons": probe["comparisons"],
                },
                results_path,
            )

            res = time_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=cfg.repeats,
                warmup=cfg.warmup,
                disable_gc=cfg.disable_gc,
                timeout_seconds=cfg.timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl({**common, "kind": "sample", "trial": trial_idx, "time_ns": int(t_ns)}, results_path)

            status = res["status"]
            if status == "timeout":
                per_algo_skip[a_spec.name] = True
                _append_jsonl(
                    {**common, "kind": "status", "status": "timeout", "timed_out_on_repeat": res["timed_out_on_repeat"]},
                    results_path,
                )
            elif status == "error":
                per_algo_skip[a_spec.name] = True
                _append_jsonl({**common, "kind": "status", "status": "error", "error": res["error"]}, results_path)

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    if show_progress:
        _print_summary(summary_df)
        _console.print("[bold green]Done.[/bold green] Wrote:")
        for p in (results_path, summary_path, meta_path, cfg_resolved_path):
            _console.print(f" - {p}")

    return run_dir
