"""Run benchmark cases and persist their results."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

import pandas as pd

from .data import make_data
from .datastructures import BenchmarkParams, TimingSeries
from .devices import get_device
from .stacks import get_stack
from .timing import Stopwatch, mark, summarize

log = logging.getLogger(__name__)

# Columns identifying one benchmark case in the result tables
ID_COLUMNS = ["scenario", "stack", "stage", "device", "n"]


def _run_case(params: BenchmarkParams) -> Tuple[dict, TimingSeries]:
    """Time one case. Returns the flat summary record and the raw series."""
    stack = get_stack(params.stack, width=params.width, height=params.height, dpi=params.dpi)
    device = get_device(params.device, dpi=params.dpi)
    data = make_data(params.scenario, params.n, seed=params.seed)

    setup, func = stack.prepare(params.stage, params.scenario, data, device)
    series = mark(
        func,
        setup,
        iterations=params.iterations,
        max_iterations=params.max_iterations,
        warmup=params.warmup,
        min_time=params.min_time,
        disable_gc=params.disable_gc,
    )
    summary = summarize(series.times, k=params.outlier_k, gc_collections=series.gc_collections)
    return {**params.to_record(), **summary.to_record()}, series


def run_benchmark(params: BenchmarkParams) -> dict:
    """Run one benchmark case.

    Parameters
    ----------
    params : BenchmarkParams
        Case to run.

    Returns
    -------
    dict
        Params and timing summary merged into one flat record.
    """
    record, _ = _run_case(params)
    return record


def run_suite(
    cases: Iterable[BenchmarkParams],
    skip_unsupported: bool = True,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Run a list of cases.

    Parameters
    ----------
    cases : iterable of BenchmarkParams
        Cases to run, in order.
    skip_unsupported : bool
        Skip (and log) cases asking a stack for a stage it does not have,
        instead of raising.

    Returns
    -------
    summary : DataFrame
        One row per case (params + TimingSummary).
    raw : DataFrame
        One row per timed iteration, keyed by ``ID_COLUMNS``.
    """
    cases = list(cases)
    records: List[dict] = []
    frames: List[pd.DataFrame] = []

    for i, params in enumerate(cases, 1):
        if not get_stack(params.stack).supports(params.stage):
            if not skip_unsupported:
                raise ValueError(f"Stack '{params.stack}' has no '{params.stage}' stage")
            log.info(f"[{i}/{len(cases)}] skip {params.label} (no '{params.stage}' stage)")
            continue

        with Stopwatch() as sw:
            record, series = _run_case(params)
        log.info(
            f"[{i}/{len(cases)}] {params.label}: median={record['median'] * 1e3:.3f} ms, "
            f"{record['n_iter']} runs, {record['n_outliers']} outliers ({sw.elapsed:.1f}s)"
        )

        records.append(record)
        raw = series.to_frame()
        for key in ID_COLUMNS:
            raw[key] = getattr(params, key)
        frames.append(raw)

    summary = pd.DataFrame(records)
    raw = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
    return summary, raw


def save_results(df: pd.DataFrame, path: Path | str) -> Path:
    """Write a result table to parquet."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False)
    log.info(f"Saved {len(df)} rows to {path}")
    return path


def load_results(path: Path | str) -> pd.DataFrame:
    """Read a result table written by save_results."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No results at {path}. Run the compute step first.")
    return pd.read_parquet(path)
