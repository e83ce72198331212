"""Timing harness.

Runs a callable repeatedly, records elapsed wall-clock durations and
aggregates them with Tukey-fence outlier handling.
"""

from __future__ import annotations

import gc
import time
from typing import Callable, Optional, Sequence

import numpy as np

from .datastructures import TimingSeries, TimingSummary


def _gc_count() -> int:
    """Total number of collections performed so far, all generations."""
    return sum(s.get("collections", 0) for s in gc.get_stats())


def _timed_call(
    func: Callable,
    setup: Optional[Callable],
    disable_gc: bool,
    clock: Callable[[], float],
) -> tuple[float, int]:
    """Run setup (untimed) then func (timed). Returns (elapsed, gc collections)."""
    state = setup() if setup is not None else None

    gc.collect()
    gc_before = _gc_count()
    was_enabled = gc.isenabled()
    if disable_gc:
        gc.disable()
    try:
        t0 = clock()
        if setup is not None:
            func(state)
        else:
            func()
        elapsed = clock() - t0
    finally:
        if disable_gc and was_enabled:
            gc.enable()

    return elapsed, _gc_count() - gc_before


def mark(
    func: Callable,
    setup: Optional[Callable] = None,
    *,
    iterations: int = 10,
    max_iterations: int = 100,
    warmup: int = 1,
    min_time: float = 0.0,
    disable_gc: bool = False,
    clock: Callable[[], float] = time.perf_counter,
) -> TimingSeries:
    """Time ``func`` repeatedly.

    Parameters
    ----------
    func : callable
        Timed callable. Called with no arguments, or with the return value of
        ``setup`` when a setup is given.
    setup : callable, optional
        Untimed per-iteration preparation. Its result is passed to ``func``.
    iterations : int
        Minimum number of timed runs.
    max_iterations : int
        Hard cap on timed runs.
    warmup : int
        Untimed-for-statistics runs executed first and stored separately.
    min_time : float
        Keep sampling (up to ``max_iterations``) until the measured runs add
        up to at least this many seconds.
    disable_gc : bool
        Disable the cyclic garbage collector during each timed call.
    clock : callable
        Time source, ``time.perf_counter`` by default.

    Returns
    -------
    TimingSeries
        Per-iteration durations (seconds) and GC collection counts.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    if max_iterations < iterations:
        raise ValueError(
            f"max_iterations ({max_iterations}) must be >= iterations ({iterations})"
        )

    series = TimingSeries()

    for _ in range(warmup):
        elapsed, _ = _timed_call(func, setup, disable_gc, clock)
        series.warmup_times.append(elapsed)

    while len(series.times) < max_iterations:
        elapsed, n_gc = _timed_call(func, setup, disable_gc, clock)
        series.times.append(elapsed)
        series.gc_collections.append(n_gc)

        if len(series.times) >= iterations and series.total_time >= min_time:
            break

    return series


def outlier_mask(times: Sequence[float], k: float = 1.5) -> np.ndarray:
    """Boolean mask of samples outside the Tukey fences [q1 - k*iqr, q3 + k*iqr]."""
    arr = np.asarray(times, dtype=np.float64)
    if arr.size == 0:
        return np.zeros(0, dtype=bool)
    q1, q3 = np.percentile(arr, [25, 75])
    iqr = q3 - q1
    return (arr < q1 - k * iqr) | (arr > q3 + k * iqr)


def _trimmed_mean(arr: np.ndarray, proportion: float = 0.1) -> float:
    ordered = np.sort(arr)
    cut = int(proportion * ordered.size)
    if cut > 0:
        ordered = ordered[cut:-cut]
    return float(ordered.mean())


def summarize(
    times: Sequence[float],
    k: float = 1.5,
    gc_collections: Optional[Sequence[int]] = None,
) -> TimingSummary:
    """Aggregate durations into a TimingSummary.

    Order statistics (median, quartiles, min, max, MAD) use all samples;
    mean and std are computed on the samples inside the Tukey fences.
    """
    arr = np.asarray(times, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("Cannot summarize an empty timing series")

    q1, median, q3 = np.percentile(arr, [25, 50, 75])
    iqr = q3 - q1
    lower, upper = q1 - k * iqr, q3 + k * iqr
    outliers = (arr < lower) | (arr > upper)
    inliers = arr[~outliers]

    return TimingSummary(
        n_iter=int(arr.size),
        median=float(median),
        mean=float(inliers.mean()),
        std=float(inliers.std(ddof=1)) if inliers.size > 1 else 0.0,
        min=float(arr.min()),
        max=float(arr.max()),
        q1=float(q1),
        q3=float(q3),
        iqr=float(iqr),
        lower_fence=float(lower),
        upper_fence=float(upper),
        n_outliers=int(outliers.sum()),
        trimmed_mean=_trimmed_mean(arr),
        mad=float(np.median(np.abs(arr - median))),
        itr_per_sec=float(1.0 / median) if median > 0 else float("inf"),
        total_time=float(arr.sum()),
        n_gc=int(sum(gc_collections)) if gc_collections is not None else 0,
    )


class Stopwatch:
    """Context manager measuring the wall time of a block.

    >>> with Stopwatch() as sw:
    ...     work()
    >>> sw.elapsed
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._start = None
        self.elapsed = 0.0

    def __enter__(self):
        self._start = self._clock()
        return self

    def __exit__(self, *exc):
        self.elapsed = self._clock() - self._start
        return False
