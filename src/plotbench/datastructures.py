"""Data structures for benchmark configuration and results.

Architecture: Params vs Metrics

                 Params (input/config)         Metrics (output/results)
                 ─────────────────────         ────────────────────────
Case             BenchmarkParams               TimingSummary
(one per         scenario, stack, stage,       median, iqr, outliers,
 benchmark)      device, n, iterations...      itr_per_sec...

Run              -                             TimingSeries
(per timed                                     times[], gc_collections[],
 iteration)                                    warmup_times[]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

import pandas as pd


# ============================================================================
# Params
# ============================================================================


@dataclass
class BenchmarkParams:
    """One benchmark case - expanded from a suite config, stored with results.

    Identifies what is timed (scenario x stack x stage x device x n) and how
    the harness samples it.
    """

    # Required
    scenario: str
    stack: str
    stage: str = "full"
    device: str = "agg"
    n: int = 1000

    # Sampling
    iterations: int = 10  # Minimum number of timed runs
    max_iterations: int = 100
    warmup: int = 1
    min_time: float = 0.0  # Keep sampling until this much time was measured
    disable_gc: bool = False
    outlier_k: float = 1.5  # Tukey fence multiplier

    # Figure
    width: float = 6.0
    height: float = 4.0
    dpi: float = 96.0

    seed: int = 42
    experiment_name: str = "default"

    # Auto-detected at runtime (not from config)
    environment: str = field(init=False)

    def __post_init__(self):
        """Validate and compute derived values after initialization."""
        if self.n < 1:
            raise ValueError(f"n must be >= 1, got {self.n}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.max_iterations < self.iterations:
            raise ValueError(
                f"max_iterations ({self.max_iterations}) must be >= iterations ({self.iterations})"
            )
        if self.warmup < 0:
            raise ValueError(f"warmup must be >= 0, got {self.warmup}")
        if self.min_time < 0:
            raise ValueError(f"min_time must be >= 0, got {self.min_time}")
        if self.width <= 0 or self.height <= 0 or self.dpi <= 0:
            raise ValueError("width, height and dpi must be positive")
        self.environment = "ci" if os.environ.get("CI") else "local"

    @property
    def label(self) -> str:
        return f"{self.scenario}_{self.stack}_{self.stage}_{self.device}_n{self.n}"

    def to_record(self) -> dict:
        """Convert to a flat dict (bools as int)."""
        return {
            k: (int(v) if isinstance(v, bool) else v)
            for k, v in self.__dict__.items()
        }


# ============================================================================
# Metrics
# ============================================================================


@dataclass
class TimingSummary:
    """Outlier-aware aggregate of one timing series.

    mean and std describe the inliers. The order statistics and the 10%
    trimmed mean use every sample.
    """

    n_iter: int = 0
    median: float = 0.0
    mean: float = 0.0
    std: float = 0.0
    min: float = 0.0
    max: float = 0.0
    q1: float = 0.0
    q3: float = 0.0
    iqr: float = 0.0
    lower_fence: float = 0.0
    upper_fence: float = 0.0
    n_outliers: int = 0
    trimmed_mean: float = 0.0
    mad: float = 0.0  # Median absolute deviation
    itr_per_sec: float = 0.0
    total_time: float = 0.0
    n_gc: int = 0

    def to_record(self) -> dict:
        return dict(self.__dict__)


@dataclass
class TimingSeries:
    """Per-iteration measurements accumulated by the harness."""

    times: List[float] = field(default_factory=list)
    gc_collections: List[int] = field(default_factory=list)
    warmup_times: List[float] = field(default_factory=list)

    def clear(self):
        """Clear all timeseries data."""
        self.times.clear()
        self.gc_collections.clear()
        self.warmup_times.clear()

    @property
    def total_time(self) -> float:
        return float(sum(self.times))

    def to_frame(self) -> pd.DataFrame:
        """One row per timed iteration."""
        return pd.DataFrame(
            {
                "iteration": range(len(self.times)),
                "time": self.times,
                "gc": self.gc_collections,
            }
        )
