"""Shared fixtures for the benchmark tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402


class FakeClock:
    """Deterministic clock advancing ``step`` seconds per reading."""

    def __init__(self, step: float = 1.0):
        self.t = 0.0
        self.step = step

    def __call__(self) -> float:
        self.t += self.step
        return self.t


@pytest.fixture
def fake_clock():
    return FakeClock()


def make_summary_row(scenario, stack, stage, n, median, device="agg"):
    return {
        "scenario": scenario,
        "stack": stack,
        "stage": stage,
        "device": device,
        "n": n,
        "median": median,
        "iqr": median * 0.1,
        "n_iter": 10,
        "n_outliers": 0,
    }


@pytest.fixture
def stage_summary():
    """Two stacks, all stages, two sizes: declarative ~10x slower end to end."""
    rows = []
    for n, scale in ((100, 1.0), (1000, 10.0)):
        rows += [
            make_summary_row("points", "declarative", "full", n, 0.10 * scale),
            make_summary_row("points", "declarative", "stat", n, 0.02 * scale),
            make_summary_row("points", "declarative", "table", n, 0.03 * scale),
            make_summary_row("points", "declarative", "render", n, 0.04 * scale),
            make_summary_row("points", "immediate", "full", n, 0.01 * scale),
            make_summary_row("points", "immediate", "table", n, 0.002 * scale),
            make_summary_row("points", "immediate", "render", n, 0.007 * scale),
        ]
    return pd.DataFrame(rows)


@pytest.fixture
def device_summary():
    rows = [
        make_summary_row("points", stack, "render", 1000, t * f, device=device)
        for stack, f in (("declarative", 2.0), ("immediate", 1.0))
        for device, t in (("agg", 0.01), ("png", 0.02), ("svg", 0.03), ("pdf", 0.04), ("void", 0.001))
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def combined_summary(stage_summary):
    """Stage study at n=1000 plus end-to-end scaling runs up to n=100000."""
    rows = [
        make_summary_row(scenario, stack, "full", n, 1e-6 * n)
        for scenario in ("points", "lines")
        for stack in ("declarative", "immediate")
        for n in (100, 10_000, 100_000)
    ]
    return pd.concat([stage_summary, pd.DataFrame(rows)], ignore_index=True)


@pytest.fixture
def uneven_device_summary():
    """One case on three devices; three more cases measured on agg only."""
    rows = [
        make_summary_row("points", "immediate", "render", 1000, t, device=device)
        for device, t in (("agg", 0.05), ("png", 0.03), ("svg", 0.04))
    ]
    rows += [
        make_summary_row(scenario, "immediate", "render", 1000, 0.001)
        for scenario in ("lines", "polygons", "histogram")
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def rng():
    return np.random.default_rng(0)
