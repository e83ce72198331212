"""Synthetic benchmark inputs.

Each generator is seeded so that the same (scenario, n, seed) always yields
an identical frame, which keeps both stacks drawing exactly the same data.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


COMPOSITE_BINS = 20
COMPOSITE_GROUPS = ("a", "b", "c")
COMPOSITE_PANELS = ("left", "right")


def make_points(n: int, seed: int = 42) -> pd.DataFrame:
    """Uniform scatter in the unit square."""
    rng = np.random.default_rng(seed)
    return pd.DataFrame({"x": rng.uniform(0.0, 1.0, n), "y": rng.uniform(0.0, 1.0, n)})


def make_lines(n: int, seed: int = 42, n_groups: int = 10) -> pd.DataFrame:
    """Random walks with ``n`` vertices in total, split over ``n_groups`` paths.

    Every path gets at least two vertices, so tiny ``n`` is rounded up.
    """
    rng = np.random.default_rng(seed)
    n_groups = max(1, min(n_groups, n // 2))
    sizes = np.full(n_groups, max(n // n_groups, 2))
    sizes[: max(n - sizes.sum(), 0)] += 1

    frames = []
    for g, size in enumerate(sizes):
        frames.append(
            pd.DataFrame(
                {
                    "x": np.linspace(0.0, 1.0, size),
                    "y": np.cumsum(rng.normal(0.0, 1.0, size)),
                    "group": g,
                }
            )
        )
    return pd.concat(frames, ignore_index=True)


def make_polygons(n: int, seed: int = 42) -> pd.DataFrame:
    """``n`` bars at integer positions with positive heights."""
    rng = np.random.default_rng(seed)
    return pd.DataFrame({"x": np.arange(n, dtype=np.float64), "y": rng.gamma(2.0, 1.0, n)})


def make_composite(n: int, seed: int = 42) -> pd.DataFrame:
    """Binned x with noisy y, three colour groups and two facet panels."""
    rng = np.random.default_rng(seed)
    x = rng.integers(0, COMPOSITE_BINS, n)
    group = rng.choice(COMPOSITE_GROUPS, n)
    offset = pd.Series(group).map({g: i for i, g in enumerate(COMPOSITE_GROUPS)}).to_numpy()
    return pd.DataFrame(
        {
            "x": x.astype(np.float64),
            "y": 0.1 * x + offset + rng.normal(0.0, 1.0, n),
            "group": group,
            "panel": rng.choice(COMPOSITE_PANELS, n),
        }
    )


def make_histogram(n: int, seed: int = 42) -> pd.DataFrame:
    """Standard normal samples."""
    rng = np.random.default_rng(seed)
    return pd.DataFrame({"x": rng.normal(0.0, 1.0, n)})


_GENERATORS = {
    "points": make_points,
    "lines": make_lines,
    "polygons": make_polygons,
    "composite": make_composite,
    "histogram": make_histogram,
}


def make_data(scenario: str, n: int, seed: int = 42) -> pd.DataFrame:
    """Generate the input frame for a scenario."""
    try:
        generator = _GENERATORS[scenario]
    except KeyError:
        raise ValueError(
            f"Unknown scenario: {scenario}. Available: {sorted(_GENERATORS)}"
        ) from None
    return generator(n, seed=seed)


def normalize(values, margin: float = 0.0) -> np.ndarray:
    """Rescale values to [margin, 1 - margin]. Constant input maps to 0.5."""
    arr = np.asarray(values, dtype=np.float64)
    lo, hi = arr.min(), arr.max()
    if hi == lo:
        return np.full_like(arr, 0.5)
    return margin + (arr - lo) / (hi - lo) * (1.0 - 2.0 * margin)
