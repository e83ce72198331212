"""
Suite configuration for benchmark sweeps.

Expands YAML configs with static, grid_sweep, and matrix_sweep sections
into concrete BenchmarkParams.
"""

import itertools
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .datastructures import BenchmarkParams


def expand_sweep(cfg: dict) -> list[dict]:
    """Expand one experiment block into its cases.

    ``static`` keys apply to every case, ``grid_sweep`` lists are crossed,
    and each ``matrix_sweep`` entry is laid over every grid point. On a key
    clash the matrix entry wins over the grid, and the grid over static.
    """
    static = cfg.get("static") or {}
    grid = cfg.get("grid_sweep") or {}
    matrix = cfg.get("matrix_sweep") or [{}]

    names = list(grid)
    points = [dict(zip(names, values)) for values in itertools.product(*grid.values())]
    return [{**static, **point, **entry} for point in points for entry in matrix]


def _read(config_path: str | Path) -> Dict[str, Any]:
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def load_suite(config_path: str | Path, experiment: str) -> List[BenchmarkParams]:
    """
    Load a suite config and return the cases of one experiment.

    Args:
        config_path: Path to YAML config file
        experiment: Name of experiment in the YAML

    Returns:
        List of BenchmarkParams, one per combination
    """
    all_cfg = _read(config_path)

    if experiment not in all_cfg:
        available = list(all_cfg.keys())
        raise KeyError(f"Experiment '{experiment}' not found. Available: {available}")

    combos = expand_sweep(all_cfg[experiment])
    return [BenchmarkParams(**{"experiment_name": experiment, **c}) for c in combos]


def list_experiments(config_path: str | Path) -> Dict[str, int]:
    """Return {experiment: number of cases} for every experiment in a suite file."""
    return {name: len(expand_sweep(cfg)) for name, cfg in _read(config_path).items()}
