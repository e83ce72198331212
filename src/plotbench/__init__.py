"""Plotting pipeline benchmark package.

Measures where a figure's time goes by timing each pipeline stage of two
plotting stacks on the same synthetic workloads.

Stacks
------
- DeclarativeStack: seaborn.objects plot specs, compiled by seaborn's
  Plotter (stat, table and render stages timed separately)
- ImmediateStack: matplotlib artists placed directly on a Figure

Devices
-------
agg, png, svg, pdf (encoded output) and void (draws into a no-op renderer).

Analysis and reporting live in ``plotbench.analysis`` and
``plotbench.report``.
"""

from pathlib import Path

from .datastructures import BenchmarkParams, TimingSeries, TimingSummary
from .timing import mark, summarize, outlier_mask, Stopwatch
from .data import make_data, normalize
from .devices import Device, get_device, available_devices
from .scenarios import Scenario, SCENARIOS, get_scenario, scenario_names
from .stacks import (
    BaseStack,
    DeclarativeStack,
    ImmediateStack,
    STAGES,
    get_stack,
    available_stacks,
)
from .runner import run_benchmark, run_suite, save_results, load_results
from .sweep import expand_sweep, load_suite, list_experiments

__all__ = [
    # Data structures
    "BenchmarkParams",
    "TimingSeries",
    "TimingSummary",
    # Timing
    "mark",
    "summarize",
    "outlier_mask",
    "Stopwatch",
    # Inputs
    "make_data",
    "normalize",
    "Scenario",
    "SCENARIOS",
    "get_scenario",
    "scenario_names",
    # Devices
    "Device",
    "get_device",
    "available_devices",
    # Stacks
    "BaseStack",
    "DeclarativeStack",
    "ImmediateStack",
    "STAGES",
    "get_stack",
    "available_stacks",
    # Running
    "run_benchmark",
    "run_suite",
    "save_results",
    "load_results",
    # Suites
    "expand_sweep",
    "load_suite",
    "list_experiments",
    # Utilities
    "get_project_root",
]


def get_project_root() -> Path:
    """Get project root directory.

    Returns
    -------
    Path
        Project root directory (contains pyproject.toml).
    """
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent

    # Fallback: assume standard src layout
    return Path(__file__).resolve().parent.parent.parent
