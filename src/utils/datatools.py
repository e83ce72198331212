"""Path helpers for experiment scripts.

Scripts in Experiments/<name>/ write results to <data>/<name>/ and figures
to <figures>/<name>/, with <data> and <figures> taken from the project
configuration.
"""

from __future__ import annotations

import inspect
from pathlib import Path

from .config import get_project_path


def get_experiment_name(caller_file: Path | str | None = None) -> str:
    """Get experiment name from the calling script's location.

    Extracts the experiment name from the path relative to Experiments/.
    For example:
    - Experiments/01-stages/compute_stages.py → "01-stages"
    - Experiments/extra/svg/compute.py → "extra/svg"

    Parameters
    ----------
    caller_file : Path or str, optional
        Path to the calling file. If None, automatically detects the caller.

    Returns
    -------
    str
        Experiment name (relative path from Experiments/)

    Raises
    ------
    ValueError
        If the calling file is not in an Experiments/ subdirectory
    """
    if caller_file is None:
        # Two frames up: this function -> get_data_dir/get_figures_dir -> actual caller
        frame = inspect.currentframe()
        if frame is None or frame.f_back is None or frame.f_back.f_back is None:
            raise RuntimeError("Cannot detect caller file")
        caller_file = Path(frame.f_back.f_back.f_globals["__file__"])
    else:
        caller_file = Path(caller_file)

    caller_file = caller_file.resolve()

    experiments_idx = None
    for i, part in enumerate(caller_file.parts):
        if part == "Experiments":
            experiments_idx = i
            break

    if experiments_idx is None:
        raise ValueError(
            f"File {caller_file} is not in an Experiments/ subdirectory. "
            "This utility is designed for scripts in Experiments/*/"
        )

    experiment_parts = caller_file.parts[experiments_idx + 1 : -1]

    if not experiment_parts:
        raise ValueError(
            f"File {caller_file} is directly in Experiments/. "
            "Scripts should be in a subdirectory (e.g., Experiments/01-stages/)"
        )

    return "/".join(experiment_parts)


def get_data_dir(caller_file: Path | str | None = None, create: bool = True) -> Path:
    """Get data directory for the calling experiment.

    Parameters
    ----------
    caller_file : Path or str, optional
        Path to the calling file. If None, automatically detects the caller.
    create : bool, default True
        Whether to create the directory if it doesn't exist

    Returns
    -------
    Path
        Data directory path (e.g., repo_root/data/01-stages/)
    """
    data_dir = get_project_path("data") / get_experiment_name(caller_file)
    if create:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_figures_dir(caller_file: Path | str | None = None, create: bool = True) -> Path:
    """Get figures directory for the calling experiment.

    Parameters
    ----------
    caller_file : Path or str, optional
        Path to the calling file. If None, automatically detects the caller.
    create : bool, default True
        Whether to create the directory if it doesn't exist

    Returns
    -------
    Path
        Figures directory path (e.g., repo_root/figures/01-stages/)
    """
    figures_dir = get_project_path("figures") / get_experiment_name(caller_file)
    if create:
        figures_dir.mkdir(parents=True, exist_ok=True)
    return figures_dir
