"""Project configuration utilities.

Loads project_config.yaml from the repository root (optional) on top of
DEFAULT_CONFIG.
"""

import copy
from pathlib import Path
from typing import Any, Dict

import yaml

from .paths import get_repo_root


DEFAULT_CONFIG = {
    "paths": {
        "data": "data",
        "figures": "figures",
        "report": "docs/report",
        "suites": "Experiments/conf/suites.yaml",
    },
    "runners": {
        "compute_timeout": 1800,
        "plot_timeout": 300,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base, one level deep for mapping sections."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_project_config(config_name: str = "project_config.yaml") -> Dict[str, Any]:
    """Load project configuration from YAML.

    Parameters
    ----------
    config_name : str
        Name of the config file in repo root.

    Returns
    -------
    dict
        Parsed configuration combined with defaults.
    """
    config_path = get_repo_root() / config_name

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, "r") as f:
        user_config = yaml.safe_load(f) or {}
    if not isinstance(user_config, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(user_config).__name__}")
    return _merge(DEFAULT_CONFIG, user_config)


def get_config_section(section: str) -> Dict[str, Any]:
    """Get a specific section from project config.

    Parameters
    ----------
    section : str
        Section name (e.g., "paths", "runners").

    Returns
    -------
    dict
        Section contents, or empty dict if not found.
    """
    config = load_project_config()
    return config.get(section, {})


def get_project_path(name: str) -> Path:
    """Absolute path of a configured project directory or file (``paths`` section)."""
    paths = get_config_section("paths")
    if name not in paths:
        raise KeyError(f"No path '{name}' configured. Available: {list(paths)}")
    return get_repo_root() / paths[name]
