"""Utility modules for project management and visualization.

Submodules:
- plotting: Figure styling, duration formatters, palettes
- runners: Experiment script discovery and execution
- config: Project configuration, paths and cleanup

Import examples:
    from utils import plotting     # Auto-applies scientific styles
    from utils import runners      # Script execution
    from utils.config import get_repo_root, load_project_config
"""

from . import plotting, runners, config

from .config import get_repo_root

__all__ = [
    "plotting",
    "runners",
    "config",
    "get_repo_root",
]
