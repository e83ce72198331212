"""Configuration utilities.

Repository paths, the optional project_config.yaml and cleanup helpers.
"""

from .paths import get_repo_root
from .project import load_project_config, get_config_section, get_project_path
from .clean import clean_all

__all__ = [
    "get_repo_root",
    "load_project_config",
    "get_config_section",
    "get_project_path",
    "clean_all",
]
