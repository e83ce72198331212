"""Style application for benchmark figures.

Seaborn's style as the base with the bundled scientific.mplstyle on top.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt

log = logging.getLogger(__name__)


def get_style_path() -> Path:
    """Return path to the scientific.mplstyle file."""
    return Path(__file__).parent / "scientific.mplstyle"


def apply_styles(base_style: str = "seaborn-v0_8") -> None:
    """Apply seaborn style and custom scientific style.

    Parameters
    ----------
    base_style : str, default "seaborn-v0_8"
        Base matplotlib style to use. Skipped with a debug message if unavailable.
    """
    try:
        plt.style.use(base_style)
    except OSError:
        log.debug(f"Base style '{base_style}' not available")

    style_path = get_style_path()
    if style_path.exists():
        plt.style.use(str(style_path))
