"""Plotting utilities for benchmark figures.

This module provides:
- Automatic style application (seaborn + custom scientific style)
- Duration formatting for labels and tick marks
- Fixed color palettes for stacks, stages and devices

Automatically applies styles on import:
    from utils import plotting  # Styles applied!

Or import specific utilities:
    from utils.plotting import format_duration, palettes
"""

from .styles import apply_styles
from .formatters import (
    format_duration,
    duration_formatter,
)
from . import palettes

# Apply styles when module is imported
apply_styles()

__all__ = [
    "apply_styles",
    "format_duration",
    "duration_formatter",
    "palettes",
]
