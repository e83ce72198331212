"""Formatting utilities for plot labels and annotations.

Provides:
- Durations with SI prefixes (e.g., 12.3 ms)
- Tick formatters for time axes
"""

from __future__ import annotations

import math

from matplotlib.ticker import FuncFormatter

_PREFIXES = ((1.0, "s"), (1e-3, "ms"), (1e-6, "µs"), (1e-9, "ns"))


def format_duration(seconds: float, precision: int = 3) -> str:
    """Format a duration in seconds with an SI prefix.

    Examples
    --------
    >>> format_duration(0.0123)
    '12.3 ms'
    >>> format_duration(2.5e-6)
    '2.5 µs'
    """
    if seconds is None or not math.isfinite(seconds):
        return "n/a"
    for scale, unit in _PREFIXES:
        if abs(seconds) >= scale:
            return f"{seconds / scale:.{precision}g} {unit}"
    scale, unit = _PREFIXES[-1]
    return f"{seconds / scale:.{precision}g} {unit}"


def duration_formatter(precision: int = 3) -> FuncFormatter:
    """Tick formatter for axes holding durations in seconds."""
    return FuncFormatter(lambda value, _pos: format_duration(value, precision))
