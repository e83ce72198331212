"""Color palettes for benchmark figures.

Colorblind-friendly (Paul Tol's vibrant) with fixed assignments so a
stack, stage or device keeps its colour across every figure.
"""

from typing import Dict, List

# Colorblind-friendly categorical palette (Paul Tol's vibrant)
CATEGORICAL = [
    "#0077BB",  # Blue
    "#EE7733",  # Orange
    "#009988",  # Teal
    "#CC3311",  # Red
    "#33BBEE",  # Cyan
    "#EE3377",  # Magenta
    "#BBBBBB",  # Grey
]

STACKS = {
    "declarative": "#0077BB",
    "immediate": "#EE7733",
}

STAGES = {
    "full": "#332288",
    "stat": "#009988",
    "table": "#33BBEE",
    "render": "#CC3311",
    "overhead": "#BBBBBB",  # Grey for the unattributed remainder
}

DEVICES = {
    "agg": "#0077BB",
    "png": "#33BBEE",
    "svg": "#009988",
    "pdf": "#EE7733",
    "void": "#BBBBBB",
}


def get_categorical(n: int = None) -> List[str]:
    """Get categorical palette colors.

    Parameters
    ----------
    n : int, optional
        Number of colors needed. If None, returns full palette.

    Returns
    -------
    list of str
        Hex color codes
    """
    if n is None:
        return CATEGORICAL.copy()
    return (CATEGORICAL * ((n // len(CATEGORICAL)) + 1))[:n]


def palette_for(levels, mapping: Dict[str, str]) -> Dict[str, str]:
    """Map each level to its fixed colour, unknown levels cycle the categorical palette."""
    levels = list(levels)
    extra = iter(get_categorical(len(levels)))
    return {lvl: mapping[lvl] if lvl in mapping else next(extra) for lvl in levels}
