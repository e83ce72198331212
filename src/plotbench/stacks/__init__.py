"""Plotting stacks under comparison.

- DeclarativeStack: seaborn.objects (stages: full, stat, table, render)
- ImmediateStack: raw matplotlib artists (stages: full, table, render)
"""

from .base import BaseStack
from .declarative import DeclarativeStack
from .immediate import ImmediateStack

_STACKS = {cls.name: cls for cls in (DeclarativeStack, ImmediateStack)}

STAGES = ("full", "stat", "table", "render")


def available_stacks() -> list:
    return list(_STACKS)


def get_stack(name: str, **kwargs) -> BaseStack:
    """Instantiate a stack by name. kwargs: width, height, dpi."""
    try:
        cls = _STACKS[name]
    except KeyError:
        raise ValueError(f"Unknown stack: {name}. Available: {available_stacks()}") from None
    return cls(**kwargs)


__all__ = [
    "BaseStack",
    "DeclarativeStack",
    "ImmediateStack",
    "STAGES",
    "available_stacks",
    "get_stack",
]
