"""Immediate-mode stack: raw matplotlib artists.

Artists are placed directly on a Figure in figure-fraction units. There are
no axes, scales, guides or statistics: everything derived from the data
(unit coordinates, panel placement, group means, histogram counts) is
computed by ``specify`` before any timing starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

from ..data import normalize
from .base import BaseStack


MARGIN = 0.05
PANEL_GAP = 0.03
STRIP_HEIGHT = 0.06
PANEL_FACE = "#EAEAF2"
HIST_BINS = 30


@dataclass
class Scene:
    """Precomputed geometry for one scenario, in figure units."""

    scenario: str
    geometry: dict


# ============================================================================
# Geometry (untimed)
# ============================================================================


def _unit(values, lo: float, hi: float) -> np.ndarray:
    """Map [lo, hi] onto [0, 1]; a degenerate range maps to 0.5."""
    arr = np.asarray(values, dtype=np.float64)
    if hi == lo:
        return np.full_like(arr, 0.5)
    return (arr - lo) / (hi - lo)


def _to_figure(unit: np.ndarray, start: float = MARGIN, extent: float = 1.0 - 2 * MARGIN) -> np.ndarray:
    return start + unit * extent


def _bar_vertices(left, right, bottom, top) -> np.ndarray:
    """Rectangles as an (n, 4, 2) vertex array."""
    return np.stack(
        [
            np.column_stack([left, bottom]),
            np.column_stack([left, top]),
            np.column_stack([right, top]),
            np.column_stack([right, bottom]),
        ],
        axis=1,
    )


def _bars(left, right, heights) -> np.ndarray:
    lo, hi = left.min(), right.max()
    top = _to_figure(_unit(heights, 0.0, max(float(np.max(heights)), 0.0)))
    return _bar_vertices(
        _to_figure(_unit(left, lo, hi)),
        _to_figure(_unit(right, lo, hi)),
        np.full(len(heights), MARGIN),
        top,
    )


def _points_geometry(data) -> dict:
    return {"x": normalize(data["x"], MARGIN), "y": normalize(data["y"], MARGIN)}


def _lines_geometry(data) -> dict:
    pts = _points_geometry(data)
    xy = np.column_stack([pts["x"], pts["y"]])
    _, starts = np.unique(data["group"].to_numpy(), return_index=True)
    return {"segments": np.split(xy, np.sort(starts)[1:])}


def _polygons_geometry(data) -> dict:
    x = data["x"].to_numpy()
    spacing = np.diff(np.unique(x))
    half = 0.5 * (spacing.min() if spacing.size else 1.0)
    return {"verts": _bars(x - half, x + half, data["y"].to_numpy())}


def _histogram_geometry(data) -> dict:
    counts, edges = np.histogram(data["x"].to_numpy(), bins=HIST_BINS)
    return {"verts": _bars(edges[:-1], edges[1:], counts)}


def _composite_geometry(data) -> dict:
    x_lo, x_hi = data["x"].min(), data["x"].max()
    y_lo, y_hi = data["y"].min(), data["y"].max()
    means = data.groupby(["panel", "group", "x"], sort=True)["y"].mean().reset_index()

    panel_names = sorted(data["panel"].unique())
    group_names = sorted(data["group"].unique())
    k = len(panel_names)
    width = (1.0 - 2 * MARGIN - PANEL_GAP * (k - 1)) / k
    height = 1.0 - 2 * MARGIN - STRIP_HEIGHT

    panels = []
    for i, panel in enumerate(panel_names):
        left = MARGIN + i * (width + PANEL_GAP)
        in_panel = data[data["panel"] == panel]
        panel_means = means[means["panel"] == panel]

        groups = []
        for j, group in enumerate(group_names):
            pts = in_panel[in_panel["group"] == group]
            avg = panel_means[panel_means["group"] == group]
            groups.append(
                {
                    "color": f"C{j}",
                    "points": (
                        _to_figure(_unit(pts["x"], x_lo, x_hi), left, width),
                        _to_figure(_unit(pts["y"], y_lo, y_hi), MARGIN, height),
                    ),
                    "mean": (
                        _to_figure(_unit(avg["x"], x_lo, x_hi), left, width),
                        _to_figure(_unit(avg["y"], y_lo, y_hi), MARGIN, height),
                    ),
                }
            )
        panels.append(
            {"label": str(panel), "bounds": (left, MARGIN, width, height), "groups": groups}
        )

    return {"panels": panels}


_GEOMETRY = {
    "points": _points_geometry,
    "lines": _lines_geometry,
    "polygons": _polygons_geometry,
    "composite": _composite_geometry,
    "histogram": _histogram_geometry,
}


# ============================================================================
# Artists (timed)
# ============================================================================


def _draw_points(fig: Figure, geometry: dict) -> None:
    fig.add_artist(
        Line2D(
            geometry["x"], geometry["y"],
            linestyle="none", marker="o", markersize=2, color="C0",
            transform=fig.transFigure,
        )
    )


def _draw_lines(fig: Figure, geometry: dict) -> None:
    fig.add_artist(
        LineCollection(geometry["segments"], linewidths=0.8, colors="C0", transform=fig.transFigure)
    )


def _draw_polygons(fig: Figure, geometry: dict) -> None:
    fig.add_artist(
        PolyCollection(
            geometry["verts"], facecolors="C0", edgecolors="white", linewidths=0.5,
            alpha=0.7, transform=fig.transFigure,
        )
    )


def _draw_composite(fig: Figure, geometry: dict) -> None:
    for panel in geometry["panels"]:
        left, bottom, width, height = panel["bounds"]
        fig.add_artist(
            Rectangle((left, bottom), width, height, facecolor=PANEL_FACE,
                      edgecolor="none", transform=fig.transFigure)
        )
        fig.text(left + width / 2, bottom + height + STRIP_HEIGHT / 2, panel["label"],
                 ha="center", va="center")
        for group in panel["groups"]:
            fig.add_artist(
                Line2D(*group["points"], linestyle="none", marker="o", markersize=2,
                       color=group["color"], transform=fig.transFigure)
            )
            fig.add_artist(
                Line2D(*group["mean"], linewidth=1.5, color=group["color"],
                       transform=fig.transFigure)
            )


_DRAW = {
    "points": _draw_points,
    "lines": _draw_lines,
    "polygons": _draw_polygons,
    "composite": _draw_composite,
    "histogram": _draw_polygons,
}


class ImmediateStack(BaseStack):
    """Matplotlib artists drawn straight onto a figure."""

    name = "immediate"
    stages = ("full", "table", "render")

    def specify(self, scenario: str, data) -> Scene:
        try:
            make_geometry = _GEOMETRY[scenario]
        except KeyError:
            raise ValueError(f"No immediate-mode geometry for scenario: {scenario}") from None
        return Scene(scenario, make_geometry(data))

    def assemble(self, scene: Scene) -> Figure:
        fig = Figure(figsize=self._figsize(), dpi=self.dpi)
        _DRAW[scene.scenario](fig, scene.geometry)
        return fig

    def _prepare_stage(
        self, stage: str, scene: Scene
    ) -> Tuple[Optional[Callable], Callable]:
        if stage == "table":
            return None, lambda: self.assemble(scene)
        return super()._prepare_stage(stage, scene)
