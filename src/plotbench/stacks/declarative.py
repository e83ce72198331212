"""Declarative stack: seaborn.objects.

``Plot.plot()`` compiles a spec in one call. To time the stat and table
stages separately, ``_Compilation`` walks the same steps as
``Plot._plot`` with a break between the data steps and the artist steps.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

import seaborn.objects as so
from matplotlib.figure import Figure
from seaborn._core.plot import Plotter, theme_context

from .base import BaseStack


def _spec_points(data) -> so.Plot:
    return so.Plot(data, x="x", y="y").add(so.Dot(pointsize=2))


def _spec_lines(data) -> so.Plot:
    return so.Plot(data, x="x", y="y", group="group").add(so.Paths())


def _spec_polygons(data) -> so.Plot:
    return so.Plot(data, x="x", y="y").add(so.Bars())


def _spec_composite(data) -> so.Plot:
    return (
        so.Plot(data, x="x", y="y", color="group")
        .facet(col="panel")
        .add(so.Dot(pointsize=2))
        .add(so.Line(), so.Agg())
    )


def _spec_histogram(data) -> so.Plot:
    return so.Plot(data, x="x").add(so.Bars(), so.Hist(bins=30))


_SPECS = {
    "points": _spec_points,
    "lines": _spec_lines,
    "polygons": _spec_polygons,
    "composite": _spec_composite,
    "histogram": _spec_histogram,
}


class _Compilation:
    """One compilation of a Plot, split into stages.

    prepare_figure -> compute_stats (stat stage) -> assemble (table stage)
    """

    def __init__(self, plot: so.Plot):
        self.plot = plot
        self.theme = plot._theme_with_defaults()
        self.plotter = Plotter(pyplot=False, theme=self.theme)
        self.common = None
        self.layers = None

    @property
    def figure(self) -> Figure:
        return self.plotter._figure

    def prepare_figure(self) -> "_Compilation":
        """Extract variables and initialize the subplot grid."""
        p, plotter = self.plot, self.plotter
        with theme_context(self.theme):
            self.common, self.layers = plotter._extract_data(p)
            plotter._setup_figure(p, self.common, self.layers)
        return self

    def compute_stats(self) -> "_Compilation":
        """Coordinate scales, stat transforms, then semantic scales."""
        p, plotter = self.plot, self.plotter
        coord_vars = [v for v in p._variables if re.match(r"^x|y", v)]
        with theme_context(self.theme):
            plotter._setup_scales(p, self.common, self.layers, coord_vars)
            plotter._compute_stats(p, self.layers)
            plotter._setup_scales(p, self.common, self.layers)
        return self

    def assemble(self) -> Figure:
        """Create the mark artists, legend and final figure decorations."""
        p, plotter = self.plot, self.plotter
        with theme_context(self.theme):
            plotter._data = self.common
            plotter._layers = self.layers
            for layer in self.layers:
                plotter._plot_layer(p, layer)
            plotter._make_legend(p)
            plotter._finalize_figure(p)
        return self.figure


class DeclarativeStack(BaseStack):
    """Grammar-of-graphics plots compiled by seaborn.objects."""

    name = "declarative"
    stages = ("full", "stat", "table", "render")

    def specify(self, scenario: str, data) -> so.Plot:
        try:
            make_spec = _SPECS[scenario]
        except KeyError:
            raise ValueError(f"No declarative spec for scenario: {scenario}") from None
        return (
            make_spec(data)
            .layout(size=self._figsize())
            .theme({"figure.dpi": self.dpi})
        )

    def assemble(self, spec: so.Plot) -> Figure:
        return spec.plot()._figure

    def _prepare_stage(
        self, stage: str, spec: so.Plot
    ) -> Tuple[Optional[Callable], Callable]:
        if stage == "stat":
            return (
                lambda: _Compilation(spec).prepare_figure(),
                _Compilation.compute_stats,
            )
        if stage == "table":
            return (
                lambda: _Compilation(spec).prepare_figure().compute_stats(),
                _Compilation.assemble,
            )
        return super()._prepare_stage(stage, spec)
