"""Figures and the markdown report.

Plots:
1. Median time per stage and stack, faceted by scenario
2. Median vs n (log-log) per stack and stage
3. Stage shares of the full draw (stacked bars)
4. Render-stage medians per device
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from utils import plotting  # Apply scientific style
from utils.plotting import palettes
from utils.plotting.formatters import duration_formatter, format_duration

from . import analysis

log = logging.getLogger(__name__)

STAGE_ORDER = ["full", "stat", "table", "render", "overhead"]


def _ordered(levels: Iterable[str], order: List[str]) -> List[str]:
    levels = set(levels)
    return [s for s in order if s in levels] + sorted(levels - set(order))


def _headline_cases(df: pd.DataFrame) -> pd.DataFrame:
    """Rows at the headline n of each scenario, on agg when it was measured.

    The headline n is the largest size with per-stage timings, or the
    largest size overall for scenarios only timed end to end.
    """
    if "agg" in set(df["device"]):
        df = df[df["device"] == "agg"]
    largest = df.groupby("scenario")["n"].max()
    staged = df[df["stage"] != "full"].groupby("scenario")["n"].max()
    headline = staged.reindex(largest.index).fillna(largest)
    return df[df["n"] == df["scenario"].map(headline)]


def _scaling_rows(summary: pd.DataFrame) -> pd.DataFrame:
    if "agg" in set(summary["device"]):
        return summary[summary["device"] == "agg"]
    return summary


def _save(fig, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    log.info(f"Saved {path}")
    return path


def plot_stage_bars(summary: pd.DataFrame, path: Path | str) -> Path:
    """Bar chart of median time per stage and stack, one panel per scenario."""
    df = _headline_cases(summary)
    if df.empty:
        raise ValueError("No rows to plot")

    scenarios = sorted(df["scenario"].unique())
    g = sns.catplot(
        data=df,
        kind="bar",
        x="stage",
        y="median",
        hue="stack",
        col="scenario",
        col_order=scenarios,
        col_wrap=min(3, len(scenarios)),
        order=_ordered(df["stage"].unique(), STAGE_ORDER),
        palette=palettes.palette_for(sorted(df["stack"].unique()), palettes.STACKS),
        errorbar=None,
        sharey=False,
        height=3.0,
        aspect=1.1,
    )
    g.set_axis_labels("Stage", "Median time")
    g.set_titles("{col_name}")
    for ax in g.axes.flat:
        ax.yaxis.set_major_formatter(duration_formatter())
    return _save(g.figure, path)


def plot_scaling(summary: pd.DataFrame, path: Path | str) -> Path:
    """Median time vs n on log-log axes per stack and stage."""
    df = _scaling_rows(summary)
    if df["n"].nunique() < 2:
        raise ValueError("Scaling plot needs at least two sizes")

    scenarios = sorted(df["scenario"].unique())
    g = sns.relplot(
        data=df,
        kind="line",
        x="n",
        y="median",
        hue="stack",
        style="stage",
        style_order=_ordered(df["stage"].unique(), STAGE_ORDER),
        col="scenario",
        col_order=scenarios,
        col_wrap=min(3, len(scenarios)),
        palette=palettes.palette_for(sorted(df["stack"].unique()), palettes.STACKS),
        markers=True,
        dashes=True,
        height=3.0,
        aspect=1.1,
        facet_kws={"sharey": False},
    )
    g.set(xscale="log", yscale="log")
    g.set_axis_labels("n", "Median time [s]")
    g.set_titles("{col_name}")
    return _save(g.figure, path)


def plot_stage_shares(breakdown: pd.DataFrame, path: Path | str) -> Path:
    """Stacked bars of each stage's share of the full draw."""
    # Cases timed only end to end carry nothing but overhead
    measured = breakdown.groupby(["scenario", "stack", "device", "n"])["stage"].transform(
        lambda s: (s != "overhead").any()
    )
    df = _headline_cases(breakdown[measured.astype(bool)])
    if df.empty:
        raise ValueError("No rows to plot")

    scenarios = sorted(df["scenario"].unique())
    fig, axes = plt.subplots(1, len(scenarios), figsize=(3.2 * len(scenarios), 3.4), squeeze=False)

    for ax, scenario in zip(axes[0], scenarios):
        shares = (
            df[df["scenario"] == scenario]
            .pivot_table(index="stack", columns="stage", values="share", aggfunc="first")
            .clip(lower=0.0)
        )
        shares = shares[_ordered(shares.columns, STAGE_ORDER)]
        shares.plot(
            kind="bar",
            stacked=True,
            ax=ax,
            color=[palettes.STAGES.get(s, "#BBBBBB") for s in shares.columns],
            width=0.7,
            legend=False,
        )
        ax.set_title(scenario)
        ax.set_xlabel("")
        ax.set_ylabel("Share of full draw")
        ax.tick_params(axis="x", rotation=0)

    handles, labels = axes[0][0].get_legend_handles_labels()
    fig.legend(handles, labels, loc="upper center", ncol=len(labels), bbox_to_anchor=(0.5, 1.05))
    fig.tight_layout()
    return _save(fig, path)


def plot_devices(summary: pd.DataFrame, path: Path | str) -> Path:
    """Render-stage medians per stack, one bar per device, one panel per scenario."""
    df = summary[summary["stage"] == "render"]
    if df.empty:
        raise ValueError("No render-stage rows to plot")
    largest = df.groupby("scenario")["n"].transform("max")
    df = df[df["n"] == largest]

    scenarios = sorted(df["scenario"].unique())
    devices = _ordered(df["device"].unique(), list(palettes.DEVICES))
    g = sns.catplot(
        data=df,
        kind="bar",
        x="stack",
        y="median",
        hue="device",
        hue_order=devices,
        col="scenario",
        col_order=scenarios,
        col_wrap=min(3, len(scenarios)),
        palette=palettes.palette_for(devices, palettes.DEVICES),
        errorbar=None,
        sharey=False,
        height=3.0,
        aspect=1.1,
    )
    g.set_axis_labels("Stack", "Median render time")
    g.set_titles("{col_name}")
    for ax in g.axes.flat:
        ax.yaxis.set_major_formatter(duration_formatter())
    return _save(g.figure, path)


def make_figures(summary: pd.DataFrame, fig_dir: Path | str) -> List[Path]:
    """Produce every figure the data supports, skipping the others."""
    fig_dir = Path(fig_dir)
    figures = []

    figures.append(plot_stage_bars(summary, fig_dir / "stage_bars.pdf"))
    if _scaling_rows(summary)["n"].nunique() > 1:
        figures.append(plot_scaling(summary, fig_dir / "scaling.pdf"))
    if "full" in set(summary["stage"]):
        breakdown = analysis.stage_breakdown(summary)
        if (breakdown["stage"] != "overhead").any():
            figures.append(plot_stage_shares(breakdown, fig_dir / "stage_shares.pdf"))
    if (summary["stage"] == "render").any():
        figures.append(plot_devices(summary, fig_dir / "devices.pdf"))
    return figures


# ============================================================================
# Markdown
# ============================================================================

RESULT_COLUMNS = ["scenario", "stack", "stage", "device", "n", "median", "iqr", "n_iter", "n_outliers"]


def _table(df: pd.DataFrame, duration_columns: Iterable[str] = ()) -> str:
    formatters = {c: format_duration for c in duration_columns if c in df.columns}
    return "```text\n" + df.to_string(index=False, formatters=formatters) + "\n```\n"


def write_report(
    summary: pd.DataFrame,
    path: Path | str,
    figures: Optional[Iterable[Path | str]] = None,
) -> Path:
    """Write the markdown report: findings, result tables and figure links."""
    if summary.empty:
        raise ValueError("Cannot write a report from an empty summary")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "# Rendering performance report",
        "",
        f"{len(summary)} cases over scenarios {', '.join(sorted(summary['scenario'].unique()))}; "
        f"stacks {', '.join(sorted(summary['stack'].unique()))}.",
        "",
        "## Findings",
        "",
    ]
    notes = analysis.findings(summary)
    lines += [f"- {note}" for note in notes] or ["No findings (not enough cases to compare)."]
    lines += ["", "## Results", "", _table(summary[RESULT_COLUMNS], ["median", "iqr"])]

    stages = set(summary["stage"])
    if "full" in stages and len(stages) > 1:
        breakdown = analysis.stage_breakdown(summary)
        lines += ["## Stage breakdown", "", _table(breakdown, ["median", "full"])]

    full = summary[summary["stage"] == "full"]
    if {"declarative", "immediate"} <= set(full["stack"]):
        ratios = analysis.relative_speed(full, baseline="immediate")
        lines += ["## Relative speed (full draw, immediate = 1)", "", _table(ratios, ["median", "baseline_median"])]

    exponents = analysis.scaling_exponents(summary)
    if not exponents.empty:
        lines += ["## Scaling exponents", "", _table(exponents)]

    if figures:
        lines += ["## Figures", ""]
        for fig in figures:
            fig = Path(fig)
            rel = os.path.relpath(fig, path.parent)
            lines.append(f"![{fig.stem}]({Path(rel).as_posix()})")
        lines.append("")

    path.write_text("\n".join(lines) + "\n")
    log.info(f"Wrote report to {path}")
    return path
