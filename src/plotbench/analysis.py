"""Analysis of benchmark result tables.

Turns per-case summaries into the tables the report is built from: stage
breakdowns, relative speed between stacks, size scaling exponents, and
the narrated findings.
"""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd

from utils.plotting.formatters import format_duration

from .runner import ID_COLUMNS
from .timing import outlier_mask, summarize

# Stages that partition a full draw, in pipeline order
PARTS = ("stat", "table", "render")
_STAGE_ORDER = {s: i for i, s in enumerate(PARTS + ("overhead",))}


# ============================================================================
# Tables
# ============================================================================


def summarize_results(raw: pd.DataFrame, k: float = 1.5) -> pd.DataFrame:
    """Re-aggregate a per-iteration table into one summary row per case."""
    rows = []
    for keys, grp in raw.groupby(ID_COLUMNS, sort=True):
        gc_counts = grp["gc"] if "gc" in grp else None
        s = summarize(grp["time"], k=k, gc_collections=gc_counts)
        rows.append({**dict(zip(ID_COLUMNS, keys)), **s.to_record()})
    return pd.DataFrame(rows)


def flag_outliers(raw: pd.DataFrame, k: float = 1.5) -> pd.DataFrame:
    """Copy of ``raw`` with a boolean ``outlier`` column (Tukey fences per case)."""
    out = raw.copy()
    out["outlier"] = raw.groupby(ID_COLUMNS)["time"].transform(
        lambda t: outlier_mask(t.to_numpy(), k)
    ).astype(bool)
    return out


def stage_breakdown(summary: pd.DataFrame) -> pd.DataFrame:
    """Split each full draw into its stages.

    Returns a long table with one row per (scenario, stack, device, n,
    stage) holding the stage median, the full-draw median and the stage's
    share of it. The ``overhead`` pseudo-stage is ``full - sum(stages)``;
    it can be negative because stages are timed in separate runs.
    """
    keys = ["scenario", "stack", "device", "n"]
    wide = summary.pivot_table(index=keys, columns="stage", values="median", aggfunc="median")
    if "full" not in wide.columns:
        raise ValueError("stage_breakdown needs 'full' stage medians")
    wide = wide.dropna(subset=["full"])

    parts = [s for s in PARTS if s in wide.columns]
    wide["overhead"] = wide["full"] - wide[parts].fillna(0.0).sum(axis=1)

    long = (
        wide[parts + ["overhead"]]
        .reset_index()
        .melt(id_vars=keys, var_name="stage", value_name="median")
        .dropna(subset=["median"])
    )
    long = long.merge(wide["full"].rename("full").reset_index(), on=keys)
    long["share"] = long["median"] / long["full"]
    long["_order"] = long["stage"].map(_STAGE_ORDER)
    return long.sort_values(keys + ["_order"]).drop(columns="_order").reset_index(drop=True)


def dominant_stage(breakdown: pd.DataFrame) -> pd.DataFrame:
    """The stage with the largest share of each full draw (overhead excluded)."""
    keys = ["scenario", "stack", "device", "n"]
    stages = breakdown[breakdown["stage"] != "overhead"]
    if stages.empty:
        return stages.copy()
    idx = stages.groupby(keys)["share"].idxmax()
    return stages.loc[idx].reset_index(drop=True)


def relative_speed(summary: pd.DataFrame, baseline: str = "immediate") -> pd.DataFrame:
    """Median of every stack relative to ``baseline`` for matching cases."""
    keys = ["scenario", "stage", "device", "n"]
    base = summary.loc[summary["stack"] == baseline, keys + ["median"]]
    if base.empty:
        raise ValueError(f"No rows for baseline stack '{baseline}'")
    base = base.rename(columns={"median": "baseline_median"})

    out = summary[["stack"] + keys + ["median"]].merge(base, on=keys, how="inner")
    out["ratio"] = out["median"] / out["baseline_median"]
    return out.sort_values(keys + ["stack"]).reset_index(drop=True)


def scaling_exponents(summary: pd.DataFrame) -> pd.DataFrame:
    """Log-log slope of median time vs n per (scenario, stack, stage, device).

    A slope of 1 means time grows linearly with n. Groups with fewer than
    two distinct sizes are dropped.
    """
    group_keys = ["scenario", "stack", "stage", "device"]
    rows = []
    for keys, grp in summary.groupby(group_keys, sort=True):
        grp = grp[(grp["n"] > 0) & (grp["median"] > 0)]
        if grp["n"].nunique() < 2:
            continue
        slope, _ = np.polyfit(np.log10(grp["n"]), np.log10(grp["median"]), 1)
        rows.append({**dict(zip(group_keys, keys)), "exponent": float(slope), "n_sizes": int(grp["n"].nunique())})
    return pd.DataFrame(rows, columns=group_keys + ["exponent", "n_sizes"])


# ============================================================================
# Narrative
# ============================================================================


def _reference_device(df: pd.DataFrame) -> str:
    devices = list(df["device"].unique())
    return "agg" if "agg" in devices else devices[0]


def findings(summary: pd.DataFrame) -> List[str]:
    """Narrate where time is spent, one sentence per finding."""
    notes: List[str] = []
    if summary.empty:
        return notes

    # Declarative vs immediate, end to end, at the largest size
    full = summary[summary["stage"] == "full"]
    if not full.empty and {"declarative", "immediate"} <= set(full["stack"]):
        ratios = relative_speed(full, baseline="immediate")
        ratios = ratios[ratios["stack"] == "declarative"]
        for scenario, grp in ratios.groupby("scenario", sort=True):
            grp = grp[grp["device"] == _reference_device(grp)]
            row = grp.loc[grp["n"].idxmax()]
            notes.append(
                f"{scenario} (n={row['n']}, {row['device']}): the declarative stack takes "
                f"{row['ratio']:.1f}x as long as the immediate-mode stack end to end "
                f"({format_duration(row['median'])} vs {format_duration(row['baseline_median'])})."
            )

    # Where the declarative stack spends its time
    if not full.empty:
        try:
            breakdown = stage_breakdown(summary)
        except ValueError:
            breakdown = pd.DataFrame()
        if not breakdown.empty:
            top = dominant_stage(breakdown)
            for (scenario, stack), grp in top.groupby(["scenario", "stack"], sort=True):
                grp = grp[grp["device"] == _reference_device(grp)]
                row = grp.loc[grp["n"].idxmax()]
                notes.append(
                    f"{scenario}, {stack} stack (n={row['n']}): the {row['stage']} stage "
                    f"dominates with {row['share']:.0%} of the full draw."
                )

    # Devices, compared on render-stage cases measured on every device
    render = summary[summary["stage"] == "render"]
    if render["device"].nunique() > 1:
        matched = render.pivot_table(
            index=["scenario", "stack", "n"], columns="device", values="median", aggfunc="median"
        ).dropna()
    else:
        matched = pd.DataFrame()
    if not matched.empty:
        by_device = matched.median().sort_values()
        notes.append(
            f"Across {len(matched)} render-stage cases measured on every device, "
            f"{by_device.index[0]} is the fastest device "
            f"({format_duration(by_device.iloc[0])} median) and {by_device.index[-1]} the slowest "
            f"({format_duration(by_device.iloc[-1])})."
        )

    # Scaling with problem size
    exponents = scaling_exponents(full) if not full.empty else pd.DataFrame()
    for _, row in exponents.iterrows():
        if row["device"] != _reference_device(exponents):
            continue
        notes.append(
            f"{row['scenario']}, {row['stack']} stack: full-draw time grows as "
            f"n^{row['exponent']:.2f} over {row['n_sizes']} sizes."
        )

    return notes
