"""
Visualization of the Stage Breakdown
====================================

Median time per stage and the share of the full draw each stage takes.

Usage:
    python Experiments/01-stages/plot_stages.py
"""

from plotbench import load_results
from plotbench.analysis import stage_breakdown, dominant_stage
from plotbench.report import plot_stage_bars, plot_stage_shares
from utils import plotting  # Apply scientific style
from utils.datatools import get_data_dir, get_figures_dir

data_dir = get_data_dir()
fig_dir = get_figures_dir()

summary = load_results(data_dir / "summary.parquet")
print(f"Loaded {len(summary)} cases from {data_dir}")

# %%
# Median Time per Stage
# ---------------------

plot_stage_bars(summary, fig_dir / "stage_bars.pdf")

# %%
# Stage Shares
# ------------

breakdown = stage_breakdown(summary)
plot_stage_shares(breakdown, fig_dir / "stage_shares.pdf")

top = dominant_stage(breakdown)
print("\nDominant stage per case:")
print(top[["scenario", "stack", "stage", "share"]].to_string(index=False))
print(f"\nFigures saved to {fig_dir}")
