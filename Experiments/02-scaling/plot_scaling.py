"""
Visualization of Size Scaling
=============================

Median full-draw time vs n on log-log axes, with the fitted exponents.

Usage:
    python Experiments/02-scaling/plot_scaling.py
"""

from plotbench import load_results
from plotbench.analysis import scaling_exponents, relative_speed
from plotbench.report import plot_scaling
from utils import plotting  # Apply scientific style
from utils.datatools import get_data_dir, get_figures_dir

data_dir = get_data_dir()
fig_dir = get_figures_dir()

summary = load_results(data_dir / "summary.parquet")
print(f"Loaded {len(summary)} cases from {data_dir}")

plot_scaling(summary, fig_dir / "scaling.pdf")

# %%
# Exponents and Slowdown
# ----------------------

exponents = scaling_exponents(summary)
print("\nScaling exponents (median ~ n^k):")
print(exponents.to_string(index=False, float_format="%.2f"))

ratios = relative_speed(summary, baseline="immediate")
ratios = ratios[ratios["stack"] == "declarative"]
ratios.to_csv(fig_dir / "relative_speed.csv", index=False)
print(f"\nFigures saved to {fig_dir}")
