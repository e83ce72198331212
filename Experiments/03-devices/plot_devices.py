"""
Visualization of the Device Comparison
======================================

Usage:
    python Experiments/03-devices/plot_devices.py
"""

from plotbench import load_results
from plotbench.report import plot_devices
from utils import plotting  # Apply scientific style
from utils.datatools import get_data_dir, get_figures_dir
from utils.plotting import format_duration

data_dir = get_data_dir()
fig_dir = get_figures_dir()

summary = load_results(data_dir / "summary.parquet")
print(f"Loaded {len(summary)} cases from {data_dir}")

plot_devices(summary, fig_dir / "devices.pdf")

by_device = summary.groupby(["device", "stack"])["median"].median().unstack("stack")
print("\nMedian render time per device:")
print(by_device.to_string(float_format=format_duration))
print(f"\nFigures saved to {fig_dir}")
