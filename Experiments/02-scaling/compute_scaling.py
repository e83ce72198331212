"""
Size Scaling Benchmark
======================

Full-draw time of both stacks as the number of rows grows.

"""
import logging

import pandas as pd

from plotbench import load_suite, run_suite, save_results
from utils.config import get_project_path
from utils.datatools import get_data_dir

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

# %%
# Cases
# -----
#
# Polygons get their own, smaller size range.

suite = get_project_path("suites")
cases = load_suite(suite, "scaling") + load_suite(suite, "scaling_polygons")
data_dir = get_data_dir()

print(f"\nRunning {len(cases)} scaling cases...")
print("-" * 60)

# %%
# Run and Save
# ------------

summary, raw = run_suite(cases)

save_results(summary, data_dir / "summary.parquet")
save_results(raw, data_dir / "raw.parquet")

print(f"\n  Sizes: {sorted(pd.unique(summary['n']))}")
