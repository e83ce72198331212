"""
Stage Breakdown Benchmark
=========================

Time every pipeline stage (full, stat, table, render) of the declarative
and immediate-mode stacks on each scenario at a fixed size.

"""
import logging

from plotbench import load_suite, run_suite, save_results
from utils.config import get_project_path
from utils.datatools import get_data_dir

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

# %%
# Cases
# -----
#
# Expanded from the ``stages`` experiment of the suite file. The immediate
# stack has no stat stage; those cases are skipped by the runner.

cases = load_suite(get_project_path("suites"), "stages")
data_dir = get_data_dir()

print(f"\nRunning {len(cases)} stage cases...")
print("-" * 60)

# %%
# Run and Save
# ------------

summary, raw = run_suite(cases)

save_results(summary, data_dir / "summary.parquet")
save_results(raw, data_dir / "raw.parquet")

print(f"\n  {len(summary)} cases, {len(raw)} timed runs -> {data_dir}")
