"""
Device Comparison Benchmark
===========================

Render-stage time of already assembled figures on each output device
(agg raster, png/svg/pdf encoders and the void renderer).

"""
import logging

from plotbench import load_suite, run_suite, save_results
from utils.config import get_project_path
from utils.datatools import get_data_dir

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

cases = load_suite(get_project_path("suites"), "devices")
data_dir = get_data_dir()

print(f"\nRunning {len(cases)} device cases...")
print("-" * 60)

summary, raw = run_suite(cases)

save_results(summary, data_dir / "summary.parquet")
save_results(raw, data_dir / "raw.parquet")
