#!/usr/bin/env python3
"""Main entry point for the plotting benchmark - CLI driven."""

import argparse
import logging
import sys
from pathlib import Path

# Ensure src directory is in python path
sys.path.append(str(Path(__file__).parent / "src"))

from utils import runners  # noqa: E402
from utils.config import clean_all, get_project_path  # noqa: E402

log = logging.getLogger("plotbench")


def run_one_suite(suite_file: Path, experiment: str) -> None:
    """Run one experiment of a suite file and store its results under the data dir."""
    from plotbench import load_suite, run_suite, save_results

    cases = load_suite(suite_file, experiment)
    log.info(f"Running {len(cases)} cases from '{experiment}' ({suite_file})")
    summary, raw = run_suite(cases)
    if summary.empty:
        raise ValueError(f"Experiment '{experiment}' produced no results (all cases skipped?)")

    out_dir = get_project_path("data") / experiment
    save_results(summary, out_dir / "summary.parquet")
    save_results(raw, out_dir / "raw.parquet")


def list_suite(suite_file: Path) -> None:
    """Print the experiments of a suite file with their case counts."""
    from plotbench import list_experiments

    experiments = list_experiments(suite_file)
    print(f"\nExperiments in {suite_file}:")
    for name, n_cases in experiments.items():
        print(f"  {name:<20} {n_cases:>5} cases")
    print()


def build_report() -> Path:
    """Combine every stored summary into figures and the markdown report."""
    import pandas as pd

    from plotbench import load_results
    from plotbench.report import make_figures, write_report

    data_dir = get_project_path("data")
    paths = sorted(data_dir.rglob("summary.parquet"))
    if not paths:
        raise FileNotFoundError(f"No results under {data_dir}. Run --compute or --suite first.")

    summary = pd.concat([load_results(p) for p in paths], ignore_index=True)
    # A case measured by several experiments keeps its latest measurement
    summary = summary.drop_duplicates(subset=["scenario", "stack", "stage", "device", "n"], keep="last")
    log.info(f"Loaded {len(summary)} cases from {len(paths)} result files")

    report_dir = get_project_path("report")
    figures = make_figures(summary, report_dir / "figures")
    return write_report(summary, report_dir / "report.md", figures)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Rendering pipeline benchmark: declarative vs immediate-mode plotting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    actions = parser.add_argument_group("Actions")
    actions.add_argument("--compute", action="store_true", help="Run all compute scripts (sequentially)")
    actions.add_argument("--plot", action="store_true", help="Run all plotting scripts (in parallel)")
    actions.add_argument("--experiment", metavar="NAME", help="Run one experiment of the suite file")
    actions.add_argument("--list", action="store_true", help="List the experiments in the suite file")
    actions.add_argument("--report", action="store_true", help="Write the markdown report from stored results")
    actions.add_argument("--copy-plots", action="store_true", help="Copy experiment figures to the report directory")
    actions.add_argument("--clean", action="store_true", help="Clean all generated files and caches")

    options = parser.add_argument_group("Options")
    options.add_argument("--suite", metavar="FILE", type=Path, help="Suite YAML file (default: configured paths.suites)")
    options.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    if len(sys.argv) == 1:
        parser.print_help()
        sys.exit(1)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    suite_file = args.suite or get_project_path("suites")

    try:
        # Execute commands in logical order
        if args.clean:
            clean_all()

        if args.list:
            list_suite(suite_file)

        if args.experiment:
            run_one_suite(suite_file, args.experiment)

        if args.compute:
            _, failed = runners.run_compute_scripts()
            if failed:
                raise RuntimeError(f"{failed} compute script(s) failed")

        if args.plot:
            _, failed = runners.run_plot_scripts()
            if failed:
                raise RuntimeError(f"{failed} plot script(s) failed")

        if args.report:
            path = build_report()
            print(f"\n  → Report: {path}\n")

        if args.copy_plots and not runners.copy_to_report():
            raise RuntimeError("Copying figures failed")

    except (ValueError, KeyError, FileNotFoundError, RuntimeError) as e:
        log.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
