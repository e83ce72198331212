"""Experiment script discovery and execution.

Compute scripts run one at a time (they time things, so they must not
compete for the CPU); plot scripts run in parallel.
"""

import shutil
import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Tuple, Optional

from ..config import get_repo_root, get_config_section, get_project_path


def discover_scripts(pattern: str, directory: str = "Experiments") -> List[Path]:
    """Find scripts in a directory whose name starts with ``pattern``.

    Parameters
    ----------
    pattern : str
        Script name prefix (e.g., "plot", "compute")
    directory : str, default "Experiments"
        Directory to search in, relative to repo root

    Returns
    -------
    list of Path
        Sorted list of matching script paths
    """
    search_dir = get_repo_root() / directory

    if not search_dir.exists():
        return []

    scripts = [
        p
        for p in search_dir.rglob(f"{pattern}*.py")
        if p.is_file() and p.name != "__init__.py"
    ]

    return sorted(scripts)


def _run_single_script(
    script: Path,
    repo_root: Path,
    timeout: int = 180,
    interpreter: Optional[str] = None,
) -> Tuple[Path, bool, Optional[str]]:
    """Run a single script and return its result.

    Returns
    -------
    tuple
        (display_path, success, error_message)
    """
    display_path = script.relative_to(repo_root)
    cmd = (interpreter.split() if interpreter else [sys.executable]) + [str(script)]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=str(repo_root),
        )
    except subprocess.TimeoutExpired:
        return (display_path, False, "timeout")
    except OSError as e:
        return (display_path, False, str(e))

    if result.returncode == 0:
        return (display_path, True, None)
    error_msg = result.stderr[-300:] if result.stderr else ""
    return (display_path, False, f"exit {result.returncode}: {error_msg}")


def run_scripts_parallel(
    scripts: List[Path],
    timeout: int = 180,
    interpreter: Optional[str] = None,
    max_workers: int = None,
) -> Tuple[int, int]:
    """Run scripts in parallel using ThreadPoolExecutor.

    Parameters
    ----------
    scripts : list of Path
        Scripts to run
    timeout : int, default 180
        Timeout per script in seconds
    interpreter : str, optional
        Command to run scripts (current interpreter by default)
    max_workers : int, optional
        Maximum number of parallel workers

    Returns
    -------
    tuple
        (success_count, fail_count)
    """
    if not scripts:
        print("  No scripts to run")
        return 0, 0

    repo_root = get_repo_root()
    print(f"\nRunning {len(scripts)} scripts in parallel...\n")

    success_count = 0
    fail_count = 0

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_run_single_script, script, repo_root, timeout, interpreter)
            for script in scripts
        ]

        for future in as_completed(futures):
            display_path, success, error_msg = future.result()

            if success:
                print(f"  ✓ {display_path}")
                success_count += 1
            else:
                print(f"  ✗ {display_path} ({error_msg})")
                fail_count += 1

    print(f"\n  Summary: {success_count} succeeded, {fail_count} failed\n")
    return success_count, fail_count


def run_scripts_sequential(
    scripts: List[Path],
    timeout: int = 600,
    interpreter: Optional[str] = None,
) -> Tuple[int, int]:
    """Run scripts sequentially.

    Parameters
    ----------
    scripts : list of Path
        Scripts to run
    timeout : int, default 600
        Timeout per script in seconds
    interpreter : str, optional
        Command to run scripts (current interpreter by default)

    Returns
    -------
    tuple
        (success_count, fail_count)
    """
    if not scripts:
        print("  No scripts to run")
        return 0, 0

    repo_root = get_repo_root()
    print(f"\nRunning {len(scripts)} scripts sequentially...\n")

    success_count = 0
    fail_count = 0

    for script in scripts:
        display_path = script.relative_to(repo_root)
        print(f"  → {display_path}...", end=" ", flush=True)

        _, success, error_msg = _run_single_script(script, repo_root, timeout, interpreter)

        if success:
            print("✓")
            success_count += 1
        else:
            print(f"✗ ({error_msg})")
            fail_count += 1

    print(f"\n  Summary: {success_count} succeeded, {fail_count} failed\n")
    return success_count, fail_count


def run_plot_scripts() -> Tuple[int, int]:
    """Run all plot scripts in parallel."""
    timeout = get_config_section("runners").get("plot_timeout", 300)
    return run_scripts_parallel(discover_scripts("plot"), timeout=timeout)


def run_compute_scripts() -> Tuple[int, int]:
    """Run all compute scripts sequentially."""
    timeout = get_config_section("runners").get("compute_timeout", 1800)
    return run_scripts_sequential(discover_scripts("compute"), timeout=timeout)


def copy_to_report(source_dir: Optional[str] = None, dest_dir: Optional[str] = None) -> bool:
    """Copy a directory to the report location.

    Parameters
    ----------
    source_dir : str, optional
        Source directory relative to repo root (configured figures dir by default)
    dest_dir : str, optional
        Destination relative to repo root (``<report>/experiments`` by default,
        apart from the ``<report>/figures`` the markdown report links to)

    Returns
    -------
    bool
        True if successful
    """
    repo_root = get_repo_root()
    source = repo_root / source_dir if source_dir else get_project_path("figures")
    dest = repo_root / dest_dir if dest_dir else get_project_path("report") / "experiments"

    print(f"\nCopying {source} to {dest}...")

    if not source.exists():
        print(f"  No {source} directory found")
        return False

    try:
        if dest.exists():
            shutil.rmtree(dest)
        shutil.copytree(source, dest)
    except OSError as e:
        print(f"  ✗ Failed to copy: {e}")
        return False

    print(f"  ✓ Copied {source.name}/ to {dest}")
    return True
