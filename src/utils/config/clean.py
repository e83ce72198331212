"""Cleanup utilities for generated files and caches.

Removes benchmark results, figures, the report and Python caches.
"""

import shutil
from pathlib import Path
from typing import List, Tuple, Optional

from .paths import get_repo_root
from .project import get_config_section


def _remove_item(path: Path) -> Tuple[bool, Optional[str]]:
    """Remove a file or directory.

    Returns
    -------
    tuple
        (success, error_message)
    """
    try:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
        return True, None
    except OSError as e:
        return False, str(e)


def clean_directories(
    directories: Optional[List[str]] = None,
    repo_root: Optional[Path] = None,
) -> Tuple[int, int]:
    """Clean specified directories.

    Parameters
    ----------
    directories : list of str, optional
        Directories to clean (relative to repo root). Defaults to the
        configured figures and report directories plus tool caches.
    repo_root : Path, optional
        Repository root path.

    Returns
    -------
    tuple
        (cleaned_count, failed_count)
    """
    if repo_root is None:
        repo_root = get_repo_root()

    if directories is None:
        paths = get_config_section("paths")
        directories = [
            paths.get("figures", "figures"),
            paths.get("report", "docs/report"),
            "build",
            "dist",
            ".pytest_cache",
        ]

    cleaned, failed = 0, 0
    for d in directories:
        path = repo_root / d
        if path.exists():
            success, _ = _remove_item(path)
            cleaned += success
            failed += not success

    return cleaned, failed


def clean_patterns(
    patterns: Optional[List[str]] = None,
    repo_root: Optional[Path] = None,
) -> Tuple[int, int]:
    """Clean files/directories matching patterns recursively.

    Parameters
    ----------
    patterns : list of str, optional
        Glob patterns to match.
    repo_root : Path, optional
        Repository root path.

    Returns
    -------
    tuple
        (cleaned_count, failed_count)
    """
    if repo_root is None:
        repo_root = get_repo_root()

    if patterns is None:
        patterns = ["__pycache__", "*.pyc", ".DS_Store"]

    cleaned, failed = 0, 0
    for pattern in patterns:
        for path in repo_root.rglob(pattern):
            if not path.exists():  # Inside an already removed directory
                continue
            success, _ = _remove_item(path)
            cleaned += success
            failed += not success

    return cleaned, failed


def clean_data_directory(
    data_dir: Optional[str] = None,
    preserve: Optional[List[str]] = None,
    repo_root: Optional[Path] = None,
) -> Tuple[int, int]:
    """Clean data directory contents, preserving specific files.

    Parameters
    ----------
    data_dir : str, optional
        Data directory relative to repo root (configured ``paths.data`` by default).
    preserve : list of str, optional
        Filenames to preserve.
    repo_root : Path, optional
        Repository root path.

    Returns
    -------
    tuple
        (cleaned_count, failed_count)
    """
    if repo_root is None:
        repo_root = get_repo_root()
    if data_dir is None:
        data_dir = get_config_section("paths").get("data", "data")
    if preserve is None:
        preserve = ["README.md", ".gitkeep"]

    data_path = repo_root / data_dir
    if not data_path.exists():
        return 0, 0

    cleaned, failed = 0, 0
    for item in data_path.iterdir():
        if item.name not in preserve:
            success, _ = _remove_item(item)
            cleaned += success
            failed += not success

    return cleaned, failed


def clean_all() -> None:
    """Clean all generated files and caches."""
    print("\nCleaning all generated files and caches...")

    total_cleaned = 0
    total_failed = 0

    for step in (clean_directories, clean_patterns, clean_data_directory):
        c, f = step()
        total_cleaned += c
        total_failed += f

    if total_cleaned:
        print(f"  ✓ Cleaned {total_cleaned} items")
    if total_failed:
        print(f"  ✗ Failed to clean {total_failed} items")
    if not total_cleaned and not total_failed:
        print("  Nothing to clean")
    print()
