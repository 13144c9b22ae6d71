"""init and uninstall: put expose's directories on the user PATH and take them off again."""

from __future__ import annotations

from pathlib import Path

from expose.pathstore import AddResult, PathStore, Position
from expose.store import Scope


def managed_dirs(
    install_dir: Path,
    runtime_bin: Path,
    alias_dir: Path,
    include_missing: bool = False,
) -> list[str]:
    """The directories expose keeps on PATH, in the order they are added.

    The runtime bin directory is left out when it does not exist, unless
    include_missing is set (uninstall removes it regardless).
    """
    dirs = [str(install_dir)]
    if include_missing or runtime_bin.is_dir():
        dirs.append(str(runtime_bin))
    dirs.append(str(alias_dir))
    return dirs


def init_paths(paths: PathStore, dirs: list[str]) -> list[tuple[str, AddResult]]:
    """Append each directory to the user PATH. Safe to run any number of times."""
    return [(d, paths.add(Scope.USER, d, Position.APPEND)) for d in dirs]


def uninstall_paths(paths: PathStore, dirs: list[str]) -> list[tuple[str, bool]]:
    """Remove each directory from the user PATH.

    Only PATH is touched: alias shims and their targets stay on disk.
    """
    return [(d, paths.remove(Scope.USER, d)) for d in dirs]
