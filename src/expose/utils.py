"""Name validation, PATH entry normalization, user prompts, and formatting helpers."""

from __future__ import annotations

import re
import sys

from expose.errors import InvalidNameError

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
ALIAS_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-.]*$")


def validate_var_name(name: str) -> None:
    """Raise InvalidNameError unless name is a valid environment variable name."""
    if not VAR_NAME_RE.match(name):
        raise InvalidNameError(
            f"Invalid variable name {name!r}. Must start with a letter or underscore, "
            "and contain only letters, numbers, and underscores"
        )


def validate_alias_name(name: str) -> None:
    """Raise InvalidNameError unless name is usable as an alias (and shim file name)."""
    if not ALIAS_NAME_RE.match(name):
        raise InvalidNameError(
            f"Invalid alias name {name!r}. Must start with a letter or underscore, "
            "and contain only letters, numbers, hyphens, underscores, and dots"
        )


def normalize_dir(path: str) -> str:
    """Strip trailing slashes and backslashes from a directory entry.

    A path made only of separators is returned unchanged.
    """
    return path.rstrip("/\\") or path


def dir_key(path: str) -> str:
    """Comparison key for a PATH entry. Windows paths are case-insensitive."""
    return normalize_dir(path).casefold()


def confirm(message: str, default_yes: bool = True) -> bool:
    """Ask a y/n question. 'c', 'cancel' or a closed stdin answer no."""
    suffix = "[Y/n]" if default_yes else "[y/N]"
    try:
        raw = input(f"{message} {suffix} ").strip().lower()
    except EOFError:
        print()
        return False
    if raw in ("c", "cancel"):
        return False
    if raw == "":
        return default_yes
    return raw in ("y", "yes")


def print_table(headers: list[str], rows: list[list[str]], indent: str = "") -> None:
    """Print rows under headers, each column padded to its widest cell."""
    if not rows:
        print(f"{indent}(nothing to show)")
        return

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    header_line = "  ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers))
    sep_line = "  ".join("-" * col_widths[i] for i in range(len(headers)))
    print(indent + header_line)
    print(indent + sep_line)
    for row in rows:
        print(indent + "  ".join(cell.ljust(col_widths[i]) for i, cell in enumerate(row)))


def error(message: str) -> None:
    """Report a failed command on stderr."""
    print(f"Error: {message}", file=sys.stderr)


def info(message: str) -> None:
    """Narrate progress on stdout."""
    print(message)
