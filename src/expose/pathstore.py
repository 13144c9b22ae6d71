"""PATH management: add, remove and deduplicate directory entries at a scope."""

from __future__ import annotations

from enum import Enum

from expose.store import EnvironmentStore, Scope
from expose.utils import dir_key, normalize_dir

PATH_VAR = "PATH"
SEPARATOR = ";"


class Position(Enum):
    PREPEND = "prepend"
    APPEND = "append"


class AddResult(Enum):
    """Outcome of PathStore.add. Both members are successes."""

    ADDED = "added"
    ALREADY_PRESENT = "already-present"


def split_path(raw: str | None) -> list[str]:
    """Split a raw PATH value into its entries, dropping empty segments."""
    if not raw:
        return []
    return [entry for entry in raw.split(SEPARATOR) if entry.strip()]


def join_path(entries: list[str]) -> str:
    return SEPARATOR.join(entries)


def contains(entries: list[str], directory: str) -> bool:
    """True if directory is in entries, ignoring case and trailing separators."""
    key = dir_key(directory)
    return any(dir_key(entry) == key for entry in entries)


def _dedupe(entries: list[str]) -> list[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen = set()
    result = []
    for entry in entries:
        key = dir_key(entry)
        if key in seen:
            continue
        seen.add(key)
        result.append(entry)
    return result


class PathStore:
    """Read-modify-write access to a ``;``-delimited list of directories.

    Every mutation reads the current value, changes it and writes the whole
    value back. Nothing locks the store in between: if another process edits
    the same variable after our read, its change is lost (last writer wins).
    A write interrupted by Ctrl-C can leave the value half-written.

    Failures from the underlying store propagate as StoreAccessError and are
    never retried.
    """

    def __init__(self, store: EnvironmentStore, var: str = PATH_VAR) -> None:
        self.store = store
        self.var = var

    def read(self, scope: Scope) -> list[str]:
        return split_path(self.store.read(scope, self.var))

    def _write(self, scope: Scope, entries: list[str]) -> None:
        self.store.write(scope, self.var, join_path(entries))

    def add(self, scope: Scope, directory: str, position: Position = Position.APPEND) -> AddResult:
        """Insert directory at position unless it is already present.

        An already present directory is reported as ALREADY_PRESENT and
        nothing is written.
        """
        entries = self.read(scope)
        if contains(entries, directory):
            return AddResult.ALREADY_PRESENT

        entries = _dedupe(entries)
        entry = normalize_dir(directory)
        if position is Position.PREPEND:
            entries.insert(0, entry)
        else:
            entries.append(entry)
        self._write(scope, entries)
        return AddResult.ADDED

    def remove(self, scope: Scope, directory: str) -> bool:
        """Remove every entry matching directory. Returns True if the value was modified."""
        entries = self.read(scope)
        key = dir_key(directory)
        kept = [entry for entry in entries if dir_key(entry) != key]
        if len(kept) == len(entries):
            return False

        self._write(scope, _dedupe(kept))
        return True

    def normalize(self, scope: Scope) -> int:
        """Drop duplicate and empty entries. Returns how many segments were dropped."""
        raw = self.store.read(scope, self.var) or ""
        segments = raw.split(SEPARATOR) if raw else []
        entries = _dedupe(split_path(raw))
        dropped = len(segments) - len(entries)
        if dropped:
            self._write(scope, entries)
        return dropped
