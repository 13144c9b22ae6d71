"""Shared test fixtures for the expose test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from expose.aliases import AliasManager
from expose.errors import StoreAccessError
from expose.pathstore import PathStore
from expose.store import Scope


class MemoryStore:
    """In-memory EnvironmentStore. Scopes listed in `denied` refuse every call."""

    def __init__(self, values: dict | None = None, denied: tuple = ()) -> None:
        self.values = dict(values or {})
        self.denied = set(denied)
        self.writes = 0

    def _check(self, scope: Scope) -> None:
        if scope in self.denied:
            raise StoreAccessError(f"Access is denied ({scope.label})")

    def read(self, scope: Scope, key: str) -> str | None:
        self._check(scope)
        return self.values.get((scope, key))

    def write(self, scope: Scope, key: str, value: str | None) -> None:
        self._check(scope)
        self.writes += 1
        if value is None:
            self.values.pop((scope, key), None)
        else:
            self.values[(scope, key)] = value


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def paths(store: MemoryStore) -> PathStore:
    return PathStore(store)


@pytest.fixture
def alias_dir(tmp_path: Path) -> Path:
    return tmp_path / "Aliases"


@pytest.fixture
def manager(alias_dir: Path, paths: PathStore, tmp_path: Path) -> AliasManager:
    return AliasManager(alias_dir, paths, cwd=str(tmp_path))


@pytest.fixture
def make_exe(tmp_path: Path):
    """Create an empty executable stand-in and return its absolute path."""

    def _make(name: str = "tool.exe", subdir: str = "bin") -> str:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        exe = directory / name
        exe.write_text("")
        return str(exe)

    return _make
