"""Command aliases: .bat shims in the alias directory that forward to a target executable."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from expose.errors import (
    AliasExistsError,
    AliasNotFoundError,
    AliasStorageError,
    TargetNotFoundError,
)
from expose.pathstore import AddResult, PathStore, Position
from expose.store import Scope
from expose.utils import info, validate_alias_name

SHIM_EXT = ".bat"

# cmd.exe reads batch files in the console (OEM) code page
SHIM_ENCODING = "oem" if sys.platform == "win32" else "utf-8"

# First double-quoted token; a literal quote inside it is written as ""
_QUOTED_RE = re.compile(r'"((?:[^"]|"")*)"')


@dataclass(frozen=True)
class AliasDefinition:
    name: str
    target_path: str
    default_args: str | None = None
    add_to_path: bool = False


def resolve_target_path(raw_path: str, cwd: str) -> str:
    """Absolute paths are returned as given; relative ones are resolved against cwd."""
    if os.path.isabs(raw_path):
        return raw_path
    return os.path.normpath(os.path.join(cwd, raw_path))


def escape_quotes(text: str) -> str:
    """Double literal quotes so they cannot close the quoted target in the shim."""
    return text.replace('"', '""')


def render_shim(target_path: str, default_args: str | None = None) -> str:
    """Build the shim: run the target with the default args, then the caller's args.

    Only quotes are escaped. Default args are written verbatim otherwise, so
    cmd metacharacters in them (%, &, |) keep their meaning.
    """
    command = f'"{escape_quotes(target_path)}"'
    if default_args:
        command += f" {escape_quotes(default_args)}"
    return f"@echo off\r\n{command} %*\r\n"


def parse_shim_target(content: str) -> str | None:
    """Extract the target path from shim content, or None if there is no quoted token."""
    match = _QUOTED_RE.search(content)
    if not match:
        return None
    return match.group(1).replace('""', '"')


class AliasManager:
    """Creates, lists and removes alias shims.

    The alias directory is put on the user PATH when an alias is created, so
    the shims can be run by bare name from a new console. Filesystem failures
    surface as AliasStorageError carrying the OS message.
    """

    def __init__(self, alias_dir: Path, paths: PathStore, cwd: str | None = None) -> None:
        self.alias_dir = alias_dir
        self.paths = paths
        self.cwd = cwd

    def shim_path(self, name: str) -> Path:
        return self.alias_dir / f"{name}{SHIM_EXT}"

    def create(
        self,
        name: str,
        target: str,
        default_args: str | None = None,
        add_to_path: bool = False,
    ) -> AliasDefinition:
        """Write a shim for name pointing at target.

        Steps already taken stay in place if a later one fails (e.g. the
        alias directory is created even when the PATH write is refused).
        """
        validate_alias_name(name)

        target_path = resolve_target_path(target, self.cwd or os.getcwd())
        if target_path != target:
            info(f"Resolved relative path to: {target_path}")
        if not os.path.exists(target_path):
            raise TargetNotFoundError(f"File not found: {target_path}")

        if not self.alias_dir.is_dir():
            try:
                self.alias_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise AliasStorageError(f"Cannot create alias directory: {exc}") from exc
            info(f"Created alias directory: {self.alias_dir}")

        shim = self.shim_path(name)
        if shim.exists():
            raise AliasExistsError(
                f'Alias "{name}" already exists. Use --remove to delete it first.'
            )

        if add_to_path:
            exe_dir = os.path.dirname(target_path)
            if self.paths.add(Scope.USER, exe_dir, Position.APPEND) is AddResult.ADDED:
                info(f"Added executable directory to PATH: {exe_dir}")
            else:
                info(f"Executable directory already in PATH: {exe_dir}")

        try:
            data = render_shim(target_path, default_args).encode(SHIM_ENCODING)
        except UnicodeEncodeError as exc:
            raise AliasStorageError(
                f"Cannot write shim for {name!r}: the target or arguments contain "
                f"characters the console code page cannot represent ({exc.reason})"
            ) from exc
        try:
            shim.write_bytes(data)
        except OSError as exc:
            raise AliasStorageError(f"Cannot write shim for {name!r}: {exc}") from exc

        if self.paths.add(Scope.USER, str(self.alias_dir), Position.APPEND) is AddResult.ADDED:
            info(f"Added alias directory to PATH: {self.alias_dir}")

        return AliasDefinition(name, target_path, default_args, add_to_path)

    def list(self) -> list[tuple[str, str | None]]:
        """Return (name, target) for every shim, in directory enumeration order.

        The order is whatever the filesystem yields. A shim whose target cannot
        be parsed is listed with target None.
        """
        if not self.alias_dir.is_dir():
            return []

        aliases = []
        try:
            for entry in self.alias_dir.iterdir():
                if not (entry.is_file() and entry.suffix.lower() == SHIM_EXT):
                    continue
                content = entry.read_text(encoding=SHIM_ENCODING, errors="replace")
                aliases.append((entry.stem, parse_shim_target(content)))
        except OSError as exc:
            raise AliasStorageError(f"Cannot read alias directory: {exc}") from exc
        return aliases

    def remove(self, name: str) -> None:
        """Delete the shim for name. The target and any PATH entries are left alone."""
        validate_alias_name(name)
        shim = self.shim_path(name)
        if not shim.is_file():
            raise AliasNotFoundError(f'Alias "{name}" does not exist')
        try:
            shim.unlink()
        except OSError as exc:
            raise AliasStorageError(f"Cannot remove alias {name!r}: {exc}") from exc
