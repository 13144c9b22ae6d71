"""Directories expose manages, resolved from the environment."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ALIAS_DIR_NAME = "Aliases"
ALIAS_DIR_ENV = "EXPOSE_ALIAS_DIR"
RUNTIME_BIN_ENV = "EXPOSE_RUNTIME_BIN"


def user_profile() -> Path:
    """%USERPROFILE%, falling back to the home directory."""
    profile = os.environ.get("USERPROFILE")
    return Path(profile) if profile else Path.home()


def alias_dir() -> Path:
    override = os.environ.get(ALIAS_DIR_ENV)
    if override:
        return Path(override)
    return user_profile() / ALIAS_DIR_NAME


def runtime_bin_dir() -> Path:
    """Bun's global bin directory. Only put on PATH by init when it exists."""
    override = os.environ.get(RUNTIME_BIN_ENV)
    if override:
        return Path(override)
    return user_profile() / ".bun" / "bin"


def install_dir() -> Path:
    """Directory holding the running expose entry point."""
    return Path(sys.argv[0]).resolve().parent
