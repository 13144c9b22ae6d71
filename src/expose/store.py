"""Persistent environment variable storage: the registry-backed store and the interface it fills."""

from __future__ import annotations

import re
import sys
from enum import Enum
from typing import Protocol

from expose.errors import StoreAccessError

if sys.platform == "win32":
    import ctypes
    import winreg
else:
    winreg = None

HAS_VAR_REGEX = re.compile(r"%[^%:=\s]+%")

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 5000


class Scope(Enum):
    USER = ("user", "HKEY_CURRENT_USER", r"Environment")
    SYSTEM = (
        "system",
        "HKEY_LOCAL_MACHINE",
        r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment",
    )

    def __init__(self, label: str, root: str, subkey: str) -> None:
        self.label = label
        self.root = root
        self.subkey = subkey


class EnvironmentStore(Protocol):
    """Reads and writes one named variable at a scope.

    write(scope, key, None) deletes the variable. Both methods raise
    StoreAccessError when the underlying store refuses the operation.
    """

    def read(self, scope: Scope, key: str) -> str | None: ...

    def write(self, scope: Scope, key: str, value: str | None) -> None: ...


class RegistryStore:
    """EnvironmentStore over the per-user and machine Environment registry keys.

    Machine scope needs an elevated process. A non-elevated write fails with
    StoreAccessError; nothing here tries to elevate.
    """

    def _open(self, scope: Scope, writable: bool):
        if winreg is None:
            raise StoreAccessError("Environment variables can only be managed on Windows")
        access = winreg.KEY_READ | winreg.KEY_WRITE if writable else winreg.KEY_READ
        try:
            return winreg.OpenKeyEx(getattr(winreg, scope.root), scope.subkey, 0, access)
        except OSError as exc:
            raise StoreAccessError(f"Cannot open {scope.label} environment: {exc}") from exc

    def read(self, scope: Scope, key: str) -> str | None:
        with self._open(scope, writable=False) as hkey:
            try:
                value, _ = winreg.QueryValueEx(hkey, key)
            except FileNotFoundError:
                return None
            except OSError as exc:
                raise StoreAccessError(f"Cannot read {key} ({scope.label}): {exc}") from exc
        return str(value)

    def write(self, scope: Scope, key: str, value: str | None) -> None:
        with self._open(scope, writable=True) as hkey:
            try:
                if value is None:
                    winreg.DeleteValue(hkey, key)
                else:
                    # %VAR% references only expand when stored as REG_EXPAND_SZ
                    if HAS_VAR_REGEX.search(value):
                        reg_type = winreg.REG_EXPAND_SZ
                    else:
                        reg_type = winreg.REG_SZ
                    winreg.SetValueEx(hkey, key, 0, reg_type, value)
            except FileNotFoundError:
                # deleting a variable that was never set
                return
            except OSError as exc:
                raise StoreAccessError(f"Cannot write {key} ({scope.label}): {exc}") from exc
        _broadcast_change()


def _broadcast_change() -> None:
    """Notify running applications that the persistent environment changed.

    Consoles started from Explorer afterwards inherit the new values; already
    running consoles do not.
    """
    result = ctypes.c_ulong()
    ctypes.windll.user32.SendMessageTimeoutW(
        HWND_BROADCAST,
        WM_SETTINGCHANGE,
        0,
        "Environment",
        SMTO_ABORTIFHUNG,
        BROADCAST_TIMEOUT_MS,
        ctypes.byref(result),
    )


def open_store() -> EnvironmentStore:
    """Return the store the CLI reads and writes."""
    return RegistryStore()
