"""Setting and deleting single environment variables."""

from __future__ import annotations

from expose.errors import InvalidArgumentError
from expose.store import EnvironmentStore, Scope
from expose.utils import validate_var_name


def parse_assignment(text: str) -> tuple[str, str]:
    """Split ``VAR=value`` on the first '='. The value may itself contain '='."""
    if "=" not in text:
        raise InvalidArgumentError(f"Invalid argument {text!r}. Expected VAR=value")
    name, value = text.split("=", 1)
    if not name:
        raise InvalidArgumentError("Variable name cannot be empty")
    validate_var_name(name)
    return name, value


def set_variable(store: EnvironmentStore, scope: Scope, name: str, value: str) -> None:
    validate_var_name(name)
    store.write(scope, name, value)


def delete_variable(store: EnvironmentStore, scope: Scope, name: str) -> bool:
    """Delete name at scope. Returns False if it was not set."""
    validate_var_name(name)
    if store.read(scope, name) is None:
        return False
    store.write(scope, name, None)
    return True
