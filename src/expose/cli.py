"""CLI entry point: argparse setup and command dispatch."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import NoReturn

from expose import __version__, config
from expose.aliases import AliasManager
from expose.bootstrap import init_paths, managed_dirs, uninstall_paths
from expose.errors import ExposeError, InvalidArgumentError
from expose.pathstore import AddResult, PathStore, Position
from expose.store import Scope, open_store
from expose.utils import confirm, error, info, normalize_dir, print_table
from expose.variables import delete_variable, parse_assignment, set_variable


def _scope(args: argparse.Namespace) -> Scope:
    return Scope.SYSTEM if args.system else Scope.USER


def cmd_add(args: argparse.Namespace) -> int:
    """Set or delete a variable, or add a directory to PATH."""
    scope = _scope(args)
    store = open_store()

    if args.dedupe:
        dropped = PathStore(store).normalize(scope)
        if dropped:
            info(f"Removed {dropped} duplicate or empty entry/entries from the {scope.label} PATH.")
        else:
            info(f"The {scope.label} PATH has no duplicate entries.")
        return 0

    if args.path:
        if not args.target:
            raise InvalidArgumentError("Missing path argument")
        directory = normalize_dir(args.target)
        position = Position.PREPEND if args.prepend else Position.APPEND
        info(f"Adding to {scope.label} PATH: {directory}")
        if PathStore(store).add(scope, directory, position) is AddResult.ALREADY_PRESENT:
            info(f"Already in the {scope.label} PATH, nothing to do.")
        else:
            info(f"Added to {scope.label} PATH.")
            info("Restart your terminal to use the new PATH.")
        return 0

    if args.delete:
        if not args.target:
            raise InvalidArgumentError("Missing variable name")
        if delete_variable(store, scope, args.target):
            info(f"Deleted {scope.label}-level variable: {args.target}")
        else:
            info(f"{args.target} is not set at {scope.label} level, nothing to do.")
        return 0

    if not args.target:
        raise InvalidArgumentError("Missing argument. Expected VAR=value")
    name, value = parse_assignment(args.target)
    set_variable(store, scope, name, value)
    info(f"Set {scope.label}-level variable: {name}={value}")
    if scope is Scope.SYSTEM:
        info("System variables take effect after a restart or re-login.")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Put the expose, runtime bin and alias directories on the user PATH."""
    install_dir = Path(args.dir) if args.dir else config.install_dir()
    dirs = managed_dirs(install_dir, config.runtime_bin_dir(), config.alias_dir())

    results = init_paths(PathStore(open_store()), dirs)

    rows = []
    for directory, result in results:
        status = "added" if result is AddResult.ADDED else "already in PATH"
        rows.append([directory, status])
    print_table(["Directory", "Status"], rows, indent="  ")

    if any(result is AddResult.ADDED for _, result in results):
        info("\nexpose initialized. Restart your terminal to use the new PATH.")
    else:
        info("\nAlready configured.")
    return 0


def cmd_alias(args: argparse.Namespace) -> int:
    """Create, list or remove command aliases."""
    manager = AliasManager(config.alias_dir(), PathStore(open_store()), cwd=os.getcwd())

    if args.list:
        aliases = manager.list()
        if not aliases:
            info("No aliases found.")
            return 0
        width = max(len(name) for name, _ in aliases)
        for name, target in aliases:
            info(f"  {name.ljust(width)} -> {target or 'unknown'}")
        info(f"\nTotal: {len(aliases)} alias(es)")
        return 0

    if args.remove:
        if not args.name:
            raise InvalidArgumentError("Missing alias name")
        manager.remove(args.name)
        info(f"Removed alias: {args.name}")
        return 0

    if not args.name or not args.target:
        raise InvalidArgumentError("Missing alias name or executable path")

    alias = manager.create(args.name, args.target, args.args, args.path)
    info(f"Created alias: {alias.name}")
    info(f"  Points to:    {alias.target_path}")
    if alias.default_args:
        info(f"  Default args: {alias.default_args}")
    info(f"  Location:     {manager.shim_path(alias.name)}")
    info("\nOpen a new terminal to use the alias.")
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    """Remove expose's directories from the user PATH."""
    install_dir = Path(args.dir) if args.dir else config.install_dir()
    dirs = managed_dirs(
        install_dir, config.runtime_bin_dir(), config.alias_dir(), include_missing=True
    )

    info("The following user PATH entries will be removed:")
    for i, directory in enumerate(dirs, 1):
        info(f"  {i}. {directory}")
    info("\nAlias files and their targets will NOT be deleted.")

    if not args.yes and not confirm("Continue?", default_yes=False):
        info("Cancelled.")
        return 0

    removed = 0
    for directory, was_removed in uninstall_paths(PathStore(open_store()), dirs):
        if was_removed:
            info(f"Removed: {directory}")
            removed += 1
        else:
            info(f"Not in PATH (skipped): {directory}")

    if removed:
        info(f"\nUninstalled. {removed} entry/entries removed. Restart your terminal to apply.")
    else:
        info("\nNo PATH entries were found. Nothing to remove.")
    return 0


class ExposeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors print an ``Error:`` line and exit 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        error(message)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = ExposeArgumentParser(
        prog="expose",
        description="Manage Windows environment variables, PATH entries and command aliases",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # add
    p_add = subparsers.add_parser("add", help="Set a variable or add a directory to PATH")
    p_add.add_argument("target", nargs="?", help="VAR=value, a directory (--path) or a name (--delete)")
    mode = p_add.add_mutually_exclusive_group()
    mode.add_argument("--path", action="store_true", help="Add the directory to PATH")
    mode.add_argument("--delete", action="store_true", help="Delete the variable")
    mode.add_argument("--dedupe", action="store_true", help="Remove duplicate PATH entries")
    p_add.add_argument("--prepend", action="store_true", help="Add to the beginning of PATH")
    p_add.add_argument("--system", action="store_true", help="System scope (requires admin)")

    # init
    p_init = subparsers.add_parser("init", help="Put expose's directories on the user PATH")
    p_init.add_argument("--dir", help="Directory to add instead of expose's own")

    # alias
    p_alias = subparsers.add_parser("alias", help="Manage command aliases")
    p_alias.add_argument("name", nargs="?", help="Alias name")
    p_alias.add_argument("target", nargs="?", help="Executable the alias runs")
    p_alias.add_argument("--args", help="Default arguments passed before the caller's (use --args=\"-v\" for a value starting with -)")
    p_alias.add_argument("--path", action="store_true", help="Also add the executable's directory to PATH")
    p_alias.add_argument("-l", "--list", action="store_true", help="List aliases")
    p_alias.add_argument("--remove", action="store_true", help="Remove the named alias")

    # uninstall
    p_uninstall = subparsers.add_parser("uninstall", help="Remove expose's PATH entries")
    p_uninstall.add_argument("--dir", help="expose directory to remove instead of its own")
    p_uninstall.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    subparsers.add_parser("help", help="Show this help")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        sys.exit(0)

    dispatch = {
        "add": cmd_add,
        "init": cmd_init,
        "alias": cmd_alias,
        "uninstall": cmd_uninstall,
    }

    handler = dispatch.get(args.command)
    if not handler:
        parser.print_help()
        sys.exit(1)

    try:
        code = handler(args)
    except ExposeError as exc:
        error(str(exc))
        code = 1
    sys.exit(code)
