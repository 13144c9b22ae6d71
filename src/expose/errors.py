"""Exception types raised by expose operations and reported by the CLI."""


class ExposeError(Exception):
    """Base class for every error the CLI reports to the user."""


class InvalidNameError(ExposeError):
    """A variable or alias name does not match the allowed pattern."""


class InvalidArgumentError(ExposeError):
    """A command argument is missing or malformed."""


class TargetNotFoundError(ExposeError):
    """An alias target does not exist."""


class AliasExistsError(ExposeError):
    pass


class AliasNotFoundError(ExposeError):
    pass


class StoreAccessError(ExposeError):
    """Reading or writing the environment variable store failed."""


class AliasStorageError(ExposeError):
    """Reading or writing a shim or the alias directory failed."""
