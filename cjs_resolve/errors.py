"""Exception types raised by module resolution.

Only two outcomes are visible to callers of a normal search:
- InvalidSpecifierError: the specifier was not a string
- ModuleNotFoundError: every candidate was exhausted without a match

Filesystem errors other than "missing" propagate unchanged as OSError.
"""

import builtins

MODULE_NOT_FOUND = "MODULE_NOT_FOUND"


class ResolveError(Exception):
    """Base class for resolution failures."""


class InvalidSpecifierError(ResolveError, TypeError):
    """Specifier is not a string."""

    def __init__(self, specifier: object):
        super().__init__("Path must be a string.")
        self.specifier = specifier


class ModuleNotFoundError(ResolveError, builtins.ModuleNotFoundError):
    """No candidate path matched the specifier.

    Attributes:
        code: Stable diagnostic code (always MODULE_NOT_FOUND)
        specifier: The specifier as given by the caller
        basedir: Directory the search started from
    """

    code = MODULE_NOT_FOUND

    def __init__(self, specifier: str, basedir: str):
        super().__init__(f"Cannot find module '{specifier}' from '{basedir}'")
        self.specifier = specifier
        self.basedir = basedir
