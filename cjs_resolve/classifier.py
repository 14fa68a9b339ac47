"""Lexical classification of module specifiers.

A specifier is either a path (relative or absolute) or a bare package name.
Path rules depend on the path convention, so both conventions are exposed as
explicit objects instead of being inferred from the running platform.
"""

import ntpath
import os
import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from types import ModuleType


class PathKind(Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    BARE = "bare"

    @property
    def is_path(self) -> bool:
        return self is not PathKind.BARE


@dataclass(frozen=True)
class PathConvention:
    """A path flavor: its separators, absolute-path grammar and path module."""

    name: str
    path: ModuleType
    separators: str
    absolute_pattern: re.Pattern

    @property
    def sep(self) -> str:
        return self.path.sep

    def is_relative(self, specifier: str) -> bool:
        """True for '.', '..' and anything starting with './' or '../'."""
        if specifier in (".", ".."):
            return True
        for prefix in (".", ".."):
            if any(specifier.startswith(prefix + sep) for sep in self.separators):
                return True
        return False

    def is_absolute(self, specifier: str) -> bool:
        return bool(self.absolute_pattern.match(specifier))

    def ends_with_separator(self, path: str) -> bool:
        return bool(path) and path[-1] in self.separators

    def absolute(self, path: str) -> str:
        """Normalize a path, anchoring relative paths at the working directory."""
        if not self.path.isabs(path):
            path = self.path.join(os.getcwd(), path)
        return self.path.normpath(path)

    def ancestors(self, directory: str) -> list[str]:
        """Return directory and each of its parents, nearest first, ending at the root."""
        chain = [directory]
        parent = self.path.dirname(directory)
        while parent != chain[-1]:
            chain.append(parent)
            parent = self.path.dirname(parent)
        return chain

    @classmethod
    def host(cls) -> "PathConvention":
        return WINDOWS if os.name == "nt" else POSIX

    def __repr__(self) -> str:
        return f"PathConvention({self.name})"


POSIX = PathConvention(
    name="posix",
    path=posixpath,
    separators="/",
    absolute_pattern=re.compile(r"^/"),
)

# Root-relative (\foo), drive-qualified (C:\foo, C:/foo) and UNC (\\server\share)
WINDOWS = PathConvention(
    name="windows",
    path=ntpath,
    separators="/\\",
    absolute_pattern=re.compile(r"^(?:[A-Za-z]:)?[/\\]"),
)


def classify_specifier(specifier: str, convention: PathConvention | None = None) -> PathKind:
    """Classify a specifier without touching the filesystem.

    Args:
        specifier: Module specifier, e.g. "./util", "/abs/file" or "lodash"
        convention: Path convention to apply (default: the host's)

    Returns:
        PathKind.RELATIVE, PathKind.ABSOLUTE or PathKind.BARE
    """
    convention = convention or PathConvention.host()
    if convention.is_relative(specifier):
        return PathKind.RELATIVE
    if convention.is_absolute(specifier):
        return PathKind.ABSOLUTE
    return PathKind.BARE
