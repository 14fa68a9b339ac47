"""Immutable resolution options threaded through every resolution step."""

import os
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from typing import Any

from .classifier import PathConvention
from .filesystem import FileSystem
from .filesystem import real_filesystem

DEFAULT_EXTENSIONS = (".js",)
DEFAULT_MODULE_DIRECTORIES = ("node_modules",)
DEFAULT_MAX_MAIN_DEPTH = 32

ManifestTransform = Callable[[dict[str, Any], str], dict[str, Any]]


@dataclass(frozen=True)
class ResolveOptions:
    """Resolved, read-only options for one resolution call.

    Build instances with ResolveOptions.create(), which applies defaults and
    normalizes sequences to tuples.
    """

    basedir: str
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    module_directories: tuple[str, ...] = DEFAULT_MODULE_DIRECTORIES
    paths: tuple[str, ...] = ()
    filesystem: FileSystem = field(default_factory=real_filesystem)
    manifest_transform: ManifestTransform | None = None
    resolve_symlinks: bool = True
    convention: PathConvention = field(default_factory=PathConvention.host)
    max_main_depth: int = DEFAULT_MAX_MAIN_DEPTH

    @classmethod
    def create(
        cls,
        basedir: str | os.PathLike | None = None,
        *,
        extensions: str | Sequence[str] | None = None,
        module_directories: str | Sequence[str] | None = None,
        paths: Sequence[str | os.PathLike] | None = None,
        filesystem: FileSystem | None = None,
        manifest_transform: ManifestTransform | None = None,
        resolve_symlinks: bool = True,
        convention: PathConvention | None = None,
        max_main_depth: int = DEFAULT_MAX_MAIN_DEPTH,
    ) -> "ResolveOptions":
        """Apply defaults and freeze.

        Args:
            basedir: Directory to resolve from (default: current directory)
            extensions: Extensions tried after the literal path (default: .js).
                A single string is accepted.
            module_directories: Directory names searched at every ancestor
                (default: node_modules). A single string is accepted.
            paths: Extra search roots consulted after all ancestors
            filesystem: Filesystem capabilities (default: the real filesystem)
            manifest_transform: Hook applied to a parsed manifest before `main` is read
            resolve_symlinks: Resolve basedir to its real path before the ancestor search
            convention: Path convention (default: the host's)
            max_main_depth: Maximum nested manifest `main` hops

        Raises:
            ValueError: max_main_depth is negative
        """
        if max_main_depth < 0:
            raise ValueError(f"max_main_depth must be >= 0, got {max_main_depth}")
        convention = convention or PathConvention.host()
        if isinstance(extensions, str):
            extensions = [extensions]
        if isinstance(module_directories, str):
            module_directories = [module_directories]
        return cls(
            basedir=os.fspath(basedir) if basedir is not None else os.getcwd(),
            extensions=tuple(extensions or DEFAULT_EXTENSIONS),
            module_directories=tuple(module_directories or DEFAULT_MODULE_DIRECTORIES),
            paths=tuple(os.fspath(p) for p in paths or ()),
            filesystem=filesystem or real_filesystem(),
            manifest_transform=manifest_transform,
            resolve_symlinks=resolve_symlinks,
            convention=convention,
            max_main_depth=max_main_depth,
        )

    def evolve(self, **changes: Any) -> "ResolveOptions":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def path(self):
        """The path module (posixpath or ntpath) for this convention."""
        return self.convention.path
