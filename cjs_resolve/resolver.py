"""Resolution entry points.

resolve_sync() implements the CommonJS lookup:
1. Path specifiers ("./x", "../x", "/x", "C:\\x") resolve against basedir,
   as a file and then as a directory.
2. Bare names ("lodash") are searched in module directories of every
   ancestor of basedir, then in the extra search paths.

default_resolver() is the outer entry point that picks between that
algorithm and a browser-mode delegate.
"""

import logging
import os
from collections.abc import Sequence
from typing import Protocol

from .classifier import classify_specifier
from .errors import InvalidSpecifierError
from .errors import ModuleNotFoundError
from .filesystem import FileSystem
from .loaders import load_path
from .manifest import browser_field_transform
from .node_modules import load_node_modules
from .options import ResolveOptions

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Anything that turns a specifier into an absolute file path."""

    def __call__(self, specifier: str, options: ResolveOptions) -> str: ...


def resolve_sync(specifier: str, options: ResolveOptions | None = None) -> str:
    """Resolve a specifier to an absolute file path.

    Args:
        specifier: Module specifier
        options: Resolution options (default: ResolveOptions.create())

    Returns:
        Path of an existing regular file or FIFO

    Raises:
        InvalidSpecifierError: specifier is not a string
        ModuleNotFoundError: no candidate matched
        OSError: the filesystem failed for a reason other than a missing path
    """
    if not isinstance(specifier, str):
        raise InvalidSpecifierError(specifier)
    if options is None:
        options = ResolveOptions.create()

    kind = classify_specifier(specifier, options.convention)
    if kind.is_path:
        match = load_path(_path_candidate(specifier, options), options)
    else:
        match = load_node_modules(specifier, options.basedir, options)

    if match is None:
        raise ModuleNotFoundError(specifier, options.basedir)
    logger.debug(f"[resolve] {specifier} -> {match}")
    return match


def _path_candidate(specifier: str, options: ResolveOptions) -> str:
    """Absolute candidate for a path specifier.

    A trailing separator is kept for '..' and for specifiers ending with one,
    so the candidate only matches as a directory.
    """
    convention = options.convention
    basedir = convention.absolute(options.basedir)
    candidate = options.path.normpath(options.path.join(basedir, specifier))
    if specifier == ".." or convention.ends_with_separator(specifier):
        if not convention.ends_with_separator(candidate):
            candidate += convention.sep
    return candidate


def browser_resolve_sync(specifier: str, options: ResolveOptions) -> str:
    """Browser-mode delegate: resolve with a string `browser` manifest field preferred over `main`."""
    user_transform = options.manifest_transform
    if user_transform is None:
        transform = browser_field_transform
    else:

        def transform(manifest, directory):
            return browser_field_transform(user_transform(manifest, directory), directory)

    return resolve_sync(specifier, options.evolve(manifest_transform=transform))


def default_resolver(
    specifier: str,
    *,
    basedir: str | os.PathLike,
    browser: bool = False,
    extensions: Sequence[str] | None = None,
    module_directories: str | Sequence[str] | None = None,
    paths: Sequence[str | os.PathLike] | None = None,
    resolve_symlinks: bool = True,
    filesystem: FileSystem | None = None,
    browser_resolver: Resolver | None = None,
) -> str:
    """Resolve a specifier, selecting browser mode when `browser` is set.

    Args:
        specifier: Module specifier
        basedir: Directory to resolve from
        browser: Use the browser-mode delegate instead of the core lookup
        extensions: Extensions to try (default: .js)
        module_directories: Module directory names (default: node_modules)
        paths: Extra search roots, consulted after all ancestors
        resolve_symlinks: Resolve basedir symlinks before the ancestor search
        filesystem: Filesystem capabilities (default: the real filesystem)
        browser_resolver: Browser-mode delegate (default: browser_resolve_sync)

    Returns:
        Absolute path of the resolved file
    """
    options = ResolveOptions.create(
        basedir,
        extensions=extensions,
        module_directories=module_directories,
        paths=paths,
        resolve_symlinks=resolve_symlinks,
        filesystem=filesystem,
    )
    if browser:
        return (browser_resolver or browser_resolve_sync)(specifier, options)
    return resolve_sync(specifier, options)
