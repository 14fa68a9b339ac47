"""Ancestor module-directory search for bare package names."""

import logging

from .loaders import load_path
from .options import ResolveOptions

logger = logging.getLogger(__name__)


def node_modules_paths(start: str, options: ResolveOptions) -> list[str]:
    """Compute the ordered search roots for a bare name.

    Order: for each ancestor of start (nearest first), each module directory
    name in configured order; then every extra path in options.paths.

    Args:
        start: Directory the search begins from
        options: Resolution options

    Returns:
        Candidate root directories in precedence order. A start directory that
        does not exist is walked as given.

    Raises:
        OSError: realpath failed for a reason other than a missing path
    """
    convention = options.convention
    absolute_start = convention.absolute(start)

    if options.resolve_symlinks:
        try:
            absolute_start = options.filesystem.realpath(absolute_start)
        except FileNotFoundError:
            logger.debug(f"[resolve] basedir {absolute_start} does not exist, walking it unresolved")

    roots = [
        options.path.join(ancestor, module_dir)
        for ancestor in convention.ancestors(absolute_start)
        for module_dir in options.module_directories
    ]
    roots.extend(options.paths)
    return roots


def load_node_modules(name: str, start: str, options: ResolveOptions) -> str | None:
    """Search every module directory root for a bare name.

    Returns:
        The first matching path, or None
    """
    roots = node_modules_paths(start, options)
    logger.debug(f"[resolve] searching {len(roots)} module roots for '{name}'")
    convention = options.convention
    for root in roots:
        candidate = options.path.normpath(options.path.join(root, name))
        # "pkg/" only matches as a directory
        if convention.ends_with_separator(name) and not convention.ends_with_separator(candidate):
            candidate += convention.sep
        match = load_path(candidate, options)
        if match:
            return match
    return None
