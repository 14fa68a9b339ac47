"""File and directory loading steps of the CommonJS lookup."""

import logging

from .manifest import read_manifest
from .options import ResolveOptions

logger = logging.getLogger(__name__)

INDEX_NAME = "index"


def load_as_file(candidate: str, options: ResolveOptions) -> str | None:
    """Resolve a candidate to an existing file.

    Tries the literal path, then the path with each configured extension
    appended, in order.

    Returns:
        The first matching path, or None
    """
    fs = options.filesystem
    if fs.is_file(candidate):
        return candidate
    for extension in options.extensions:
        path = candidate + extension
        if fs.is_file(path):
            return path
    return None


def load_as_directory(candidate: str, options: ResolveOptions, depth: int = 0) -> str | None:
    """Resolve a candidate directory through its manifest, then its index file.

    A manifest `main` may name a file or another directory; directories are
    followed recursively up to options.max_main_depth hops.

    Args:
        candidate: Directory path
        options: Resolution options
        depth: Number of `main` hops already followed

    Returns:
        The first matching path, or None
    """
    manifest = read_manifest(candidate, options)
    entry = manifest.entry() if manifest is not None else None
    if entry is not None:
        if depth >= options.max_main_depth:
            logger.warning(
                f"[resolve] not following main '{entry}' in {candidate}: "
                f"exceeded {options.max_main_depth} nested main entries"
            )
        else:
            target = options.path.normpath(options.path.join(candidate, entry))
            match = load_as_file(target, options) or load_as_directory(target, options, depth + 1)
            if match:
                return match
            logger.debug(f"[resolve] main '{entry}' in {candidate} did not resolve, trying {INDEX_NAME}")

    return load_as_file(options.path.join(candidate, INDEX_NAME), options)


def load_path(candidate: str, options: ResolveOptions) -> str | None:
    """Try a candidate as a file, then as a directory."""
    return load_as_file(candidate, options) or load_as_directory(candidate, options)
