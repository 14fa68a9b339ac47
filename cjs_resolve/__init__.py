"""CommonJS-style module resolution.

Resolves a module specifier ("./util", "lodash", "/abs/path") to an absolute
file path, searching files, package manifests, index files and ancestor
module directories.
"""

from .classifier import POSIX
from .classifier import WINDOWS
from .classifier import PathConvention
from .classifier import PathKind
from .classifier import classify_specifier
from .errors import MODULE_NOT_FOUND
from .errors import InvalidSpecifierError
from .errors import ModuleNotFoundError
from .errors import ResolveError
from .filesystem import FileSystem
from .filesystem import MemoryFileSystem
from .filesystem import real_filesystem
from .manifest import PackageManifest
from .manifest import browser_field_transform
from .node_modules import node_modules_paths
from .options import ResolveOptions
from .resolver import Resolver
from .resolver import browser_resolve_sync
from .resolver import default_resolver
from .resolver import resolve_sync

__all__ = [
    "MODULE_NOT_FOUND",
    "POSIX",
    "WINDOWS",
    "FileSystem",
    "InvalidSpecifierError",
    "MemoryFileSystem",
    "ModuleNotFoundError",
    "PackageManifest",
    "PathConvention",
    "PathKind",
    "ResolveError",
    "ResolveOptions",
    "Resolver",
    "browser_field_transform",
    "browser_resolve_sync",
    "classify_specifier",
    "default_resolver",
    "node_modules_paths",
    "real_filesystem",
    "resolve_sync",
]
