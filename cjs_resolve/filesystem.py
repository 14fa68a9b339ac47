"""Filesystem capabilities used by the resolver.

The resolver never touches the disk directly. It goes through a FileSystem
value so callers can substitute a virtual tree.
"""

import os
import stat
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass

from .classifier import PathConvention


@dataclass(frozen=True)
class FileSystem:
    """Injectable filesystem capabilities.

    Attributes:
        is_file: True for an existing regular file or FIFO. Must return False
            when the path or one of its components is missing, and raise for
            any other error.
        read_file: Return the raw bytes of a file.
        realpath: Return the symlink-free form of a path. Raises
            FileNotFoundError when the path does not exist.
    """

    is_file: Callable[[str], bool]
    read_file: Callable[[str], bytes]
    realpath: Callable[[str], str]


def _is_file(path: str) -> bool:
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return stat.S_ISREG(st.st_mode) or stat.S_ISFIFO(st.st_mode)


def _read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _realpath(path: str) -> str:
    return os.path.realpath(path, strict=True)


def real_filesystem() -> FileSystem:
    """FileSystem backed by the operating system."""
    return FileSystem(is_file=_is_file, read_file=_read_file, realpath=_realpath)


class MemoryFileSystem:
    """Dict-backed virtual filesystem.

    Files are given as a mapping of absolute path to contents (str or bytes).
    Directories exist implicitly as ancestors of files. Every path passed to
    is_file, read_file or realpath is appended to `probes`.
    """

    def __init__(
        self,
        files: Mapping[str, str | bytes] | None = None,
        convention: PathConvention | None = None,
        symlinks: Mapping[str, str] | None = None,
    ):
        self.convention = convention or PathConvention.host()
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = set()
        self._symlinks = {self._key(k): self._key(v) for k, v in (symlinks or {}).items()}
        self.probes: list[str] = []
        for path, content in (files or {}).items():
            self.add(path, content)

    def _key(self, path: str) -> str:
        return self.convention.path.normpath(path)

    def add(self, path: str, content: str | bytes = b"") -> None:
        key = self._key(path)
        self._files[key] = content.encode("utf-8") if isinstance(content, str) else content
        self._dirs.update(self.convention.ancestors(self.convention.path.dirname(key)))

    def add_all(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.add(path)

    def is_file(self, path: str) -> bool:
        self.probes.append(path)
        # A trailing separator only names a directory
        if self.convention.ends_with_separator(path):
            return False
        return self._key(path) in self._files

    def read_file(self, path: str) -> bytes:
        self.probes.append(path)
        key = self._key(path)
        if key not in self._files:
            raise FileNotFoundError(path)
        return self._files[key]

    def realpath(self, path: str) -> str:
        self.probes.append(path)
        key = self._key(path)
        if key in self._symlinks:
            key = self._symlinks[key]
        if key not in self._files and key not in self._dirs:
            raise FileNotFoundError(path)
        return key

    def as_filesystem(self) -> FileSystem:
        return FileSystem(is_file=self.is_file, read_file=self.read_file, realpath=self.realpath)

    def __repr__(self) -> str:
        return f"MemoryFileSystem({len(self._files)} files)"
