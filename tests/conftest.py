"""Shared fixtures for resolver tests."""

from pathlib import Path

import pytest

from cjs_resolve import POSIX
from cjs_resolve import MemoryFileSystem
from cjs_resolve import ResolveOptions


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Symlink-free temporary directory."""
    return tmp_path.resolve()


@pytest.fixture
def make_tree(root: Path):
    """Create files under root from a {relative_path: content} mapping."""

    def make(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return make


@pytest.fixture
def memory_options():
    """Build POSIX options over a MemoryFileSystem.

    Returns a factory: (files, basedir, **option_overrides) -> (options, fs).
    """

    def make(files: dict[str, str] | list[str], basedir: str = "/project/src", **overrides):
        fs = MemoryFileSystem(convention=POSIX)
        if isinstance(files, dict):
            for path, content in files.items():
                fs.add(path, content)
        else:
            fs.add_all(files)
        overrides.setdefault("convention", POSIX)
        options = ResolveOptions.create(basedir, filesystem=fs.as_filesystem(), **overrides)
        return options, fs

    return make
