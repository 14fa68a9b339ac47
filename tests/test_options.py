"""Tests for ResolveOptions defaults and normalization."""

import os
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from cjs_resolve import ResolveOptions
from cjs_resolve.classifier import PathConvention


def test_defaults():
    options = ResolveOptions.create("/base")
    assert options.basedir == "/base"
    assert options.extensions == (".js",)
    assert options.module_directories == ("node_modules",)
    assert options.paths == ()
    assert options.resolve_symlinks is True
    assert options.manifest_transform is None
    assert options.convention is PathConvention.host()


def test_empty_sequences_fall_back_to_defaults():
    options = ResolveOptions.create("/base", extensions=[], module_directories=[])
    assert options.extensions == (".js",)
    assert options.module_directories == ("node_modules",)


def test_sequences_are_frozen_copies():
    extensions = [".js", ".json"]
    options = ResolveOptions.create("/base", extensions=extensions, paths=[Path("/opt/shared")])
    extensions.append(".mjs")
    assert options.extensions == (".js", ".json")
    assert options.paths == ("/opt/shared",)


def test_basedir_defaults_to_cwd():
    assert ResolveOptions.create().basedir == os.getcwd()


def test_pathlike_basedir():
    assert ResolveOptions.create(Path("/base")).basedir == "/base"


def test_negative_max_main_depth_rejected():
    with pytest.raises(ValueError):
        ResolveOptions.create("/base", max_main_depth=-1)


def test_immutable_and_evolve():
    options = ResolveOptions.create("/base")
    with pytest.raises(FrozenInstanceError):
        options.basedir = "/other"
    changed = options.evolve(resolve_symlinks=False)
    assert changed.resolve_symlinks is False
    assert options.resolve_symlinks is True


def test_single_string_sequences():
    options = ResolveOptions.create("/base", extensions=".mjs", module_directories="vendor")
    assert options.extensions == (".mjs",)
    assert options.module_directories == ("vendor",)
