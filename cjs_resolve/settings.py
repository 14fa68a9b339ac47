"""Resolver settings from settings.yaml files.

Two scopes, highest precedence first:
- Project (<project>/.cjs-resolve/settings.yaml)
- User (~/.cjs-resolve/settings.yaml)

Resolver keys live under a top-level `resolve:` section:

    resolve:
      extensions: [".js", ".json"]
      module_directories: ["node_modules", "vendor"]
      paths: ["/opt/shared"]
      resolve_symlinks: true
      browser: false
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from .options import DEFAULT_EXTENSIONS
from .options import DEFAULT_MAX_MAIN_DEPTH
from .options import DEFAULT_MODULE_DIRECTORIES
from .options import ResolveOptions

logger = logging.getLogger(__name__)

SETTINGS_DIRNAME = ".cjs-resolve"
SETTINGS_FILENAME = "settings.yaml"
SECTION = "resolve"


class ResolverSettings(BaseModel):
    """Configurable resolver defaults."""

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    module_directories: list[str] = Field(default_factory=lambda: list(DEFAULT_MODULE_DIRECTORIES))
    paths: list[str] = Field(default_factory=list, description="Extra search roots after all ancestors")
    resolve_symlinks: bool = Field(default=True, description="Resolve basedir symlinks before searching")
    browser: bool = Field(default=False, description="Use browser-mode resolution")
    max_main_depth: int = Field(default=DEFAULT_MAX_MAIN_DEPTH, ge=0)

    def to_options(self, basedir: str | os.PathLike | None = None) -> ResolveOptions:
        """Build resolution options from these settings."""
        return ResolveOptions.create(
            basedir,
            extensions=self.extensions,
            module_directories=self.module_directories,
            paths=self.paths,
            resolve_symlinks=self.resolve_symlinks,
            max_main_depth=self.max_main_depth,
        )


class SettingsManager:
    """Reads resolver settings across user and project scopes."""

    def __init__(self, project_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize with scope directories.

        Args:
            project_dir: Project root (default: current directory)
            user_dir: User home (default: Path.home())
        """
        project_dir = project_dir if project_dir is not None else Path.cwd()
        user_dir = user_dir if user_dir is not None else Path.home()
        self.project_settings_file = project_dir / SETTINGS_DIRNAME / SETTINGS_FILENAME
        self.user_settings_file = user_dir / SETTINGS_DIRNAME / SETTINGS_FILENAME

    def scope_files(self) -> list[Path]:
        """Settings files in ascending precedence order."""
        files = [self.user_settings_file]
        if self.project_settings_file != self.user_settings_file:
            files.append(self.project_settings_file)
        return files

    def merged(self) -> dict[str, Any]:
        """Raw `resolve:` section merged across scopes (later scopes win per key)."""
        merged: dict[str, Any] = {}
        for path in self.scope_files():
            merged.update(self._read_section(path))
        return merged

    def effective(self) -> ResolverSettings:
        """Validated settings after merging all scopes.

        Invalid values are logged and replaced by defaults.
        """
        data = self.merged()
        try:
            return ResolverSettings.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid resolver settings, using defaults: {e}")
            return ResolverSettings()

    def _read_section(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return {}

        section = data.get(SECTION) if isinstance(data, dict) else None
        if section is None:
            return {}
        if not isinstance(section, dict):
            logger.warning(f"Ignoring '{SECTION}' in {path}: expected a mapping")
            return {}
        logger.debug(f"Loaded resolver settings from {path}")
        return section
