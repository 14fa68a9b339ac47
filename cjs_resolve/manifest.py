"""Package manifest (package.json) reading."""

import json
import logging
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .options import ResolveOptions

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


class PackageManifest(BaseModel):
    """The parts of a package manifest the resolver consults."""

    model_config = ConfigDict(extra="allow")

    main: str | None = Field(None, description="Entry module, relative to the package directory")

    def entry(self) -> str | None:
        """Return the normalized `main` entry, or None when it is absent or empty."""
        if not self.main:
            return None
        if self.main in (".", "./"):
            return "index"
        return self.main


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant {name}")


def read_manifest(directory: str, options: ResolveOptions) -> PackageManifest | None:
    """Read and parse the manifest in a directory.

    Malformed manifests are treated as missing: invalid or too deeply nested
    JSON, NaN/Infinity constants, a failing transform hook or a non-object
    document all return None. Invalid UTF-8 bytes decode to U+FFFD.
    Filesystem errors propagate.

    Args:
        directory: Package directory
        options: Resolution options (filesystem and manifest_transform)

    Returns:
        Parsed manifest, or None if there is no usable manifest
    """
    manifest_file = options.path.join(directory, MANIFEST_FILENAME)
    if not options.filesystem.is_file(manifest_file):
        return None

    body = options.filesystem.read_file(manifest_file)
    try:
        data = json.loads(body.decode("utf-8", errors="replace"), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug(f"[resolve] ignoring malformed manifest {manifest_file}: {e}")
        return None

    if options.manifest_transform is not None:
        try:
            data = options.manifest_transform(data, directory)
        except Exception as e:
            logger.debug(f"[resolve] manifest transform failed for {manifest_file}: {e}")
            return None

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        logger.debug(f"[resolve] ignoring invalid manifest {manifest_file}: {e.error_count()} error(s)")
        return None


def browser_field_transform(manifest: dict[str, Any], directory: str) -> dict[str, Any]:
    """Prefer a string `browser` field over `main`.

    Returns a new dict; the parsed manifest is left untouched.
    """
    browser = manifest.get("browser") if isinstance(manifest, dict) else None
    if isinstance(browser, str) and browser:
        return {**manifest, "main": browser}
    return manifest
