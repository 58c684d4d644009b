"""
Manifest loader — reads Cargo.toml into a ``CargoManifest``.

Only the fields formulagen needs are validated; everything else in the
manifest is ignored.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from formulagen.core.errors import ManifestError
from formulagen.core.models.manifest import CargoBin, CargoManifest

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "Cargo.toml"


def load_manifest(path: Path) -> CargoManifest:
    """Load and validate a Cargo manifest.

    A crate without ``[[bin]]`` entries still has an implicit binary
    named after the package when ``src/main.rs`` exists, as cargo does.

    Raises:
        ManifestError: Missing file, bad TOML, or invalid field types.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")

    logger.debug("Loading manifest from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    try:
        manifest = CargoManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e

    if not manifest.bin and manifest.package is not None:
        if (path.parent / "src" / "main.rs").is_file():
            manifest = manifest.model_copy(
                update={"bin": [CargoBin(name=manifest.package.name, path="src/main.rs")]}
            )

    if manifest.package is not None:
        logger.info(
            "Loaded manifest for %s %s", manifest.package.name, manifest.package.version
        )
    return manifest
