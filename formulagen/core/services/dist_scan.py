"""
Local dist scanner — build release assets from a ``dist/`` directory.

For "no-perms" runs: when the token cannot read the repository's
releases, the tarballs in ``dist/`` beside Cargo.toml stand in for the
release assets.  Download URLs are derived from the version tag.
"""

from __future__ import annotations

import logging
from pathlib import Path

from formulagen.core.models.asset import RawReleaseAsset
from formulagen.core.services.github_release import release_download_url

logger = logging.getLogger(__name__)

DIST_DIR = "dist"


def scan_dist(dist_dir: Path, owner: str, repo: str, version: str) -> list[RawReleaseAsset]:
    """List gzip files in *dist_dir* as raw assets, sorted by name.

    A missing directory is not an error; it yields no assets.
    """
    if not dist_dir.is_dir():
        logger.info("No %s directory, no local assets", dist_dir)
        return []

    assets: list[RawReleaseAsset] = []
    for entry in sorted(dist_dir.iterdir()):
        if not entry.is_file() or entry.suffix.lower() != ".gz":
            continue
        assets.append(
            RawReleaseAsset(
                name=entry.name,
                browser_download_url=release_download_url(owner, repo, version, entry.name),
            )
        )

    logger.debug("Found %d gzip files in %s", len(assets), dist_dir)
    return assets
