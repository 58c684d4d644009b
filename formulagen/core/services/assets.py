"""
Asset normalizer — turn raw release assets into validated ``Asset``s.

Each raw asset gets its own explicit outcome, ``AssetOk`` or
``AssetSkipped``.  A skipped asset never stops the batch: a release may
legitimately carry source archives, signatures or checksum files next
to the tarballs, or no binaries at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Union

from pydantic import ValidationError

from formulagen.core.errors import DigestError
from formulagen.core.models.asset import Asset, RawReleaseAsset
from formulagen.core.services.checksum import resolve_digest, strip_algorithm
from formulagen.core.services.classifier import classify

logger = logging.getLogger(__name__)

TARBALL_SUFFIX = ".tar.gz"

DigestResolver = Callable[[Path, str], str]


@dataclass(frozen=True)
class AssetOk:
    """A raw asset that normalized successfully."""

    asset: Asset


@dataclass(frozen=True)
class AssetSkipped:
    """A raw asset that was left out, and why."""

    name: str | None
    reason: str

    def to_dict(self) -> dict:
        return {"name": self.name, "reason": self.reason}


AssetResult = Union[AssetOk, AssetSkipped]


def normalize(
    raw: RawReleaseAsset,
    *,
    local_dir: Path | None = None,
    resolver: DigestResolver = resolve_digest,
) -> AssetResult:
    """Validate one raw asset and resolve its digest and platform.

    Args:
        raw: Asset record from the release data.
        local_dir: Directory holding local tarballs and sidecars.
            Defaults to the working directory.
        resolver: Digest resolver, called only when the release data
            carries no usable digest of its own (missing, or only an
            algorithm prefix such as ``"sha256:"``).

    Returns:
        ``AssetOk`` with the normalized asset, or ``AssetSkipped``.
    """
    name = raw.name
    if not name:
        return AssetSkipped(name, "asset has no name")
    if not name.endswith(TARBALL_SUFFIX):
        return AssetSkipped(name, "not a tarball")

    url = raw.browser_download_url
    if not url:
        return AssetSkipped(name, "no download url")

    digest = strip_algorithm(raw.digest) if raw.digest else ""
    if not digest:
        local_path = (local_dir / name) if local_dir is not None else Path(name)
        try:
            digest = resolver(local_path, url)
        except DigestError as e:
            return AssetSkipped(name, f"cannot calculate a digest: {e}")

    os_tag, cpu_tag = classify(url)
    try:
        asset = Asset(cpu=cpu_tag, os=os_tag, digest=digest, url=url)
    except ValidationError as e:
        return AssetSkipped(name, f"invalid asset: {e.errors()[0]['msg']}")
    return AssetOk(asset)


def normalize_all(
    raws: Iterable[RawReleaseAsset],
    *,
    local_dir: Path | None = None,
    resolver: DigestResolver = resolve_digest,
) -> list[AssetResult]:
    """Normalize every raw asset, keeping input order."""
    results: list[AssetResult] = []
    for raw in raws:
        result = normalize(raw, local_dir=local_dir, resolver=resolver)
        if isinstance(result, AssetSkipped):
            logger.info("Skipping asset %s: %s", result.name or "<unnamed>", result.reason)
        else:
            logger.debug("Accepted %s (%s/%s)", result.asset.url, result.asset.os, result.asset.cpu)
        results.append(result)
    return results


def accepted_assets(results: Iterable[AssetResult]) -> list[Asset]:
    """The assets that normalized successfully, in order."""
    return [r.asset for r in results if isinstance(r, AssetOk)]


def skipped_assets(results: Iterable[AssetResult]) -> list[AssetSkipped]:
    return [r for r in results if isinstance(r, AssetSkipped)]
