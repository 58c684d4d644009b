"""
Checksum resolver — find the SHA-256 digest of a release tarball.

Sources are tried cheapest first, and the first one that yields a
digest wins:

    1. sidecar file ``<tarball>.sha256`` next to the local tarball
    2. the local tarball itself
    3. downloading the tarball from its release URL

Only the download can raise; a missing or malformed sidecar and a
missing tarball simply move on to the next source.
"""

from __future__ import annotations

import hashlib
import http.client
import logging
import re
import urllib.error
import urllib.request
from pathlib import Path

from formulagen.core.errors import DigestError

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".sha256"
DIGEST_LENGTH = 64

_HEX_DIGEST = re.compile(r"^[0-9a-fA-F]{64}$")
_CHUNK_SIZE = 1024 * 1024
_USER_AGENT = "formulagen/1.0"


def is_digest(value: str) -> bool:
    """True if *value* is exactly 64 hex characters."""
    return bool(_HEX_DIGEST.match(value))


def strip_algorithm(digest: str) -> str:
    """Drop an ``"algorithm:"`` prefix, as in GitHub's ``"sha256:<hex>"``."""
    _, sep, rest = digest.partition(":")
    return rest if sep else digest


# ── Tier 1: sidecar file ────────────────────────────────────────


def parse_sidecar(content: str, filename: str) -> str | None:
    """Extract a digest from the text of a shasum sidecar file.

    Accepted forms:
        <digest>
        sha256:<digest>
        <digest>  <filename>           (sha256sum, also " *<filename>")
        SHA256 (<filename>) = <digest> (BSD shasum)

    Args:
        content: Raw file text.
        filename: Name of the tarball the sidecar describes.

    Returns:
        Lower-case digest, or None if nothing valid was found.
    """
    text = content.strip()
    if not text:
        return None

    candidates: list[str] = [text]

    if text.startswith("sha256:"):
        candidates.append(text[len("sha256:"):].strip())

    basename = Path(filename).name
    for line in text.splitlines():
        line = line.rstrip()
        for name in {filename, basename}:
            for sep in ("  ", " *"):
                ending = f"{sep}{name}"
                if line.endswith(ending):
                    candidates.append(line[: -len(ending)].strip())

    if " = " in text:
        candidates.append(text.rsplit(" = ", 1)[1].strip())

    for candidate in candidates:
        if is_digest(candidate):
            return candidate.lower()
    return None


def _digest_from_sidecar(local_path: Path) -> str | None:
    sidecar = local_path.with_name(local_path.name + SIDECAR_SUFFIX)
    if not sidecar.is_file():
        return None
    try:
        content = sidecar.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read sidecar %s: %s", sidecar, e)
        return None

    digest = parse_sidecar(content, local_path.name)
    if digest is None:
        logger.debug("Sidecar %s holds no usable digest, ignoring it", sidecar)
    return digest


# ── Tier 2: local tarball ───────────────────────────────────────


def _digest_from_file(local_path: Path) -> str | None:
    if not local_path.is_file():
        return None
    try:
        data = local_path.read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", local_path, e)
        return None
    return hashlib.sha256(data).hexdigest()


# ── Tier 3: remote download ─────────────────────────────────────


def _download_digest(url: str, timeout: float | None = None) -> str:
    """GET *url* and hash the full response body."""
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    sha = hashlib.sha256()
    if timeout is None:
        resp = urllib.request.urlopen(req)
    else:
        resp = urllib.request.urlopen(req, timeout=timeout)
    with resp:
        while True:
            chunk = resp.read(_CHUNK_SIZE)
            if not chunk:
                break
            sha.update(chunk)
    return sha.hexdigest()


def resolve_digest(
    local_path: str | Path,
    remote_url: str,
    *,
    timeout: float | None = None,
) -> str:
    """Resolve the SHA-256 digest for a release tarball.

    Args:
        local_path: Where the tarball would be on disk.  Relative paths
            resolve against the working directory.
        remote_url: Download URL used when nothing local is usable.
        timeout: Optional socket timeout for the download, in seconds.

    Returns:
        64-character lower-case hex digest.

    Raises:
        DigestError: The download failed.
    """
    path = Path(local_path)

    digest = _digest_from_sidecar(path)
    if digest is not None:
        logger.debug("Digest for %s taken from sidecar", path)
        return digest

    digest = _digest_from_file(path)
    if digest is not None:
        logger.debug("Digest for %s computed from local file", path)
        return digest

    logger.info("Downloading %s to compute its digest", remote_url)
    try:
        return _download_digest(remote_url, timeout=timeout)
    except urllib.error.HTTPError as e:
        raise DigestError(f"Download of {remote_url} failed: HTTP {e.code}") from e
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        raise DigestError(f"Download of {remote_url} failed: {e}") from e
