"""
GitHub release client — fetch the assets of a repository's latest release.

Uses the REST API directly with a bearer token:

    GET {api_url}/repos/{owner}/{repo}/releases/latest
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request

from pydantic import ValidationError

from formulagen.core.errors import ReleaseError
from formulagen.core.models.asset import RawReleaseAsset

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
RELEASE_DOWNLOAD_URL = "https://github.com/{owner}/{repo}/releases/download/v{version}/{filename}"

_USER_AGENT = "formulagen/1.0"


def parse_repository(repository: str | None) -> tuple[str, str]:
    """Split a repository URL into ``(owner, repo)``.

    ``https://github.com/acme/frobber.git`` → ``("acme", "frobber")``

    Raises:
        ReleaseError: The URL has no owner/repo path.
    """
    chunks = [c for c in (repository or "").strip().rstrip("/").split("/") if c]
    if len(chunks) < 2:
        raise ReleaseError(
            f"Cannot determine GitHub owner/repo from repository {repository!r}"
        )
    repo = chunks[-1].removesuffix(".git")
    owner = chunks[-2]
    if not repo or not owner:
        raise ReleaseError(
            f"Cannot determine GitHub owner/repo from repository {repository!r}"
        )
    return owner, repo


def release_download_url(owner: str, repo: str, version: str, filename: str) -> str:
    """Browser download URL of a file attached to release ``v{version}``."""
    return RELEASE_DOWNLOAD_URL.format(
        owner=owner, repo=repo, version=version, filename=filename,
    )


def _get_json(url: str, token: str, timeout: float) -> object:
    req = urllib.request.Request(
        url,
        headers={
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": _USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        },
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


def fetch_latest_release_assets(
    owner: str,
    repo: str,
    token: str,
    *,
    api_url: str = GITHUB_API_URL,
    timeout: float = 30,
) -> list[RawReleaseAsset]:
    """Assets of the latest published release, in API order.

    A release without assets yields an empty list.

    Raises:
        ReleaseError: The request failed or returned unexpected data.
    """
    url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/releases/latest"
    logger.info("Fetching latest release of %s/%s", owner, repo)

    try:
        payload = _get_json(url, token, timeout)
    except urllib.error.HTTPError as e:
        raise ReleaseError(
            f"unable to get latest release of {owner}/{repo}: HTTP {e.code}"
        ) from e
    except (urllib.error.URLError, OSError) as e:
        raise ReleaseError(f"unable to get latest release of {owner}/{repo}: {e}") from e
    except ValueError as e:
        raise ReleaseError(f"Invalid JSON from {url}: {e}") from e

    if not isinstance(payload, dict):
        raise ReleaseError(f"Unexpected release payload from {url}")

    raw_assets = payload.get("assets") or []
    try:
        assets = [RawReleaseAsset.model_validate(a) for a in raw_assets]
    except ValidationError as e:
        raise ReleaseError(f"Unexpected asset data from {url}: {e}") from e

    logger.info(
        "Release %s has %d assets", payload.get("tag_name", "?"), len(assets)
    )
    return assets
