"""
Generate use case — manifest + release data → formula file.

Orchestrates the whole pipeline:

    Cargo.toml ──► CargoManifest
    release API / dist/ ──► RawReleaseAsset[] ──► normalize_all ──► Asset[]
    manifest + assets ──► FormulaContext ──► render ──► <executable>.rb

Fatal problems end up in ``GenerateResult.error``; assets that could
not be used end up in ``GenerateResult.skipped``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from formulagen.core.config.manifest import load_manifest
from formulagen.core.errors import CredentialsError, FormulagenError
from formulagen.core.models.asset import Asset, RawReleaseAsset
from formulagen.core.models.formula import FormulaStrategy
from formulagen.core.models.package import PackageInfo
from formulagen.core.services.assets import (
    AssetSkipped,
    DigestResolver,
    accepted_assets,
    normalize_all,
    skipped_assets,
)
from formulagen.core.services.checksum import resolve_digest
from formulagen.core.services.dist_scan import DIST_DIR, scan_dist
from formulagen.core.services.formula_context import (
    build_context_from_manifest,
    executable_name,
    package_info,
)
from formulagen.core.services.formula_writer import write_formula
from formulagen.core.services.generators.formula import render
from formulagen.core.services.github_release import (
    GITHUB_API_URL,
    fetch_latest_release_assets,
    parse_repository,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Outcome of one formula generation run."""

    formula_path: Path | None = None
    executable: str | None = None
    strategy: FormulaStrategy = FormulaStrategy.DIRECT
    assets: list[Asset] = field(default_factory=list)
    skipped: list[AssetSkipped] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        return {
            "formula_path": str(self.formula_path) if self.formula_path else None,
            "executable": self.executable,
            "strategy": self.strategy.value,
            "assets": [a.model_dump(by_alias=True) for a in self.assets],
            "skipped": [s.to_dict() for s in self.skipped],
        }


def _release_assets(
    package: PackageInfo,
    manifest_path: Path,
    *,
    no_perms: bool,
    token: str | None,
    api_url: str,
) -> tuple[list[RawReleaseAsset], Path | None]:
    """Raw assets and the directory holding their local copies."""
    owner, repo = parse_repository(package.repository)

    if no_perms:
        dist_dir = manifest_path.parent / DIST_DIR
        return scan_dist(dist_dir, owner, repo, package.version), dist_dir

    if not token:
        raise CredentialsError(
            "A GitHub token is required to read release data (or use --no-perms)."
        )
    return fetch_latest_release_assets(owner, repo, token, api_url=api_url), None


def generate_formula(
    manifest_path: Path,
    *,
    strategy: FormulaStrategy = FormulaStrategy.DIRECT,
    no_perms: bool = False,
    token: str | None = None,
    output_dir: Path | None = None,
    api_url: str = GITHUB_API_URL,
    resolver: DigestResolver = resolve_digest,
) -> GenerateResult:
    """Generate ``<executable>.rb`` for the crate at *manifest_path*.

    Args:
        manifest_path: Path to Cargo.toml.
        strategy: Formula download strategy.
        no_perms: Build assets from the local ``dist/`` directory
            instead of the GitHub release API.
        token: GitHub token; required unless ``no_perms``.
        output_dir: Where to write the formula (default: cwd).
        api_url: GitHub API base URL.
        resolver: Digest resolver for assets without an upstream digest.

    Returns:
        GenerateResult; ``error`` is set when the run failed.
    """
    result = GenerateResult(strategy=strategy)

    try:
        manifest = load_manifest(manifest_path)
        # Validates package + binary before any network traffic.
        package = package_info(manifest)
        executable_name(manifest)

        raws, local_dir = _release_assets(
            package, manifest_path,
            no_perms=no_perms, token=token, api_url=api_url,
        )
        results = normalize_all(raws, local_dir=local_dir, resolver=resolver)
        result.assets = accepted_assets(results)
        result.skipped = skipped_assets(results)

        context = build_context_from_manifest(manifest, result.assets)
        result.executable = context.executable

        text = render(strategy, context)
        result.formula_path = write_formula(text, context.executable, output_dir)
    except FormulagenError as e:
        result.error = str(e)
    except jinja2.TemplateError as e:
        result.error = f"Template rendering failed: {e}"

    if result.error:
        logger.debug("Formula generation failed: %s", result.error)
    else:
        logger.info(
            "Generated %s with %d assets (%d skipped)",
            result.formula_path, len(result.assets), len(result.skipped),
        )
    return result
