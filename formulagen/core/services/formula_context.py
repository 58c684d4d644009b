"""
Formula context builder — package metadata + assets → ``FormulaContext``.

The only computation here is defaulting: optional metadata becomes an
empty string, a missing license becomes ``"unlicensed"``, and the
package name is title-cased into a Ruby class name.
"""

from __future__ import annotations

import re
from typing import Iterable

from pydantic import ValidationError

from formulagen.core.errors import ContextError
from formulagen.core.models.asset import Asset
from formulagen.core.models.formula import FormulaContext
from formulagen.core.models.manifest import CargoManifest
from formulagen.core.models.package import PackageInfo

DEFAULT_LICENSE = "unlicensed"

_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z0-9]+")


def title_case(name: str) -> str:
    """Title-case a package name into a class name.

    ``frobber`` → ``Frobber``, ``frob-cli`` → ``FrobCli``,
    ``frobHTTPServer`` → ``FrobHttpServer``, ``abc123def`` → ``Abc123def``.
    """
    return "".join(word.capitalize() for word in _WORD.findall(name))


def build_context(
    package: PackageInfo | None,
    executable: str | None,
    assets: Iterable[Asset],
) -> FormulaContext:
    """Assemble the template context.

    Args:
        package: Package metadata from the manifest.
        executable: Name of the binary the formula installs.
        assets: Normalized assets, in release order.

    Raises:
        ContextError: No package metadata, or no executable name.
    """
    if package is None:
        raise ContextError("The Rust project must have at least one package in it.")
    if not executable:
        raise ContextError("The binary executable needs a name.")

    return FormulaContext(
        package=title_case(package.name),
        description=package.description or "",
        executable=executable,
        homepage=package.homepage or "",
        version=package.version,
        license=package.license or DEFAULT_LICENSE,
        assets=tuple(assets),
    )


def executable_name(manifest: CargoManifest) -> str:
    """Name of the first binary target.

    Raises:
        ContextError: The crate has no binary target, or it is unnamed.
    """
    if not manifest.bin:
        raise ContextError(
            "No support for making formulas for Rust libraries, only for Rust binaries."
        )
    name = manifest.bin[0].name
    if not name:
        raise ContextError("The binary executable needs a name.")
    return name


def package_info(manifest: CargoManifest) -> PackageInfo:
    """The validated ``[package]`` section; raises ``ContextError``."""
    if manifest.package is None:
        raise ContextError("The Rust project must have at least one package in it.")
    try:
        return manifest.package.to_package_info()
    except ValidationError as e:
        fields = " and ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ContextError(f"The Rust package needs a non-empty {fields or 'name and version'}.") from e


def build_context_from_manifest(
    manifest: CargoManifest,
    assets: Iterable[Asset],
) -> FormulaContext:
    """``build_context`` fed straight from a parsed Cargo.toml."""
    return build_context(
        package_info(manifest),
        executable_name(manifest),
        assets,
    )
