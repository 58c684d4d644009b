"""
Cargo manifest model — the subset of Cargo.toml formulagen reads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from formulagen.core.models.package import PackageInfo


class CargoPackage(BaseModel):
    """The ``[package]`` section."""

    model_config = ConfigDict(extra="ignore")

    name: str
    version: str
    description: str | None = None
    homepage: str | None = None
    license: str | None = None
    repository: str | None = None

    def to_package_info(self) -> PackageInfo:
        return PackageInfo(
            name=self.name,
            version=self.version,
            description=self.description,
            homepage=self.homepage,
            license=self.license,
            repository=self.repository,
        )


class CargoBin(BaseModel):
    """One ``[[bin]]`` target."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    path: str | None = None


class CargoManifest(BaseModel):
    """A parsed Cargo.toml.

    ``package`` is absent for virtual workspace manifests; ``bin`` is
    empty for library-only crates.
    """

    model_config = ConfigDict(extra="ignore")

    package: CargoPackage | None = None
    bin: list[CargoBin] = Field(default_factory=list)
