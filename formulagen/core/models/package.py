"""
Package model — the identity of the crate being packaged.

Built once per run from the ``[package]`` section of Cargo.toml.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PackageInfo(BaseModel):
    """Package metadata used to fill the formula header.

    Optional fields stay ``None`` here; defaulting them is the job of
    the formula context builder.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    description: str | None = None
    homepage: str | None = None
    license: str | None = None
    repository: str | None = None

    @field_validator("name", "version")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value
