"""
Release asset models — the raw upstream record and its validated form.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OsTag = Literal["mac", "linux", "unknown"]
CpuTag = Literal["intel", "arm", "unknown"]


class RawReleaseAsset(BaseModel):
    """A release asset as reported by the GitHub API.

    Unknown keys from the API payload are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    browser_download_url: str | None = None
    digest: str | None = None  # "sha256:<hex>" when GitHub has computed one


class Asset(BaseModel):
    """A tarball that passed normalization and has a resolved digest.

    Serialized for templates with ``sha256`` as the digest key:

        asset.model_dump(by_alias=True)
        → {"cpu": ..., "os": ..., "sha256": ..., "url": ...}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cpu: CpuTag = "unknown"
    os: OsTag = "unknown"
    digest: str = Field(min_length=1, serialization_alias="sha256")
    url: str = Field(min_length=1)
