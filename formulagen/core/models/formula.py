"""
Formula models — rendering strategy and the template context.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from formulagen.core.models.asset import Asset


class FormulaStrategy(str, Enum):
    """How the generated formula downloads its tarballs.

    DIRECT:  plain ``url``/``sha256`` pairs, fetched by Homebrew itself.
    GH_CLI:  downloads go through ``gh release download``; needed when
             the release repository is private.
    """

    DIRECT = "direct"
    GH_CLI = "gh-cli"


class FormulaContext(BaseModel):
    """Everything a formula template can reference."""

    model_config = ConfigDict(frozen=True)

    package: str
    description: str
    executable: str
    homepage: str
    version: str
    license: str
    assets: tuple[Asset, ...] = Field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Template-facing mapping; assets use the ``sha256`` key."""
        return self.model_dump(by_alias=True)
