"""
Configuration loader — reads the optional ``.formulagen.yml``.

The file holds defaults for the ``generate`` command so a repository
can pin its formula strategy.  Command-line flags always win over it.

    strategy: gh-cli
    no_perms: false
    output_dir: Formula
    manifest: Cargo.toml
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from formulagen.core.errors import FormulagenError
from formulagen.core.models.formula import FormulaStrategy
from formulagen.core.services.github_release import GITHUB_API_URL

logger = logging.getLogger(__name__)

CONFIG_FILE = ".formulagen.yml"


class ConfigError(FormulagenError):
    """Raised when the configuration file is invalid or missing."""


class FormulaConfig(BaseModel):
    """Settings for formula generation."""

    model_config = ConfigDict(extra="forbid")

    strategy: FormulaStrategy = FormulaStrategy.DIRECT
    no_perms: bool = False
    output_dir: str | None = None
    manifest: str | None = None
    api_url: str = GITHUB_API_URL


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .formulagen.yml starting from the given directory, walking up.

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> FormulaConfig:
    """Load the configuration, or defaults when there is no file.

    Args:
        path: Explicit config path.  If None, searches upward from cwd.

    Raises:
        ConfigError: An explicit path is missing, or the file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return FormulaConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return FormulaConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return FormulaConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
