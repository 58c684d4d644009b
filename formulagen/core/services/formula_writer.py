"""
Formula writer — put the rendered formula on disk as ``<executable>.rb``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from formulagen.core.errors import FormulaWriteError

logger = logging.getLogger(__name__)


def formula_filename(executable: str) -> str:
    return f"{executable}.rb"


def write_formula(text: str, executable: str, output_dir: Path | None = None) -> Path:
    """Write the formula, replacing any existing file.

    Returns:
        Path of the written file.

    Raises:
        FormulaWriteError: The file could not be written.
    """
    path = (output_dir or Path.cwd()) / formula_filename(executable)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FormulaWriteError(f"Cannot write {path}: {e}") from e

    if not text:
        logger.warning("Wrote an empty formula to %s", path)
    else:
        logger.info("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))
    return path
