"""
Logging setup for the formulagen CLI.

``main.py`` calls ``setup_logging`` once; modules just use
``logging.getLogger(__name__)``.

The console level comes from the CLI flags, then FORMULAGEN_LOG_LEVEL,
then WARNING.  FORMULAGEN_LOG_FILE adds a file handler whose level is
FORMULAGEN_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping

LEVEL_VAR = "FORMULAGEN_LOG_LEVEL"
FILE_VAR = "FORMULAGEN_LOG_FILE"
FILE_LEVEL_VAR = "FORMULAGEN_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# (upper bound, format, datefmt), checked in order
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)


def parse_level(level: str | None) -> int:
    """Level name → numeric level; empty or unknown names give WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = "%(message)s", None
    for bound, bound_fmt, bound_datefmt in _CONSOLE_FORMATS:
        if level <= bound:
            fmt, datefmt = bound_fmt, bound_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str | None = None,
    *,
    log_file: str | None = None,
    log_file_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name; ``None`` reads FORMULAGEN_LOG_LEVEL.
        log_file: Log file path; ``None`` reads FORMULAGEN_LOG_FILE.
        log_file_level: File level name; ``None`` reads
            FORMULAGEN_LOG_FILE_LEVEL, then falls back to ``level``.
        environ: Environment to read (default: ``os.environ``).
    """
    env = os.environ if environ is None else environ
    console_level = parse_level(level or env.get(LEVEL_VAR))
    handlers = [_console_handler(console_level)]

    path = log_file or env.get(FILE_VAR)
    if path:
        file_level_name = log_file_level or env.get(FILE_LEVEL_VAR)
        file_level = parse_level(file_level_name) if file_level_name else console_level
        handlers.append(_file_handler(path, file_level))

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))

    # CliRunner closes its streams between invocations
    logging.raiseExceptions = False
