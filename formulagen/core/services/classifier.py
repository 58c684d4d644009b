"""
Asset classifier — guess target OS and CPU from an artifact name or URL.

Rust release tarballs carry their target triple in the file name
(``frobber-aarch64-apple-darwin.tar.gz``), so plain substring checks
are enough.  Matching is case-sensitive and never fails: anything
unrecognized is tagged ``"unknown"``.
"""

from __future__ import annotations

# Checked in order, first match wins.
_OS_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mac", ("apple", "mac", "darwin")),
    ("linux", ("linux",)),
)

_CPU_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("intel", ("intel", "x86_64")),
    ("arm", ("aarch", "arm")),
)

UNKNOWN = "unknown"


def _match(value: str, markers: tuple[tuple[str, tuple[str, ...]], ...]) -> str:
    for tag, needles in markers:
        if any(needle in value for needle in needles):
            return tag
    return UNKNOWN


def classify_os(value: str) -> str:
    """Return ``"mac"``, ``"linux"`` or ``"unknown"``."""
    return _match(value, _OS_MARKERS)


def classify_cpu(value: str) -> str:
    """Return ``"intel"``, ``"arm"`` or ``"unknown"``."""
    return _match(value, _CPU_MARKERS)


def classify(value: str) -> tuple[str, str]:
    """Classify an artifact name or URL.

    Returns:
        ``(os_tag, cpu_tag)``
    """
    return classify_os(value), classify_cpu(value)
