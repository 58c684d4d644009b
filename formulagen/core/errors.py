"""
Error types shared by the core services.

Fatal errors derive from ``FormulagenError`` so the generate use case
can report them uniformly.  Per-asset problems are not exceptions at
the pipeline level; see ``services.assets``.
"""

from __future__ import annotations


class FormulagenError(Exception):
    """Base class for all fatal formulagen errors."""


class ManifestError(FormulagenError):
    """Raised when Cargo.toml is missing, unreadable or malformed."""


class ContextError(FormulagenError):
    """Raised when the manifest cannot describe an installable binary."""


class DigestError(FormulagenError):
    """Raised when the last-resort remote digest computation fails."""


class ReleaseError(FormulagenError):
    """Raised when release data cannot be fetched from GitHub."""


class CredentialsError(FormulagenError):
    """Raised when no GitHub token is available."""


class FormulaWriteError(FormulagenError):
    """Raised when the formula file cannot be written."""
