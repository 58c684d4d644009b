"""formulagen — Homebrew formula generator for Rust release binaries."""

__version__ = "0.1.0"
