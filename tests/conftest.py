"""
Shared test fixtures and configuration.
"""

import hashlib
import io
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def tarball_bytes() -> bytes:
    return b"\x1f\x8b\x08\x00 not really a tarball"


@pytest.fixture
def tarball_digest(tarball_bytes: bytes) -> str:
    return hashlib.sha256(tarball_bytes).hexdigest()


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """A crate directory with a Cargo.toml declaring one binary."""
    content = textwrap.dedent("""\
        [package]
        name = "frobber"
        version = "1.0.5"
        description = "Frobs the whizzbanger"
        homepage = "https://example.com"
        license = "MIT"
        repository = "https://github.com/acme/frobber.git"

        [[bin]]
        name = "frobber"
        path = "src/main.rs"

        [dependencies]
        clap = "4"
    """)
    (tmp_path / "Cargo.toml").write_text(content)
    return tmp_path


class FakeResponse(io.BytesIO):
    """Stands in for the object returned by ``urllib.request.urlopen``."""


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Route urlopen to a dict of ``url → bytes``; records requests.

    Unknown URLs raise HTTP 404.
    """
    import urllib.error

    responses: dict[str, bytes] = {}
    requests: list = []

    def _urlopen(req, timeout=None):
        url = req.full_url if hasattr(req, "full_url") else req
        requests.append(req)
        if url not in responses:
            raise urllib.error.HTTPError(url, 404, "Not Found", hdrs=None, fp=None)
        return FakeResponse(responses[url])

    monkeypatch.setattr("urllib.request.urlopen", _urlopen)
    _urlopen.responses = responses
    _urlopen.requests = requests
    return _urlopen
