"""
Tests for the local dist/ scanner used by --no-perms.
"""

from pathlib import Path

from formulagen.core.services.dist_scan import scan_dist


class TestScanDist:
    def test_gzip_files_sorted(self, tmp_path: Path):
        dist = tmp_path / "dist"
        dist.mkdir()
        (dist / "frobber-x86_64-unknown-linux-gnu.tar.gz").write_bytes(b"l")
        (dist / "frobber-aarch64-apple-darwin.tar.gz").write_bytes(b"m")
        (dist / "frobber-aarch64-apple-darwin.tar.gz.sha256").write_text("x")
        (dist / "notes.txt").write_text("x")
        (dist / "nested.gz").mkdir()

        assets = scan_dist(dist, "acme", "frobber", "1.0.5")

        assert [a.name for a in assets] == [
            "frobber-aarch64-apple-darwin.tar.gz",
            "frobber-x86_64-unknown-linux-gnu.tar.gz",
        ]
        assert assets[0].browser_download_url == (
            "https://github.com/acme/frobber/releases/download/v1.0.5/"
            "frobber-aarch64-apple-darwin.tar.gz"
        )
        assert assets[0].digest is None

    def test_upper_case_extension(self, tmp_path: Path):
        (tmp_path / "TOOL.GZ").write_bytes(b"x")
        assert [a.name for a in scan_dist(tmp_path, "o", "r", "1")] == ["TOOL.GZ"]

    def test_missing_dir(self, tmp_path: Path):
        assert scan_dist(tmp_path / "dist", "acme", "frobber", "1.0.5") == []
