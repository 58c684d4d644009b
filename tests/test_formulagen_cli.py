"""
Tests for CLI commands — generate, classify, digest, and global options.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from formulagen.main import cli

DIGEST = "e" * 64


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Homebrew formulas" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def _dist(self, project: Path) -> None:
        dist = project / "dist"
        dist.mkdir()
        (dist / "frobber-aarch64-apple-darwin.tar.gz").write_bytes(b"mac")
        (dist / "frobber-aarch64-apple-darwin.tar.gz.sha256").write_text(DIGEST)

    def test_no_perms(self, cargo_project: Path, monkeypatch):
        monkeypatch.chdir(cargo_project)
        self._dist(cargo_project)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--no-perms"])
        assert result.exit_code == 0, result.output
        assert result.output.strip().endswith("frobber.rb")
        text = (cargo_project / "frobber.rb").read_text()
        assert f'sha256 "{DIGEST}"' in text
        assert 'bin.install "frobber" if OS.mac? && Hardware::CPU.arm?' in text

    def test_gh_cli_flag(self, cargo_project: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(cargo_project)
        self._dist(cargo_project)
        out = tmp_path / "Formula"
        runner = CliRunner()
        result = runner.invoke(cli, [
            "generate", str(cargo_project / "Cargo.toml"), "-n", "-g", "-o", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert ":using => GitHubCliDownloadStrategy" in (out / "frobber.rb").read_text()

    def test_json_output(self, cargo_project: Path, monkeypatch):
        monkeypatch.chdir(cargo_project)
        self._dist(cargo_project)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--no-perms", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["executable"] == "frobber"
        assert data["assets"][0]["os"] == "mac"

    def test_config_file_strategy(self, cargo_project: Path, monkeypatch):
        monkeypatch.chdir(cargo_project)
        self._dist(cargo_project)
        (cargo_project / ".formulagen.yml").write_text("strategy: gh-cli\nno_perms: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 0, result.output
        assert "GitHubCliDownloadStrategy" in (cargo_project / "frobber.rb").read_text()

    def test_missing_token(self, cargo_project: Path, monkeypatch):
        monkeypatch.chdir(cargo_project)
        monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 1
        assert "GITHUB_ACCESS_TOKEN" in result.output

    def test_missing_manifest(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--no-perms"])
        assert result.exit_code == 1
        assert "Manifest not found" in result.output

    def test_missing_manifest_json(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--no-perms", "--json"])
        assert result.exit_code == 1
        assert "error" in json.loads(result.output)

    def test_blank_package_name(self, tmp_path: Path, monkeypatch):
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = ""\nversion = "1.0.0"\n\n[[bin]]\nname = "x"\n'
        )
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--no-perms"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "non-empty name" in result.output


class TestClassifyCommand:
    def test_table(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["classify", "frobber-aarch64-apple-darwin.tar.gz"])
        assert result.exit_code == 0
        assert result.output.split()[:2] == ["mac", "arm"]

    def test_json(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["classify", "--json", "widget.zip", "x86_64-unknown-linux"])
        data = json.loads(result.output)
        assert [(r["os"], r["cpu"]) for r in data] == [("unknown", "unknown"), ("linux", "intel")]


class TestDigestCommand:
    def test_local_file(self, tmp_path: Path, monkeypatch, tarball_bytes, tarball_digest):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "a.tar.gz").write_bytes(tarball_bytes)
        runner = CliRunner()
        result = runner.invoke(cli, ["digest", "a.tar.gz"])
        assert result.exit_code == 0
        assert result.output.strip() == tarball_digest

    def test_download_failure(self, tmp_path: Path, monkeypatch, fake_urlopen):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["digest", "a.tar.gz", "--url", "https://example.com/a.tar.gz"])
        assert result.exit_code == 1
        assert "HTTP 404" in result.output
