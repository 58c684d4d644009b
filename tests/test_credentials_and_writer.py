"""
Tests for token discovery and formula file writing.
"""

from pathlib import Path

import pytest

from formulagen.core.errors import CredentialsError, FormulaWriteError
from formulagen.core.services.credentials import find_token
from formulagen.core.services.formula_writer import formula_filename, write_formula


class TestFindToken:
    def test_access_token_preferred(self):
        env = {"GITHUB_ACCESS_TOKEN": "a", "GITHUB_TOKEN": "b"}
        assert find_token(env) == "a"

    def test_falls_back_to_github_token(self):
        assert find_token({"GITHUB_TOKEN": "b"}) == "b"

    def test_empty_value_ignored(self):
        assert find_token({"GITHUB_ACCESS_TOKEN": "", "GITHUB_TOKEN": "b"}) == "b"

    def test_missing(self):
        with pytest.raises(CredentialsError, match="GITHUB_TOKEN"):
            find_token({})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        assert find_token() == "from-env"


class TestWriteFormula:
    def test_filename(self):
        assert formula_filename("frobber") == "frobber.rb"

    def test_writes_into_output_dir(self, tmp_path: Path):
        path = write_formula("class X < Formula\nend\n", "frobber", tmp_path / "Formula")
        assert path == tmp_path / "Formula" / "frobber.rb"
        assert path.read_text() == "class X < Formula\nend\n"

    def test_overwrites(self, tmp_path: Path):
        (tmp_path / "frobber.rb").write_text("old")
        write_formula("new", "frobber", tmp_path)
        assert (tmp_path / "frobber.rb").read_text() == "new"

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = write_formula("x", "frobber")
        assert path == tmp_path / "frobber.rb"
        assert path.exists()

    def test_empty_formula_warns(self, tmp_path: Path, caplog):
        with caplog.at_level("WARNING"):
            write_formula("", "frobber", tmp_path)
        assert "empty formula" in caplog.text

    def test_unwritable(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(FormulaWriteError):
            write_formula("x", "frobber", blocker)
