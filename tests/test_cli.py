"""CLI smoke tests using typer's CliRunner."""

import pytest
from typer.testing import CliRunner

from batchexec import __version__
from batchexec.cli.app import app, console

runner = CliRunner()

LOV_YAML = """\
color:
  red: warm
  blue: cool
size:
  s: small
  m: medium
  l: large
"""


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(console, "width", 200)


@pytest.fixture
def lov_file(tmp_path):
    path = tmp_path / "lov.yaml"
    path.write_text(LOV_YAML)
    return path


class TestVersionFlag:
    """Tests for --version."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"batchexec {__version__}" in result.output


class TestAttributesCommand:
    """Tests for the attributes command."""

    def test_public_attributes(self):
        result = runner.invoke(app, ["attributes"])
        assert result.exit_code == 0
        assert "BatchExec attributes" in result.output
        assert "autoheader" in result.output
        assert "wsl_active" in result.output
        assert "_lov" not in result.output

    def test_all_includes_handles(self):
        result = runner.invoke(app, ["attributes", "--all"])
        assert result.exit_code == 0
        assert "_log" in result.output
        assert "_lov" in result.output
        assert "handle" in result.output


class TestPlatformCommand:
    """Tests for the platform command."""

    def test_platform(self):
        result = runner.invoke(app, ["platform"])
        assert result.exit_code == 0
        assert "on_linux" in result.output
        assert "like_windows" in result.output
        assert "OS version:" in result.output


class TestLovCommand:
    """Tests for the lov command."""

    def test_lists_classes(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file)])
        assert result.exit_code == 0
        assert "color" in result.output
        assert "size" in result.output

    def test_lists_keys(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file), "--class", "size"])
        assert result.exit_code == 0
        assert "medium" in result.output
        assert "large" in result.output

    def test_lookup_key(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file), "-c", "color", "-k", "red"])
        assert result.exit_code == 0
        assert result.output.strip() == "warm"

    def test_unknown_key(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file), "-c", "color", "-k", "pink"])
        assert result.exit_code == 1
        assert "no such value [pink] [blue, red]" in result.output

    def test_unknown_class(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file), "--class", "shape"])
        assert result.exit_code == 1
        assert "no such LoV exists [shape]" in result.output

    def test_key_requires_class(self, lov_file):
        result = runner.invoke(app, ["lov", str(lov_file), "--key", "red"])
        assert result.exit_code == 1
        assert "--key requires --class" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["lov", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 3
        assert "File not found" in result.output

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- red\n- blue\n")
        result = runner.invoke(app, ["lov", str(path)])
        assert result.exit_code == 1
        assert "expected a mapping of LoV classes" in result.output

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("color:\n  red: [warm\n")
        result = runner.invoke(app, ["lov", str(path)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "✗" in result.output
        assert "broken.yaml" in result.output
