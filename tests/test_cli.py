"""
Tests cho command line (main.py) voi click.testing.CliRunner.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from main import main


@pytest.fixture
def settings_file(tmp_path: Path):
    path = tmp_path / "cfg" / "settings.json"
    with patch("services.settings_manager.SETTINGS_FILE", path):
        yield path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("x\ny\n", encoding="utf-8")
    (root / "sub" / "b.txt").write_text("z", encoding="utf-8")
    (root / "ignored.py").write_text("print(1)\n", encoding="utf-8")
    return root


def _invoke(*args: str):
    return CliRunner().invoke(main, list(args))


class TestIndexCommand:
    def test_prints_tree(self, settings_file, project: Path):
        result = _invoke("index", str(project), "--ext", ".txt", "-q")

        assert result.exit_code == 0, result.output
        assert "proj/ (3 lines)" in result.output
        assert "├── sub/ (1 lines)" in result.output
        assert "⚪ a.txt (2)" in result.output
        assert "ignored.py" not in result.output

    def test_token_mode(self, settings_file, project: Path):
        (project / "a.txt").write_text("one two three\n", encoding="utf-8")

        result = _invoke("index", str(project), "-e", "txt", "-m", "tokens", "-q")

        assert result.exit_code == 0, result.output
        assert "proj/ (4 tokens)" in result.output

    def test_custom_thresholds(self, settings_file, project: Path):
        result = _invoke("index", str(project), "-e", ".txt", "-t", "0,2", "-q")

        assert result.exit_code == 0, result.output
        assert "🔵 a.txt (2)" in result.output
        assert "⚪ b.txt (1)" in result.output

    def test_non_finite_thresholds_use_defaults(self, settings_file, project: Path):
        result = _invoke("index", str(project), "-e", ".txt", "-t", "nan", "-q")

        assert result.exit_code == 0, result.output
        assert "⚪ a.txt (2)" in result.output

    def test_symbol_set(self, settings_file, project: Path):
        result = _invoke(
            "index", str(project), "-e", ".txt", "-t", "0,2", "--symbol-set", "Numbers", "-q"
        )

        assert result.exit_code == 0, result.output
        assert "2 a.txt (2)" in result.output

    def test_exclude_pattern(self, settings_file, project: Path):
        result = _invoke("index", str(project), "-e", ".txt", "-x", "sub/", "-q")

        assert result.exit_code == 0, result.output
        assert "proj/ (2 lines)" in result.output
        assert "sub/" not in result.output

    def test_depth(self, settings_file, project: Path):
        result = _invoke("index", str(project), "-e", ".txt", "-d", "0", "-q")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "proj/ (3 lines)"

    def test_preset(self, settings_file, project: Path):
        (project / "notes.md").write_text("# title\n", encoding="utf-8")

        result = _invoke("index", str(project), "-p", "documentation", "-q")

        assert result.exit_code == 0, result.output
        assert "📝 notes.md (1)" in result.output

    def test_uses_saved_settings(self, settings_file, project: Path):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text(
            json.dumps({"supported_extensions": [".py"], "excluded_folders": "sub"})
        )

        result = _invoke("index", str(project), "-q")

        assert result.exit_code == 0, result.output
        assert "ignored.py (1)" in result.output
        assert "a.txt" not in result.output

    def test_disabled(self, settings_file, project: Path):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text(json.dumps({"enabled": False}))

        result = _invoke("index", str(project))

        assert result.exit_code == 1

    def test_missing_root(self, settings_file, tmp_path: Path):
        result = _invoke("index", str(tmp_path / "missing"))
        assert result.exit_code == 2


class TestOtherCommands:
    def test_presets(self, settings_file):
        result = _invoke("presets")

        assert result.exit_code == 0
        assert "* default" in result.output
        assert "llm-context" in result.output

    def test_use_preset(self, settings_file):
        result = _invoke("use-preset", "code-review")

        assert result.exit_code == 0, result.output
        data = json.loads(settings_file.read_text(encoding="utf-8"))
        assert data["selected_preset"] == "code-review"
        assert ".go" in data["supported_extensions"]

    def test_use_unknown_preset(self, settings_file):
        result = _invoke("use-preset", "nope")
        assert result.exit_code == 2

    def test_symbol_sets(self, settings_file):
        result = _invoke("symbol-sets")

        assert result.exit_code == 0
        assert "Colored Circles" in result.output
        assert "⚪ 🔵 🟢 🟡 🟠 🔴 ⛔" in result.output

    def test_toggle(self, settings_file):
        assert "disabled" in _invoke("toggle").output
        assert json.loads(settings_file.read_text())["enabled"] is False
        assert "enabled" in _invoke("toggle").output
