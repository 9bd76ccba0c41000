"""Tests for the palettekit CLI."""

import json
import logging

import pytest
from typer.testing import CliRunner

from palettekit import __version__
from palettekit.main import app

runner = CliRunner()

TREE_YAML = """\
commands:
  - id: open
    label: Open File
    keywords: [load]
    group: File
  - id: save
    label: Save File
    group: File
  - id: theme
    label: Theme
    children:
      - id: dark
        label: Dark Mode
      - id: light
        label: Light Mode
"""


@pytest.fixture(autouse=True)
def reset_palettekit_logger():
    """setup_logging attaches handlers to CliRunner's temporary streams."""
    yield
    logger = logging.getLogger("palettekit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def tree_file(tmp_path):
    path = tmp_path / "commands.yaml"
    path.write_text(TREE_YAML)
    return path


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestTreeCommand:
    def test_prints_tree(self, tree_file):
        result = runner.invoke(app, ["tree", str(tree_file)])
        assert result.exit_code == 0
        assert "Open File" in result.stdout
        assert "Dark Mode" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["tree", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "dupes.json"
        path.write_text(json.dumps([{"id": "x", "label": "A"}, {"id": "x", "label": "B"}]))
        result = runner.invoke(app, ["tree", str(path)])
        assert result.exit_code == 1
        assert "Duplicate" in result.stdout


class TestRankCommand:
    """Ranking through the default filter."""

    def test_ranks_root(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "file"])
        assert result.exit_code == 0
        assert "open" in result.stdout
        assert "save" in result.stdout
        assert "Theme" not in result.stdout

    def test_keyword_match(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "load"])
        assert result.exit_code == 0
        assert "Open File" in result.stdout

    def test_ranks_inside_page(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "dark", "--page", "theme"])
        assert result.exit_code == 0
        assert "Dark Mode" in result.stdout
        assert "Light Mode" not in result.stdout

    def test_no_matches(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "zzz"])
        assert result.exit_code == 0
        assert "No matches" in result.stdout

    def test_limit(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "", "--limit", "1"])
        assert result.exit_code == 0
        assert "2 more not shown" in result.stdout

    def test_unknown_page(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "x", "--page", "missing"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_leaf_page(self, tree_file):
        result = runner.invoke(app, ["rank", str(tree_file), "x", "-p", "open"])
        assert result.exit_code == 1


class TestConfigCommand:
    def test_defaults(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "defaults" in result.stdout
        assert "mod+k" in result.stdout

    def test_reads_config_file(self, isolated_config_dir):
        isolated_config_dir.mkdir(parents=True)
        (isolated_config_dir / "palette.yaml").write_text("hotkeys: ctrl+p\nanimation_duration_ms: 120\n")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "ctrl+p" in result.stdout
        assert "120" in result.stdout
