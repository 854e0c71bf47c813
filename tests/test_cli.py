"""
Tests for CLI commands — describe, find-target, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from modreport.main import cli

LIB = """\
    organisation: org
    name: lib
    extension_points:
      - name: build
    targets:
      - name: compile
        depends: init
        extension_point: build
        description: Compile sources
      - name: init
    properties:
      src.dir:
        description: Sources
        required: true
"""

APP = """\
    name: app
    imports:
      - module: lib
        as: lib.
"""


@pytest.fixture
def app_module(write_module) -> Path:
    write_module("lib", LIB)
    return write_module("app", APP)


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Module report" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestDescribeCommand:
    def test_describe(self, app_module: Path, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--repository", str(tmp_path), "describe", str(app_module)])
        assert result.exit_code == 0
        assert "#app" in result.output
        assert "build" in result.output
        assert "lib.compile" in result.output
        assert "lib.init" in result.output
        assert "src.dir (required)" in result.output

    def test_describe_json(self, app_module: Path, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-r", str(tmp_path), "describe", str(app_module), "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["unbound_targets"] == ["lib.init"]
        assert data["extension_points"][0]["targets"] == ["lib.compile"]

    def test_describe_error(self, write_module, tmp_path: Path):
        path = write_module("broken", "name: broken\nimports:\n  - module: ghost\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-r", str(tmp_path), "describe", str(path)])
        assert result.exit_code == 1
        assert "ghost" in result.output

    def test_describe_error_json(self, write_module, tmp_path: Path):
        path = write_module("broken", "name: broken\nimports:\n  - module: ghost\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-r", str(tmp_path), "describe", str(path), "--json"])
        assert result.exit_code == 1
        assert "error" in json.loads(result.output)


class TestFindTargetCommand:
    def test_find_imported_target(self, app_module: Path, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-r", str(tmp_path), "find-target", "lib.compile", str(app_module)]
        )
        assert result.exit_code == 0
        assert "Compile sources" in result.output
        assert "depends: init" in result.output
        assert "extends: build" in result.output

    def test_no_imports_flag(self, app_module: Path, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-r", str(tmp_path), "find-target", "lib.compile", str(app_module), "--no-imports"],
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_cycle_reported(self, write_module, tmp_path: Path):
        write_module("a", "name: a\nimports:\n  - module: b\n")
        path = write_module("b", "name: b\nimports:\n  - module: a\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-r", str(tmp_path), "find-target", "x", str(path)])
        assert result.exit_code == 1
        assert "Cyclic module import" in result.output
