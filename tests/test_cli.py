"""Tests for the command line interface."""

import json

from click.testing import CliRunner

from nipkg_builder.cli.main import cli


def _invoke(project, *args):
    return CliRunner().invoke(cli, ["--project-root", str(project), *args])


class TestBuildCommand:
    """nipkg-builder build"""

    def test_success_exit_code(self, node_project, monkeypatch):
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1700000000")

        result = _invoke(node_project, "build")

        assert result.exit_code == 0, result.output
        assert (node_project / "dist" / "nipkg" / "app_1.2.3_all.nipkg").exists()

    def test_options_are_forwarded(self, node_project):
        result = _invoke(node_project, "build", "--version", "4.5.6", "--build-suffix", "rc1",
                         "--output-dir", "release")

        assert result.exit_code == 0, result.output
        assert (node_project / "release" / "nipkg" / "app_4.5.6_rc1_all.nipkg").exists()

    def test_failure_exit_code(self, node_project):
        result = _invoke(node_project, "build", "--build-dir", "missing")

        assert result.exit_code == 1

    def test_quiet_failure_exit_code(self, tmp_path):
        result = _invoke(tmp_path, "-q", "build", "--project-type", "node")

        assert result.exit_code == 1

    def test_rejects_unknown_packager(self, node_project):
        result = _invoke(node_project, "build", "--packager", "zip")

        assert result.exit_code == 2


class TestInitCommand:
    """nipkg-builder init"""

    def test_creates_config(self, angular_project):
        result = _invoke(angular_project, "init")

        assert result.exit_code == 0, result.output
        data = json.loads((angular_project / "nipkg.config.json").read_text(encoding="utf-8"))
        assert data["architecture"] == "windows_x64"

    def test_existing_config_is_left_alone(self, node_project):
        config_file = node_project / "nipkg.config.json"
        before = config_file.read_text(encoding="utf-8")

        result = _invoke(node_project, "init")

        assert result.exit_code == 0
        assert config_file.read_text(encoding="utf-8") == before
