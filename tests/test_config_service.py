"""Tests for configuration loading and init."""

import json

import pytest

from nipkg_builder.api.exceptions import ConfigError
from nipkg_builder.core.path_resolver import PathResolver
from nipkg_builder.core.project_types import AngularProjectType, NodeProjectType
from nipkg_builder.services import ConfigService
from tests.helpers import write_json


class TestLoad:
    """Reading nipkg.config.json."""

    def test_camel_case_keys(self, tmp_path):
        write_json(tmp_path / "nipkg.config.json", {
            "name": "app",
            "displayName": "App",
            "buildDir": "build",
            "userVisible": True,
            "depends": ["ni-runtime"],
            "buildSuffix": "nightly",
        })

        config, notices = ConfigService(PathResolver(tmp_path)).load()

        assert config.name == "app"
        assert config.display_name == "App"
        assert config.build_dir == "build"
        assert config.user_visible is True
        assert config.depends == ["ni-runtime"]
        assert config.build_suffix == "nightly"
        assert notices == []

    def test_missing_file_gives_empty_config_and_notice(self, tmp_path):
        config, notices = ConfigService(PathResolver(tmp_path)).load()

        assert config.name is None
        assert config.depends == []
        assert len(notices) == 1

    def test_unparseable_file_is_fatal(self, tmp_path):
        (tmp_path / "nipkg.config.json").write_text("{ name: app", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            ConfigService(PathResolver(tmp_path)).load()

        assert exc_info.value.error_code == "NB001"

    def test_non_object_is_fatal(self, tmp_path):
        (tmp_path / "nipkg.config.json").write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigService(PathResolver(tmp_path)).load()

    def test_invalid_packager_is_fatal(self, tmp_path):
        write_json(tmp_path / "nipkg.config.json", {"packager": "zip"})

        with pytest.raises(ConfigError):
            ConfigService(PathResolver(tmp_path)).load()

    def test_quoted_user_visible_is_fatal(self, tmp_path):
        write_json(tmp_path / "nipkg.config.json", {"name": "app", "userVisible": "false"})

        with pytest.raises(ConfigError) as exc_info:
            ConfigService(PathResolver(tmp_path)).load()

        assert exc_info.value.error_code == "NB001"
        assert "userVisible" in str(exc_info.value)
        assert '"buildDir"' in str(exc_info.value)

    def test_non_string_dependency_is_fatal(self, tmp_path):
        write_json(tmp_path / "nipkg.config.json", {"name": "app", "depends": ["ni-runtime", 5]})

        with pytest.raises(ConfigError) as exc_info:
            ConfigService(PathResolver(tmp_path)).load()

        assert exc_info.value.error_code == "NB001"
        assert "depends" in str(exc_info.value)

    def test_non_string_text_field_is_fatal(self, tmp_path):
        write_json(tmp_path / "nipkg.config.json", {"name": "app", "buildDir": ["dist"]})

        with pytest.raises(ConfigError) as exc_info:
            ConfigService(PathResolver(tmp_path)).load()

        assert "buildDir" in str(exc_info.value)

    def test_yaml_config(self, tmp_path):
        (tmp_path / "nipkg.yaml").write_text(
            "name: app\nversion: 1.2.3\nbuildDir: build\ndepends: a, b\n", encoding="utf-8"
        )

        config, _ = ConfigService(PathResolver(tmp_path)).load("nipkg.yaml")

        assert config.version == "1.2.3"
        assert config.depends == ["a", "b"]


class TestInitConfig:
    """Writing the default configuration."""

    def test_writes_node_defaults(self, node_project):
        (node_project / "nipkg.config.json").unlink()
        resolver = PathResolver(node_project)

        path = ConfigService(resolver).init_config(NodeProjectType(resolver))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["name"] == "app-from-manifest"
        assert data["architecture"] == "all"
        assert data["buildDir"] == "dist"
        assert data["userVisible"] is True

    def test_writes_angular_architecture(self, angular_project):
        resolver = PathResolver(angular_project)

        path = ConfigService(resolver).init_config(AngularProjectType(resolver))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["architecture"] == "windows_x64"
        assert data["buildDir"] == "dist/dashboard/browser"

    def test_existing_file_is_kept(self, node_project):
        config_file = node_project / "nipkg.config.json"
        before = config_file.read_text(encoding="utf-8")
        resolver = PathResolver(node_project)

        assert ConfigService(resolver).init_config(NodeProjectType(resolver)) is None
        assert config_file.read_text(encoding="utf-8") == before
