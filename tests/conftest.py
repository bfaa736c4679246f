"""Test configuration for pytest."""

from pathlib import Path

import pytest

from tests.helpers import FakeRunner, write_json


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def build_output(tmp_path: Path) -> Path:
    """A small application build output under <tmp>/app/build."""
    build_dir = tmp_path / "app" / "build"
    (build_dir / "assets").mkdir(parents=True)
    (build_dir / "index.html").write_text("<html></html>", encoding="utf-8")
    (build_dir / "main.js").write_text("console.log('hi');", encoding="utf-8")
    (build_dir / "assets" / "logo.svg").write_text("<svg/>", encoding="utf-8")
    return build_dir


@pytest.fixture
def node_project(build_output: Path) -> Path:
    """Node.js project whose config points at ./build."""
    root = build_output.parent
    write_json(root / "package.json", {"name": "app-from-manifest", "version": "2.1.0"})
    write_json(root / "nipkg.config.json", {
        "name": "app",
        "version": "1.2.3",
        "maintainer": "Jane Doe <jane@example.com>",
        "buildDir": "build",
    })
    return root


@pytest.fixture
def angular_project(tmp_path: Path) -> Path:
    """Angular workspace with an application-builder output path."""
    root = tmp_path / "ng-app"
    write_json(root / "package.json", {"name": "ng-app", "version": "0.3.0"})
    write_json(root / "angular.json", {
        "version": 1,
        "projects": {
            "dashboard": {
                "architect": {
                    "build": {"options": {"outputPath": {"base": "dist/dashboard"}}}
                }
            }
        },
    })
    browser = root / "dist" / "dashboard" / "browser"
    browser.mkdir(parents=True)
    (browser / "index.html").write_text("<app-root></app-root>", encoding="utf-8")
    return root
