"""Tests for the staging area builder."""

import os

import pytest

from nipkg_builder.api.exceptions import ConfigError
from nipkg_builder.core.staging_builder import StagingBuilder

CONTROL_TEXT = "Package: app\n"


class TestPrepare:
    """Building the staging tree."""

    @pytest.mark.asyncio
    async def test_layout_and_payload(self, tmp_path, build_output):
        nipkg_dir = tmp_path / "out" / "nipkg"
        layout = await StagingBuilder().prepare(nipkg_dir, build_output, CONTROL_TEXT)

        assert layout.root == nipkg_dir / "file-package"
        assert layout.control_file.read_text(encoding="utf-8") == CONTROL_TEXT
        payload = layout.data_dir / "ApplicationFiles_64"
        assert (payload / "index.html").read_text(encoding="utf-8") == "<html></html>"
        assert (payload / "assets" / "logo.svg").exists()
        assert layout.is_complete()

    @pytest.mark.asyncio
    async def test_previous_tree_is_replaced(self, tmp_path, build_output):
        nipkg_dir = tmp_path / "nipkg"
        stale = nipkg_dir / "file-package" / "data" / "ApplicationFiles_64" / "stale.js"
        stale.parent.mkdir(parents=True)
        stale.write_text("old", encoding="utf-8")

        await StagingBuilder().prepare(nipkg_dir, build_output, CONTROL_TEXT)

        assert not stale.exists()

    @pytest.mark.asyncio
    async def test_skip_cleanup_keeps_previous_tree(self, tmp_path, build_output):
        nipkg_dir = tmp_path / "nipkg"
        stale = nipkg_dir / "file-package" / "data" / "ApplicationFiles_64" / "stale.js"
        stale.parent.mkdir(parents=True)
        stale.write_text("old", encoding="utf-8")

        builder = StagingBuilder(skip_cleanup=True)
        layout = await builder.prepare(nipkg_dir, build_output, CONTROL_TEXT)
        builder.cleanup(layout)

        assert stale.exists()
        assert (stale.parent / "main.js").exists()

    @pytest.mark.asyncio
    async def test_same_relative_path_is_overwritten(self, tmp_path, build_output):
        nipkg_dir = tmp_path / "nipkg"
        existing = nipkg_dir / "file-package" / "data" / "ApplicationFiles_64" / "index.html"
        existing.parent.mkdir(parents=True)
        existing.write_text("outdated", encoding="utf-8")

        await StagingBuilder(skip_cleanup=True).prepare(nipkg_dir, build_output, CONTROL_TEXT)

        assert existing.read_text(encoding="utf-8") == "<html></html>"

    @pytest.mark.asyncio
    async def test_output_inside_build_dir_is_not_copied(self, tmp_path, build_output):
        nipkg_dir = build_output / "nipkg"
        layout = await StagingBuilder().prepare(nipkg_dir, build_output, CONTROL_TEXT)

        assert not (layout.payload_dir / "nipkg").exists()
        assert (layout.payload_dir / "main.js").exists()

    @pytest.mark.asyncio
    async def test_symlink_loop_is_copied_once(self, tmp_path, build_output):
        os.symlink(build_output, build_output / "loop", target_is_directory=True)

        layout = await StagingBuilder().prepare(tmp_path / "nipkg", build_output, CONTROL_TEXT)

        assert (layout.payload_dir / "main.js").exists()
        assert not (layout.payload_dir / "loop").exists()

    @pytest.mark.asyncio
    async def test_progress_callback_gets_relative_paths(self, tmp_path, build_output):
        copied = []
        builder = StagingBuilder(progress_callback=lambda path, size: copied.append((path, size)))

        await builder.prepare(tmp_path / "nipkg", build_output, CONTROL_TEXT)

        sizes = {path.as_posix(): size for path, size in copied}
        assert sorted(sizes) == ["assets/logo.svg", "index.html", "main.js"]
        assert sizes["index.html"] == len("<html></html>")

    @pytest.mark.asyncio
    async def test_missing_build_output(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            await StagingBuilder().prepare(tmp_path / "nipkg", tmp_path / "missing", CONTROL_TEXT)

        assert '"buildDir"' in str(exc_info.value)
        assert not (tmp_path / "nipkg").exists()

    @pytest.mark.asyncio
    async def test_build_output_must_be_directory(self, tmp_path):
        not_a_dir = tmp_path / "bundle.js"
        not_a_dir.write_text("x", encoding="utf-8")

        with pytest.raises(ConfigError):
            await StagingBuilder().prepare(tmp_path / "nipkg", not_a_dir, CONTROL_TEXT)


class TestCleanup:
    """Removing the staging tree."""

    @pytest.mark.asyncio
    async def test_cleanup_removes_tree(self, tmp_path, build_output):
        builder = StagingBuilder()
        layout = await builder.prepare(tmp_path / "nipkg", build_output, CONTROL_TEXT)

        builder.cleanup(layout)

        assert not layout.root.exists()
        assert (tmp_path / "nipkg").exists()
