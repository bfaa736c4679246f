"""Tests for the ar container and reproducible tar members."""

import gzip
import io
import os

import pytest

from nipkg_builder.api.exceptions import ArchiveError
from nipkg_builder.core.archive import (
    ArWriter,
    build_ar_bytes,
    build_tar_gz,
    read_ar_members,
)
from nipkg_builder.core.archive.ar_writer import ArMember, encode_header
from tests.helpers import read_tar_gz


class TestArWriter:
    """Header layout and padding."""

    def test_global_header_and_member_header(self):
        data = build_ar_bytes([("debian-binary", b"2.0\n")], mtime=1700000000)

        assert data.startswith(b"!<arch>\n")
        header = data[8:68]
        assert len(header) == 60
        assert header[:16] == b"debian-binary   "
        assert header[16:28] == b"1700000000  "
        assert header[28:34] == b"0     "
        assert header[34:40] == b"0     "
        assert header[40:48] == b"100644  "
        assert header[48:58] == b"4         "
        assert header[58:60] == b"`\n"
        assert data[68:] == b"2.0\n"

    def test_odd_sized_member_is_padded(self):
        data = build_ar_bytes([("a", b"abc"), ("b", b"xy")], mtime=0)

        # magic + header + 3 bytes + pad + header + 2 bytes
        assert len(data) == 8 + 60 + 4 + 60 + 2
        assert data[8 + 60 + 3:8 + 60 + 4] == b"\n"

    def test_rejects_names_that_do_not_fit(self):
        with pytest.raises(ArchiveError):
            encode_header(ArMember(name="x" * 17, data=b""))

    def test_rejects_duplicate_members(self):
        writer = ArWriter(io.BytesIO(), mtime=0)
        writer.add("control.tar.gz", b"1")

        with pytest.raises(ArchiveError):
            writer.add("control.tar.gz", b"2")

    def test_streamed_member_matches_in_memory_member(self):
        streamed = io.BytesIO()
        writer = ArWriter(streamed, mtime=3)
        writer.add("debian-binary", b"2.0\n")
        writer.add_stream("data.tar.gz", io.BytesIO(b"abcde"), 5)

        expected = build_ar_bytes([("debian-binary", b"2.0\n"), ("data.tar.gz", b"abcde")], mtime=3)
        assert streamed.getvalue() == expected

    def test_short_stream_is_rejected(self):
        writer = ArWriter(io.BytesIO(), mtime=0)

        with pytest.raises(ArchiveError):
            writer.add_stream("data.tar.gz", io.BytesIO(b"abc"), 10)


class TestReadArMembers:
    """Parsing archives back."""

    def test_sizes_and_order_survive(self):
        members = [("debian-binary", b"2.0\n"), ("control.tar.gz", b"c" * 7), ("data.tar.gz", b"d" * 10)]
        parsed = read_ar_members(build_ar_bytes(members, mtime=5))

        assert [(m.name, m.data) for m in parsed] == members
        assert [m.size for m in parsed] == [4, 7, 10]
        assert all(m.mtime == 5 and m.uid == 0 and m.gid == 0 for m in parsed)
        assert all(m.mode == 0o100644 for m in parsed)

    def test_bad_magic(self):
        with pytest.raises(ArchiveError):
            read_ar_members(b"PK\x03\x04")

    def test_truncated_member(self):
        data = build_ar_bytes([("data.tar.gz", b"0123456789")], mtime=0)

        with pytest.raises(ArchiveError):
            read_ar_members(data[:-3])

    def test_gnu_style_trailing_slash(self):
        data = bytearray(build_ar_bytes([("debian-binary", b"2.0\n")], mtime=0))
        data[8 + 13] = ord("/")

        assert read_ar_members(bytes(data))[0].name == "debian-binary"


class TestBuildTarGz:
    """Normalized, reproducible tarballs."""

    @pytest.fixture
    def tree(self, tmp_path):
        root = tmp_path / "tree"
        (root / "sub").mkdir(parents=True)
        (root / "b.txt").write_text("b", encoding="utf-8")
        (root / "a.txt").write_text("a", encoding="utf-8")
        (root / "sub" / "run.sh").write_text("#!/bin/sh\n", encoding="utf-8")
        os.chmod(root / "sub" / "run.sh", 0o775)
        os.chmod(root / "a.txt", 0o600)
        return root

    def test_entries_are_dot_prefixed_and_sorted(self, tree):
        names = list(read_tar_gz(build_tar_gz(tree, 1000)))

        # tarfile strips the trailing slash of directory names on read
        assert names == [".", "./a.txt", "./b.txt", "./sub", "./sub/run.sh"]

    def test_ownership_modes_and_mtime_are_normalized(self, tree):
        infos = read_tar_gz(build_tar_gz(tree, 1000))

        for info in infos.values():
            assert info.uid == 0 and info.gid == 0
            assert info.uname == "root" and info.gname == "root"
            assert info.mtime == 1000
        assert infos["./a.txt"].mode == 0o644
        assert infos["./sub/run.sh"].mode == 0o755
        assert infos["./sub"].mode == 0o755

    def test_output_is_reproducible(self, tree):
        assert build_tar_gz(tree, 1000) == build_tar_gz(tree, 1000)

    def test_gzip_header_carries_fixed_mtime(self, tree):
        data = build_tar_gz(tree, 1234)

        assert int.from_bytes(data[4:8], "little") == 1234
        # FNAME flag clear
        assert data[3] & 0x08 == 0
        assert gzip.decompress(data)

    def test_symlink_loop_is_archived_once(self, tree):
        os.symlink(tree, tree / "sub" / "back", target_is_directory=True)

        names = list(read_tar_gz(build_tar_gz(tree, 1000)))

        assert names == [".", "./a.txt", "./b.txt", "./sub", "./sub/run.sh"]
