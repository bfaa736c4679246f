"""Shared test helpers."""

import io
import json
import tarfile
from pathlib import Path
from typing import Callable, List, Optional

from nipkg_builder.core.command_runner import CommandRunner, CommandResult
from nipkg_builder.core.archive import build_ar_bytes
from nipkg_builder.constants import (
    DEBIAN_BINARY_MEMBER,
    DEBIAN_BINARY_CONTENT,
    CONTROL_MEMBER,
    DATA_MEMBER,
)


class FakeRunner(CommandRunner):
    """CommandRunner that records commands instead of spawning processes.

    ``handler`` may inspect the command (and the filesystem) and return a
    CommandResult; otherwise ``returncode`` is used.
    """

    def __init__(self, returncode: int = 0, stderr: str = "",
                 handler: Optional[Callable[..., Optional[CommandResult]]] = None):
        self.returncode = returncode
        self.stderr = stderr
        self.handler = handler
        self.calls: List[dict] = []

    def run(self, command, cwd=None, stream_output=False) -> CommandResult:
        self.calls.append({"command": command, "cwd": cwd, "stream_output": stream_output})
        if self.handler is not None:
            result = self.handler(command)
            if result is not None:
                return result
        return CommandResult(command=command, returncode=self.returncode, stderr=self.stderr)

    @property
    def commands(self):
        return [call["command"] for call in self.calls]


def fake_dpkg_deb(snapshot: Optional[dict] = None):
    """Handler emulating 'dpkg-deb --build <root> <target>'.

    Writes a minimal valid package to the target and, when ``snapshot`` is
    given, records the DEBIAN/control text and payload listing.
    """

    def handler(command):
        if not isinstance(command, list) or command[0] != "dpkg-deb":
            return None
        root, target = Path(command[-2]), Path(command[-1])
        if snapshot is not None:
            snapshot["control"] = (root / "DEBIAN" / "control").read_text(encoding="utf-8")
            snapshot["files"] = sorted(
                p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()
            )
        target.write_bytes(build_ar_bytes([
            (DEBIAN_BINARY_MEMBER, DEBIAN_BINARY_CONTENT),
            (CONTROL_MEMBER, b"control"),
            (DATA_MEMBER, b"data!"),
        ], mtime=0))
        return CommandResult(command=command, returncode=0)

    return handler


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_tar_gz(data: bytes) -> dict:
    """Map member names of a gzip tar to their TarInfo."""
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
        return {info.name: info for info in tar.getmembers()}
