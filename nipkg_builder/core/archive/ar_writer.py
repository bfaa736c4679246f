# nipkg_builder/core/archive/ar_writer.py
"""Unix ar container writer and reader

Only the subset used by Debian-style packages is supported: short member
names, no symbol table, no extended name table.
"""

import io
import time
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from ...api.exceptions import ArchiveError
from ...constants import (
    AR_MAGIC,
    AR_HEADER_END,
    AR_HEADER_SIZE,
    AR_PAD_BYTE,
    AR_DEFAULT_UID,
    AR_DEFAULT_GID,
    AR_DEFAULT_MODE,
    DEFAULT_CHUNK_SIZE,
)

# name, mtime, uid, gid, mode, size
HEADER_FIELD_WIDTHS = (16, 12, 6, 6, 8, 10)


@dataclass
class ArMember:
    """One member of an ar archive"""
    name: str
    data: bytes
    mtime: int = 0
    uid: int = AR_DEFAULT_UID
    gid: int = AR_DEFAULT_GID
    mode: int = AR_DEFAULT_MODE

    @property
    def size(self) -> int:
        return len(self.data)


def _field(value: str, width: int, label: str) -> bytes:
    encoded = value.encode('ascii')
    if len(encoded) > width:
        raise ArchiveError(f"ar header field {label} too long: {value!r}")
    return encoded.ljust(width, b' ')


def encode_header(member: ArMember, size: Optional[int] = None) -> bytes:
    """
    Build the 60-byte header for a member

    Args:
        member: Archive member
        size: Data size when the member data is streamed separately

    Returns:
        Header bytes

    Raises:
        ArchiveError: If a field does not fit its column
    """
    name_w, mtime_w, uid_w, gid_w, mode_w, size_w = HEADER_FIELD_WIDTHS
    header = b''.join((
        _field(member.name, name_w, 'name'),
        _field(str(int(member.mtime)), mtime_w, 'mtime'),
        _field(str(member.uid), uid_w, 'uid'),
        _field(str(member.gid), gid_w, 'gid'),
        _field(format(member.mode, 'o'), mode_w, 'mode'),
        _field(str(member.size if size is None else size), size_w, 'size'),
        AR_HEADER_END,
    ))
    assert len(header) == AR_HEADER_SIZE
    return header


class ArWriter:
    """Streams members into an ar archive"""

    def __init__(self, fileobj: BinaryIO, mtime: Optional[int] = None):
        """
        Initialize writer and emit the global header

        Args:
            fileobj: Writable binary stream
            mtime: Timestamp stored in member headers (default: now)
        """
        self.fileobj = fileobj
        self.mtime = int(time.time()) if mtime is None else int(mtime)
        self.names: List[str] = []
        self.fileobj.write(AR_MAGIC)

    def add(self, name: str, data: bytes) -> ArMember:
        """Append a member and its padding byte if needed"""
        member = ArMember(name=name, data=data, mtime=self.mtime)
        self._write_header(member, member.size)
        self.fileobj.write(data)
        self._finish(member.size)
        return member

    def add_stream(self, name: str, source: BinaryIO, size: int) -> None:
        """
        Append a member copied from a readable stream

        Args:
            name: Member name
            source: Stream positioned at the member data
            size: Number of bytes to copy from source

        Raises:
            ArchiveError: If source ends before size bytes were copied
        """
        self._write_header(ArMember(name=name, data=b'', mtime=self.mtime), size)

        remaining = size
        while remaining:
            chunk = source.read(min(remaining, DEFAULT_CHUNK_SIZE))
            if not chunk:
                raise ArchiveError(f"Member {name} ended {remaining} bytes short")
            self.fileobj.write(chunk)
            remaining -= len(chunk)

        self._finish(size)

    def _write_header(self, member: ArMember, size: int) -> None:
        if '/' in member.name or not member.name:
            raise ArchiveError(f"Invalid ar member name: {member.name!r}")
        if member.name in self.names:
            raise ArchiveError(f"Duplicate ar member: {member.name}")

        self.fileobj.write(encode_header(member, size))
        self.names.append(member.name)

    def _finish(self, size: int) -> None:
        if size % 2:
            self.fileobj.write(AR_PAD_BYTE)


def build_ar_bytes(members, mtime: Optional[int] = None) -> bytes:
    """
    Build a complete archive in memory

    Args:
        members: Iterable of (name, data) pairs, written in order
        mtime: Timestamp for every header

    Returns:
        Archive bytes
    """
    buffer = io.BytesIO()
    writer = ArWriter(buffer, mtime=mtime)
    for name, data in members:
        writer.add(name, data)
    return buffer.getvalue()


def _parse_int(raw: bytes, base: int, label: str, offset: int) -> int:
    text = raw.decode('ascii', errors='replace').strip()
    try:
        return int(text, base) if text else 0
    except ValueError:
        raise ArchiveError(f"Invalid {label} {text!r} in ar header at offset {offset}")


def read_ar_members(data: bytes) -> List[ArMember]:
    """
    Parse an ar archive

    Args:
        data: Archive bytes

    Returns:
        Members in archive order

    Raises:
        ArchiveError: On bad magic, truncated headers or size mismatches
    """
    if not data.startswith(AR_MAGIC):
        raise ArchiveError("Not an ar archive (bad magic)")

    members = []
    offset = len(AR_MAGIC)

    while offset < len(data):
        header = data[offset:offset + AR_HEADER_SIZE]
        if len(header) < AR_HEADER_SIZE:
            raise ArchiveError(f"Truncated ar header at offset {offset}")
        if header[-2:] != AR_HEADER_END:
            raise ArchiveError(f"Bad ar header terminator at offset {offset}")

        fields = []
        pos = 0
        for width in HEADER_FIELD_WIDTHS:
            fields.append(header[pos:pos + width])
            pos += width

        name = fields[0].decode('ascii', errors='replace').rstrip()
        # GNU ar terminates names with a slash
        if name.endswith('/') and name != '/':
            name = name[:-1]

        size = _parse_int(fields[5], 10, 'size', offset)
        start = offset + AR_HEADER_SIZE
        body = data[start:start + size]
        if len(body) != size:
            raise ArchiveError(
                f"Member {name} declares {size} bytes but only {len(body)} present"
            )

        members.append(ArMember(
            name=name,
            data=body,
            mtime=_parse_int(fields[1], 10, 'mtime', offset),
            uid=_parse_int(fields[2], 10, 'uid', offset),
            gid=_parse_int(fields[3], 10, 'gid', offset),
            mode=_parse_int(fields[4], 8, 'mode', offset),
        ))

        offset = start + size + (size % 2)

    return members
