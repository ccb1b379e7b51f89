"""Shared test fixtures for zipinfo tests."""

from __future__ import annotations

import struct
import zipfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest

from zipinfo.core.errors import ArchiveError
from zipinfo.core.types import ArchiveReport, BatchReport, EntryReport, RawEntry

ZipMember = tuple[str, bytes] | tuple[str, bytes, int] | tuple[str, bytes, int, bytes]


class FakeReader:
    """In-memory ArchiveReader keyed by path."""

    def __init__(self, archives: dict[str, list[RawEntry] | ArchiveError]) -> None:
        self.archives = archives
        self.opened: list[str] = []

    @contextmanager
    def open(self, path: str) -> Iterator[list[RawEntry]]:
        self.opened.append(path)
        content = self.archives[path]
        if isinstance(content, ArchiveError):
            raise content
        yield list(content)


@pytest.fixture
def foo_entry() -> RawEntry:
    """A deflated entry that halved in size."""
    return RawEntry(name="foo.txt", compression_method="Deflated", original_size=100, compressed_size=50)


@pytest.fixture
def fake_reader(foo_entry: RawEntry) -> FakeReader:
    """Reader with ``a.zip`` holding ``foo.txt`` and an empty ``b.zip``."""
    return FakeReader({"a.zip": [foo_entry], "b.zip": []})


@pytest.fixture
def sample_batch() -> BatchReport:
    """A batch of two archives with varied statistics."""
    return BatchReport(
        archives=[
            ArchiveReport(
                path="bar.zip",
                entries={
                    "foo.txt": EntryReport(
                        compression_type="Deflated",
                        original_size=100,
                        compressed_size=50,
                        compression_rate="50.00%",
                    ),
                    "docs/readme.md": EntryReport(
                        compression_type="Stored",
                        original_size=0,
                        compressed_size=0,
                        compression_rate="0.00%",
                        comment="empty on purpose",
                    ),
                },
            ),
            ArchiveReport(path="empty.zip"),
        ]
    )


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a ZIP archive into ``tmp_path``.

    Members are ``(name, data)``, ``(name, data, compress_type)`` or
    ``(name, data, compress_type, comment)``.
    """

    def _make(name: str, members: list[ZipMember]) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for member in members:
                info = zipfile.ZipInfo(member[0])
                info.compress_type = member[2] if len(member) > 2 else zipfile.ZIP_STORED
                if len(member) > 3:
                    info.comment = member[3]
                zf.writestr(info, member[1])
        return path

    return _make


@pytest.fixture
def reader_factory() -> type[FakeReader]:
    """Return the in-memory reader class for tests that need custom archives."""
    return FakeReader


@pytest.fixture
def bad_name_zip(make_zip: Callable[..., Path]) -> Path:
    """Archive whose central directory flags its name as UTF-8 but holds invalid bytes."""
    path = make_zip("bad_name.zip", [("a.txt", b"x")])
    data = bytearray(path.read_bytes())
    header = data.index(b"PK\x01\x02")
    (flags,) = struct.unpack_from("<H", data, header + 8)
    struct.pack_into("<H", data, header + 8, flags | 0x800)
    data[header + 46] = 0xFF
    path.write_bytes(bytes(data))
    return path
