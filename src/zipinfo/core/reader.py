"""Archive access for report building.

The report builders only depend on the :class:`ArchiveReader` protocol;
:class:`ZipArchiveReader` implements it on top of :mod:`zipfile`.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from zipinfo.core.errors import ArchiveUnreadable, EntryDecodeError
from zipinfo.core.types import RawEntry

logger = logging.getLogger(__name__)

# General purpose flag bit 11: name and comment are UTF-8.
_UTF8_FLAG = 0x800

COMPRESSION_METHOD_NAMES: dict[int, str] = {
    0: "Stored",
    1: "Shrunk",
    6: "Imploded",
    8: "Deflated",
    9: "Deflate64",
    12: "Bzip2",
    14: "Lzma",
    93: "Zstd",
    95: "Xz",
    98: "Ppmd",
    99: "Aes",
}


def compression_method_name(method: int) -> str:
    """Return the display name of a ZIP compression method id."""
    return COMPRESSION_METHOD_NAMES.get(method, f"Unsupported({method})")


class ArchiveReader(Protocol):
    """Capability to list the entries of an archive."""

    def open(self, path: str) -> AbstractContextManager[list[RawEntry]]:
        """Open ``path`` and yield its entries in archive order.

        Implementations are context managers that release the archive on
        exit and raise ``ArchiveUnreadable`` or ``EntryDecodeError``.
        """
        ...


class ZipArchiveReader:
    """Reads entry metadata from ZIP files without extracting them."""

    @contextmanager
    def open(self, path: str) -> Iterator[list[RawEntry]]:
        """Open a ZIP archive and yield its entries in central-directory order.

        Parameters
        ----------
        path
            Filesystem path to the archive.

        Yields
        ------
        list[RawEntry]
            One entry per central-directory record.

        Raises
        ------
        ArchiveUnreadable
            If the file cannot be opened or is not a ZIP archive.
        EntryDecodeError
            If an entry name or comment cannot be decoded.
        """
        logger.debug("Opening archive %s", path)
        try:
            archive = zipfile.ZipFile(path)
        except OSError as e:
            raise ArchiveUnreadable(path, e.strerror or str(e)) from e
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveUnreadable(path, str(e)) from e
        except UnicodeDecodeError as e:
            raise EntryDecodeError(path, f"entry name is not valid UTF-8: {e.reason}") from e

        with archive:
            yield [_raw_entry(path, info) for info in archive.infolist()]


def _raw_entry(path: str, info: zipfile.ZipInfo) -> RawEntry:
    return RawEntry(
        name=info.filename,
        compression_method=compression_method_name(info.compress_type),
        original_size=info.file_size,
        compressed_size=info.compress_size,
        comment=_decode_comment(path, info),
    )


def _decode_comment(path: str, info: zipfile.ZipInfo) -> str:
    raw = info.comment
    if not raw:
        return ""
    encoding = "utf-8" if info.flag_bits & _UTF8_FLAG else "cp437"
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise EntryDecodeError(path, f"comment of {info.filename!r} is not valid {encoding}") from e
