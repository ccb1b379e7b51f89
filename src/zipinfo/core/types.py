"""Data model shared by the reader, the report builders and the formatters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ModelWrapValidatorHandler, model_validator

STAT_FIELDS: tuple[str, ...] = ("compression_type", "original_size", "compressed_size", "compression_rate")


@dataclass(frozen=True)
class RawEntry:
    """Metadata of one archive entry, as supplied by an archive reader.

    Attributes
    ----------
    name
        Entry name inside the archive (POSIX separators).
    compression_method
        Display name of the compression method (e.g. ``Deflated``).
    original_size
        Uncompressed size in bytes.
    compressed_size
        Stored size in bytes.
    comment
        Entry comment, empty when the entry has none.
    """

    name: str
    compression_method: str
    original_size: int
    compressed_size: int
    comment: str = ""


class StatSelection(BaseModel):
    """Which derived statistics to compute and display.

    Selecting nothing selects everything: a selection built with no
    toggle set is normalized to all four toggles on.

    Attributes
    ----------
    compression_type
        Show the compression method of each entry.
    original_size
        Show the uncompressed size of each entry.
    compressed_size
        Show the stored size of each entry.
    compression_rate
        Show the compression rate of each entry.
    """

    compression_type: bool = False
    original_size: bool = False
    compressed_size: bool = False
    compression_rate: bool = False

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="wrap")
    @classmethod
    def _select_all_when_empty(cls, data: Any, handler: ModelWrapValidatorHandler[StatSelection]) -> StatSelection:
        selection = handler(data)
        if not any(getattr(selection, name) for name in STAT_FIELDS):
            return handler(dict.fromkeys(STAT_FIELDS, True))
        return selection

    @classmethod
    def all(cls) -> StatSelection:
        """Return the selection with every statistic enabled."""
        return cls()

    def enabled(self) -> list[str]:
        """Return the enabled statistic names in display order."""
        return [name for name in STAT_FIELDS if getattr(self, name)]


class EntryReport(BaseModel):
    """Selected statistics for one archive entry.

    Unselected statistics are ``None`` and are left out of serialized
    output. ``comment`` is set whenever the entry has a non-empty comment.
    """

    compression_type: str | None = None
    original_size: int | None = Field(default=None, ge=0)
    compressed_size: int | None = Field(default=None, ge=0)
    compression_rate: str | None = None
    comment: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}


class ArchiveReport(BaseModel):
    """Entry reports of one archive, keyed by entry name in archive order.

    Attributes
    ----------
    path
        Archive path as given by the caller.
    entries
        Entry name to report. Insertion order is the order in which the
        archive lists its entries; a duplicated name keeps its first
        position and the value of its last occurrence.
    """

    path: str
    entries: dict[str, EntryReport] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ArchiveFailure(BaseModel):
    """An archive that was skipped because it could not be read."""

    path: str
    message: str

    model_config = {"frozen": True}


class BatchReport(BaseModel):
    """Reports for every archive of one invocation.

    Attributes
    ----------
    archives
        Archive reports in the order the paths were given.
    failures
        Archives skipped under the ``continue`` failure policy.
    """

    archives: list[ArchiveReport] = Field(default_factory=list)
    failures: list[ArchiveFailure] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_document(self) -> dict[str, dict[str, EntryReport]]:
        """Project the batch onto a mapping of archive path to entry reports.

        If the same path was reported twice, the later report wins.
        """
        return {archive.path: dict(archive.entries) for archive in self.archives}

    @classmethod
    def from_document(cls, document: dict[str, dict[str, EntryReport]]) -> BatchReport:
        """Build a batch from a mapping of archive path to entry reports."""
        return cls(
            archives=[ArchiveReport(path=path, entries=dict(entries)) for path, entries in document.items()]
        )
