"""Error types raised by zipinfo."""

from __future__ import annotations


class ZipInfoError(Exception):
    """Base class for all zipinfo errors."""


class ConfigurationError(ZipInfoError):
    """Invalid run configuration, detected before any archive is opened."""


class ArchiveError(ZipInfoError):
    """An archive could not be turned into a report.

    Attributes
    ----------
    path
        Archive path as given by the caller.
    cause
        Short description of the underlying failure.
    """

    reason = "cannot read archive"

    def __init__(self, path: str, cause: str) -> None:
        super().__init__(f"{path}: {self.reason}: {cause}")
        self.path = path
        self.cause = cause


class ArchiveUnreadable(ArchiveError):
    """The archive is missing, not accessible, or not a valid ZIP container."""


class EntryDecodeError(ArchiveError):
    """The metadata of one entry in the archive cannot be decoded."""

    reason = "cannot decode entry"
