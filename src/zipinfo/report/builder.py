"""Build archive and batch reports from archive entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from zipinfo.core.errors import ArchiveError, ConfigurationError
from zipinfo.core.exclude import ExclusionFilter
from zipinfo.core.mode import FailurePolicy
from zipinfo.core.reader import ArchiveReader, ZipArchiveReader
from zipinfo.core.stats import compression_rate
from zipinfo.core.types import ArchiveFailure, ArchiveReport, BatchReport, EntryReport, RawEntry, StatSelection

logger = logging.getLogger(__name__)


def build_entry_report(entry: RawEntry, *, selection: StatSelection) -> EntryReport:
    """Compute the selected statistics of one entry."""
    return EntryReport(
        compression_type=entry.compression_method if selection.compression_type else None,
        original_size=entry.original_size if selection.original_size else None,
        compressed_size=entry.compressed_size if selection.compressed_size else None,
        compression_rate=(
            compression_rate(entry.original_size, entry.compressed_size) if selection.compression_rate else None
        ),
        comment=entry.comment or None,
    )


def build_archive_report(
    path: str,
    entries: Iterable[RawEntry],
    *,
    selection: StatSelection,
    exclusion: ExclusionFilter,
) -> ArchiveReport:
    """Build the report of one archive from its entries.

    Parameters
    ----------
    path
        Archive path as given by the caller.
    entries
        Entries in archive order.
    selection
        Statistics to compute.
    exclusion
        Entries whose name matches are left out.

    Returns
    -------
    ArchiveReport
        Reports of the non-excluded entries, in archive order.
    """
    reports: dict[str, EntryReport] = {}
    for entry in entries:
        if exclusion.matches(entry.name):
            logger.debug("Excluding %s from %s", entry.name, path)
            continue
        reports[entry.name] = build_entry_report(entry, selection=selection)
    return ArchiveReport(path=path, entries=reports)


def read_archive_report(
    path: str,
    *,
    reader: ArchiveReader,
    selection: StatSelection,
    exclusion: ExclusionFilter,
) -> ArchiveReport:
    """Open an archive through ``reader`` and build its report.

    Raises
    ------
    ArchiveUnreadable
        If the archive cannot be opened.
    EntryDecodeError
        If an entry's metadata cannot be decoded.
    """
    logger.debug("Reading archive %s", path)
    with reader.open(path) as entries:
        return build_archive_report(path, entries, selection=selection, exclusion=exclusion)


def build_batch_report(
    paths: Sequence[str],
    *,
    selection: StatSelection | None = None,
    exclude: str | None = None,
    reader: ArchiveReader | None = None,
    on_error: FailurePolicy = FailurePolicy.FAIL_FAST,
    jobs: int = 1,
) -> BatchReport:
    """Build reports for every archive in ``paths``.

    The exclusion pattern is compiled before any archive is opened, so a
    malformed pattern fails without touching the filesystem.

    Parameters
    ----------
    paths
        Archive paths, in output order.
    selection
        Statistics to compute (all of them when None).
    exclude
        Glob pattern of entry names to leave out, or None.
    reader
        Archive reader (ZIP files when None).
    on_error
        ``FAIL_FAST`` raises the first archive error in path order;
        ``CONTINUE`` records it in ``BatchReport.failures`` and goes on.
    jobs
        Number of archives read concurrently.

    Returns
    -------
    BatchReport
        Archive reports in path order.

    Raises
    ------
    ConfigurationError
        If ``paths`` is empty, ``jobs`` is below 1, or ``exclude`` is invalid.
    ArchiveError
        Under ``FAIL_FAST``, for the first archive that cannot be read.
    """
    if not paths:
        raise ConfigurationError("At least one archive path is required")
    if jobs < 1:
        raise ConfigurationError(f"jobs must be at least 1, got {jobs}")

    exclusion = ExclusionFilter.compile(exclude)
    selection = selection or StatSelection.all()
    reader = reader or ZipArchiveReader()

    def read_one(path: str) -> ArchiveReport | ArchiveError:
        try:
            return read_archive_report(path, reader=reader, selection=selection, exclusion=exclusion)
        except ArchiveError as e:
            if on_error is FailurePolicy.FAIL_FAST:
                raise
            return e

    if jobs == 1:
        results: Iterable[ArchiveReport | ArchiveError] = (read_one(p) for p in paths)
        return _collect(results)

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        # map() yields in submission order and re-raises the first error in that order.
        return _collect(pool.map(read_one, paths))


def _collect(results: Iterable[ArchiveReport | ArchiveError]) -> BatchReport:
    archives: list[ArchiveReport] = []
    failures: list[ArchiveFailure] = []
    for result in results:
        if isinstance(result, ArchiveError):
            logger.info("Skipping unreadable archive: %s", result)
            failures.append(ArchiveFailure(path=result.path, message=str(result)))
        else:
            archives.append(result)
    return BatchReport(archives=archives, failures=failures)
