"""Indented plain-text formatter."""

from __future__ import annotations

from zipinfo.core.types import ArchiveReport, BatchReport, EntryReport

STAT_LABELS: dict[str, str] = {
    "compression_type": "Compression type",
    "original_size": "Original size",
    "compressed_size": "Compressed size",
    "compression_rate": "Compression rate",
}


class FlatFormatter:
    """Render a batch as an indented outline.

    Each archive block starts with the archive path, followed by one
    tab-indented line per entry and one double-tab-indented line per
    statistic. Blocks are joined by a newline; archives and entries keep
    the order of the report.
    """

    def format_string(self, batch: BatchReport) -> str:
        """Return the outline of ``batch``."""
        return "\n".join(self.format_archive(archive) for archive in batch.archives)

    def format_archive(self, archive: ArchiveReport) -> str:
        """Return the outline block of a single archive."""
        parts = [archive.path]
        for name, entry in archive.entries.items():
            parts.append(f"\n\t{name}")
            parts.extend(_entry_lines(entry))
        return "".join(parts)


def _entry_lines(entry: EntryReport) -> list[str]:
    lines: list[str] = []
    for field, label in STAT_LABELS.items():
        value = getattr(entry, field)
        if value is not None:
            lines.append(f"\n\t\t{label}: {value}")
    if entry.comment:
        lines.append(f"\n\t\tComment: {entry.comment}")
    return lines
