"""JSON formatter.

The document maps archive path to entry name to the selected statistics
of that entry. Statistics that were not selected are omitted rather than
written as ``null``; ``comment`` only appears for entries that have one.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from zipinfo.core.types import BatchReport, EntryReport

BatchDocument = dict[str, dict[str, EntryReport]]

_DOCUMENT = TypeAdapter(BatchDocument)


class JsonFormatter:
    """Render a batch as a compact or pretty JSON document.

    Parameters
    ----------
    pretty
        Indent the document by two spaces, one field per line.
    """

    def __init__(self, pretty: bool = False) -> None:
        self.pretty = pretty

    def format_string(self, batch: BatchReport) -> str:
        """Return the JSON document of ``batch``."""
        data = _DOCUMENT.dump_json(batch.to_document(), exclude_none=True, indent=2 if self.pretty else None)
        return data.decode("utf-8")

    def write(self, batch: BatchReport, path: Path) -> None:
        """Write the JSON document of ``batch`` to ``path``."""
        path.write_text(self.format_string(batch) + "\n", encoding="utf-8")

    @staticmethod
    def parse(text: str | bytes) -> BatchReport:
        """Decode a document produced by :meth:`format_string`.

        Raises
        ------
        ValueError
            If the text is not a valid batch document.
        """
        try:
            document = _DOCUMENT.validate_json(text)
        except ValidationError as e:
            raise ValueError(f"Invalid batch document: {e}") from e
        return BatchReport.from_document(document)
