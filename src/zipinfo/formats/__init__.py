"""Output formatters for batch reports."""

from __future__ import annotations

from zipinfo.core.mode import OutputMode
from zipinfo.formats.flat_fmt import FlatFormatter
from zipinfo.formats.json_fmt import JsonFormatter

__all__ = ["FlatFormatter", "JsonFormatter", "formatter_for"]


def formatter_for(mode: OutputMode) -> FlatFormatter | JsonFormatter:
    """Return the formatter that renders ``mode``."""
    if mode is OutputMode.FLAT:
        return FlatFormatter()
    return JsonFormatter(pretty=mode is OutputMode.PRETTY_JSON)
