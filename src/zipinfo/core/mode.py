"""Output and failure-handling modes."""

from __future__ import annotations

from enum import Enum


class OutputMode(str, Enum):
    """Report output mode.

    Attributes
    ----------
    FLAT
        Indented plain-text outline in archive and entry order.
    JSON
        Compact JSON document keyed by archive path and entry name.
    PRETTY_JSON
        Indented JSON document with one field per line.
    """

    FLAT = "flat"
    JSON = "json"
    PRETTY_JSON = "pretty-json"


class FailurePolicy(str, Enum):
    """What a batch does when one of its archives cannot be read.

    Attributes
    ----------
    FAIL_FAST
        Abort the whole batch with the first archive error.
    CONTINUE
        Record the failure, skip the archive and report the rest.
    """

    FAIL_FAST = "fail-fast"
    CONTINUE = "continue"
