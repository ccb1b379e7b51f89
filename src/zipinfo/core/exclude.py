"""Glob-based exclusion of archive entries.

Patterns use shell glob syntax (``*``, ``?``, ``[seq]``, ``[!seq]``) and are
matched case-sensitively against the full entry name. ``*`` also matches
``/``, so ``*.log`` excludes ``logs/app.log`` as well as ``app.log``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fnmatch import translate

from zipinfo.core.errors import ConfigurationError


@dataclass(frozen=True)
class ExclusionFilter:
    """Compiled exclusion pattern.

    Attributes
    ----------
    pattern
        Source glob pattern, or None to exclude nothing.
    regex
        Compiled form of ``pattern``.
    """

    pattern: str | None
    regex: re.Pattern[str] | None

    @classmethod
    def compile(cls, pattern: str | None) -> ExclusionFilter:
        """Validate and compile a glob pattern.

        Parameters
        ----------
        pattern
            Glob pattern, or None to exclude nothing.

        Returns
        -------
        ExclusionFilter
            Filter ready for matching.

        Raises
        ------
        ConfigurationError
            If the pattern is malformed (see ``validate_pattern``).
        """
        if pattern is None:
            return cls(pattern=None, regex=None)
        validate_pattern(pattern)
        return cls(pattern=pattern, regex=re.compile(translate(pattern)))

    def matches(self, name: str) -> bool:
        """Return True if ``name`` is excluded."""
        if self.regex is None:
            return False
        return self.regex.match(name) is not None


def validate_pattern(pattern: str) -> None:
    """Reject glob patterns that are malformed.

    ``fnmatch`` would treat a dangling ``[`` as a literal character. A
    ``]`` directly after ``[`` or ``[!`` is a member of the class, as in
    shell globbing. Outside a class, ``**`` must form a whole path
    component (``**``, ``**/x``, ``a/**/b``); it then matches like ``*``.

    Raises
    ------
    ConfigurationError
        If a ``[`` has no matching ``]``, or ``**`` is not a whole path
        component.
    """
    i = 0
    n = len(pattern)
    while i < n:
        if pattern[i] == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            if j - i > 2 or (
                j - i == 2 and ((i > 0 and pattern[i - 1] != "/") or (j < n and pattern[j] != "/"))
            ):
                raise ConfigurationError(
                    f"Invalid exclude pattern {pattern!r}: recursive wildcard at {i} is not a whole path component"
                )
            i = j
            continue
        if pattern[i] != "[":
            i += 1
            continue
        j = i + 1
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        close = pattern.find("]", j)
        if close < 0:
            raise ConfigurationError(f"Invalid exclude pattern {pattern!r}: unterminated character class at {i}")
        i = close + 1
