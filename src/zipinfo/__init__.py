"""zipinfo: size and compression reports for the entries of ZIP archives."""

from __future__ import annotations

__version__ = "0.3.0"
