"""Derived per-entry statistics."""

from __future__ import annotations


def compression_rate(original: int, compressed: int) -> str:
    """Format the size reduction of an entry as a signed percentage.

    Parameters
    ----------
    original
        Uncompressed size in bytes.
    compressed
        Stored (compressed) size in bytes.

    Returns
    -------
    str
        ``(original - compressed) / original`` as a percentage with two
        decimals, e.g. ``"50.00%"``. Entries that grew give a negative
        rate (``"-50.00%"``); an empty original gives ``"0.00%"``.
    """
    if original == 0:
        return f"{0.0:.2f}%"
    rate = (float(original) - float(compressed)) / float(original)
    return f"{rate * 100:.2f}%"
