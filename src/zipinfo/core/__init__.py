"""Core types, statistics, filtering and archive access."""
