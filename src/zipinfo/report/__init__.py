"""Report construction for single archives and batches."""
