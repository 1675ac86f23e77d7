"""Utility module for pdfbatch."""

from pdfbatch.utils.fs import (
    FileDescriptor,
    atomic_output,
    discover_files,
    ensure_directory,
    output_path_for,
)
from pdfbatch.utils.stats import BatchSummary, ProgressTracker

__all__ = [
    # File system
    "FileDescriptor",
    "atomic_output",
    "discover_files",
    "ensure_directory",
    "output_path_for",
    # Stats
    "BatchSummary",
    "ProgressTracker",
]
