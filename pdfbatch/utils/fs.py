"""File system utilities for pdfbatch.

Provides file discovery, output path mapping and atomic output handling.
"""

import os
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from pdfbatch.config.constants import DEFAULT_EXTENSIONS, PARTIAL_SUFFIX
from pdfbatch.exceptions import DiscoveryError
from pdfbatch.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class FileDescriptor:
    """A source file found during discovery."""

    full_path: Path
    relative_path: Path
    name: str
    extension: str

    @classmethod
    def from_path(cls, path: Path, root: Path) -> "FileDescriptor":
        """Build a descriptor for ``path`` relative to the scan ``root``."""
        full_path = path.absolute()
        return cls(
            full_path=full_path,
            relative_path=full_path.relative_to(root.absolute()),
            name=path.name,
            extension=path.suffix.lower(),
        )


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def _matches(name: str, include: str | None, exclude: str | None) -> bool:
    if include and not Path(name).match(include):
        return False
    if exclude and Path(name).match(exclude):
        return False
    return True


def discover_files(
    root: Path,
    extensions: Iterable[str] | None = None,
    *,
    follow_symlinks: bool = False,
    include: str | None = None,
    exclude: str | None = None,
) -> list[FileDescriptor]:
    """Recursively discover source files under ``root``.

    Entries are visited depth-first in sorted name order, so repeated scans of
    an unchanged tree return the same list. Unreadable directories are logged
    and skipped.

    Args:
        root: Directory to scan
        extensions: Accepted extensions including the dot (default: .md, .txt, .html)
        follow_symlinks: Follow symlinked files and directories
        include: Glob pattern a file name must match
        exclude: Glob pattern that excludes a file name

    Returns:
        List of file descriptors in discovery order

    Raises:
        DiscoveryError: If root is missing or not a directory
    """
    if not root.exists():
        raise DiscoveryError(root, "directory does not exist")
    if not root.is_dir():
        raise DiscoveryError(root, "not a directory")

    accepted = {ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS)}
    files: list[FileDescriptor] = []

    def scan(directory: Path, ancestors: frozenset[str]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            log.error("Error scanning directory", directory=str(directory), error=str(e))
            return

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_symlink() and not follow_symlinks:
                    log.debug("Skipping symlink", path=str(path))
                    continue
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    real = os.path.realpath(path)
                    if real in ancestors:
                        log.warning("Skipping symlink cycle", path=str(path))
                        continue
                    scan(path, ancestors | {real})
                elif entry.is_file(follow_symlinks=follow_symlinks):
                    if path.suffix.lower() not in accepted:
                        continue
                    if not _matches(entry.name, include, exclude):
                        continue
                    files.append(FileDescriptor.from_path(path, root))
            except OSError as e:
                log.error("Error reading entry", path=str(path), error=str(e))

    scan(root, frozenset({os.path.realpath(root)}))
    return files


def output_path_for(descriptor: FileDescriptor, output_root: Path) -> Path:
    """Map a source file to its PDF path, mirroring the input tree."""
    return (output_root / descriptor.relative_path).with_suffix(".pdf")


@contextmanager
def atomic_output(output_path: Path) -> Iterator[Path]:
    """Context manager for atomic output files.

    Yields a unique temporary sibling path (``.<name>.<random>.part``) for the
    writer to fill, so concurrent writers of the same PDF never share a file.
    On normal exit the temporary file replaces ``output_path``; on error it is
    removed so no partial file is left behind.

    Args:
        output_path: Final file path

    Yields:
        Temporary path to write to
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory (for atomic rename)
    temp_fd, temp_name = tempfile.mkstemp(
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=PARTIAL_SUFFIX,
    )
    temp_path = Path(temp_name)

    try:
        os.close(temp_fd)
        yield temp_path
        if not temp_path.exists() or temp_path.stat().st_size == 0:
            raise FileNotFoundError(f"No output was written to {temp_path}")
        temp_path.replace(output_path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def is_stale(source: Path, output: Path) -> bool:
    """Check whether ``source`` was modified after ``output`` was written."""
    return source.stat().st_mtime_ns > output.stat().st_mtime_ns


def group_by_extension(files: Iterable[FileDescriptor]) -> dict[str, int]:
    """Count discovered files per extension."""
    counts: dict[str, int] = {}
    for f in files:
        counts[f.extension] = counts.get(f.extension, 0) + 1
    return counts


def find_output_collisions(files: Iterable[FileDescriptor]) -> dict[Path, list[FileDescriptor]]:
    """Find sources that map to the same PDF path.

    ``notes.md`` and ``notes.txt`` in one directory both become ``notes.pdf``;
    only one of them survives a run.

    Args:
        files: Discovered file descriptors

    Returns:
        Mapping of relative PDF path to the sources sharing it, for paths
        claimed by more than one source
    """
    groups: dict[Path, list[FileDescriptor]] = {}
    for f in files:
        groups.setdefault(f.relative_path.with_suffix(".pdf"), []).append(f)
    return {pdf: sources for pdf, sources in groups.items() if len(sources) > 1}
