"""Batch progress tracking and summary reporting."""

from dataclasses import dataclass, field
from time import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pdfbatch.core.pipeline import FileResult


@dataclass(frozen=True)
class FailedFile:
    """A file that could not be converted."""

    path: str
    error: str


@dataclass(frozen=True)
class BatchSummary:
    """Final figures for a batch run."""

    total: int
    completed: int
    failed: int
    skipped: int
    success_rate: float
    elapsed_seconds: float
    failures: tuple[FailedFile, ...] = ()

    def format_summary(self) -> str:
        """Format the summary as human-readable lines."""
        lines = [
            f"Total files: {self.total}",
            f"Successfully converted: {self.completed}",
            f"Failed: {self.failed}",
            f"Success rate: {self.success_rate:.1f}%",
            f"Total time: {self.elapsed_seconds:.1f}s",
        ]
        if self.skipped:
            lines.insert(2, f"Skipped (already converted): {self.skipped}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "completed": self.completed,
            "failed": self.failed,
            "skipped": self.skipped,
            "success_rate": self.success_rate,
            "elapsed_seconds": self.elapsed_seconds,
            "failures": [{"path": f.path, "error": f.error} for f in self.failures],
        }


@dataclass
class ProgressTracker:
    """Success/failure counters for one batch run.

    ``completed`` includes files skipped because their PDF already existed.
    The tracker is only updated by the batch driver between chunks, never
    from concurrently running conversions.
    """

    total: int
    completed: int = 0
    failed: int = 0
    skipped: int = 0
    start_time: float = field(default_factory=time)
    failures: list[FailedFile] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.completed + self.failed

    @property
    def elapsed(self) -> float:
        return time() - self.start_time

    def update(self, success: bool = True, skipped: bool = False) -> None:
        """Record one finished file.

        Args:
            success: Whether the file ended with a PDF in place
            skipped: Whether the PDF already existed
        """
        if success:
            self.completed += 1
            if skipped:
                self.skipped += 1
        else:
            self.failed += 1

    def record(self, result: "FileResult") -> None:
        """Fold a per-file result into the counters."""
        self.update(success=result.success, skipped=result.skipped)
        if not result.success:
            self.failures.append(
                FailedFile(
                    path=str(result.descriptor.relative_path),
                    error=result.error or "Unknown error",
                )
            )

    def format_progress(self) -> str:
        """Format the incremental progress line."""
        percentage = (self.processed / self.total * 100) if self.total else 100.0
        return (
            f"Progress: {self.processed}/{self.total} ({percentage:.1f}%) - "
            f"Success: {self.completed}, Failed: {self.failed}, Time: {self.elapsed:.1f}s"
        )

    def get_summary(self) -> BatchSummary:
        """Return the current figures as an immutable summary."""
        success_rate = round(self.completed / self.total * 100, 1) if self.total else 0.0
        return BatchSummary(
            total=self.total,
            completed=self.completed,
            failed=self.failed,
            skipped=self.skipped,
            success_rate=success_rate,
            elapsed_seconds=round(self.elapsed, 1),
            failures=tuple(self.failures),
        )
