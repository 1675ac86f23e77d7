"""Chunked batch driver."""

import asyncio
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TypeVar

from pdfbatch.config.constants import DEFAULT_CHUNK_SIZE
from pdfbatch.core.pipeline import ConversionPipeline, FileResult
from pdfbatch.utils.fs import FileDescriptor
from pdfbatch.utils.logging import get_logger
from pdfbatch.utils.stats import BatchSummary, ProgressTracker

log = get_logger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], width: int) -> Iterator[list[T]]:
    """Split items into contiguous chunks of ``width`` (the last may be shorter)."""
    if width < 1:
        raise ValueError(f"Chunk width must be at least 1, got {width}")
    for i in range(0, len(items), width):
        yield list(items[i : i + width])


class BatchRunner:
    """Runs the pipeline over a file list in fixed-size chunks.

    Chunks are processed in discovery order. All files of a chunk convert
    concurrently and the next chunk starts only when the whole chunk is done,
    which bounds the number of browser processes alive at once. Results are
    folded into the progress tracker after each chunk is gathered.
    """

    def __init__(
        self,
        pipeline: ConversionPipeline,
        output_root: Path,
        concurrency: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")
        self.pipeline = pipeline
        self.output_root = output_root
        self.concurrency = concurrency

    async def run(
        self,
        files: Sequence[FileDescriptor],
        on_result: Callable[[FileResult], None] | None = None,
    ) -> BatchSummary:
        """Convert all files and return the final summary.

        Args:
            files: Discovered files, in discovery order
            on_result: Optional callback invoked for every finished file

        Returns:
            BatchSummary for the run
        """
        progress = ProgressTracker(total=len(files))
        log.info("Processing files in chunks", total=len(files), chunk_size=self.concurrency)

        for index, chunk in enumerate(chunked(files, self.concurrency), 1):
            log.debug("Starting chunk", chunk=index, files=[f.name for f in chunk])
            results = await asyncio.gather(
                *(self.pipeline.convert_file(f, self.output_root) for f in chunk)
            )
            for result in results:
                progress.record(result)
                if on_result is not None:
                    on_result(result)
            log.info(progress.format_progress())

        return progress.get_summary()
