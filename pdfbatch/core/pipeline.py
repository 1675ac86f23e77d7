"""Per-file conversion pipeline."""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import anyio

from pdfbatch.converters import convert_to_html
from pdfbatch.exceptions import FallbackExhaustedError, PdfBatchError, RenderError
from pdfbatch.renderers import BaseRenderer, RenderMethod, RenderResult, create_renderers
from pdfbatch.utils.fs import FileDescriptor, atomic_output, is_stale, output_path_for
from pdfbatch.utils.logging import get_logger

if TYPE_CHECKING:
    from pdfbatch.config.settings import PdfBatchSettings

log = get_logger(__name__)

FileOutcome = Literal["skipped", "succeeded", "failed"]
OnExisting = Literal["skip", "overwrite", "newer"]


@dataclass
class FileResult:
    """Outcome of processing one discovered file."""

    descriptor: FileDescriptor
    outcome: FileOutcome
    output_path: Path
    method: RenderMethod | None = None
    error: str | None = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """A skipped file counts as a success: its PDF is in place."""
        return self.outcome != "failed"

    @property
    def skipped(self) -> bool:
        return self.outcome == "skipped"


class ConversionPipeline:
    """Converts one source file to PDF.

    Flow for each file:
    1. Resolve the output path, mirroring the input tree
    2. Skip when the PDF already exists (see ``on_existing``)
    3. Convert the source to HTML
    4. Try each renderer in priority order until one produces the PDF

    Per-file failures are logged and reported in the FileResult; they never
    propagate to the caller.
    """

    def __init__(
        self,
        renderers: list[BaseRenderer],
        on_existing: OnExisting = "skip",
    ) -> None:
        """Initialize the pipeline.

        Args:
            renderers: Rendering methods in priority order
            on_existing: What to do when the PDF already exists:
                ``skip`` keeps it, ``overwrite`` always regenerates,
                ``newer`` regenerates when the source is newer than the PDF
        """
        if not renderers:
            raise ValueError("At least one renderer is required")
        self.renderers = renderers
        self.on_existing = on_existing

    @classmethod
    def from_settings(
        cls,
        settings: "PdfBatchSettings",
        methods: list[str] | None = None,
        on_existing: OnExisting | None = None,
    ) -> "ConversionPipeline":
        """Build a pipeline from settings, with optional CLI overrides."""
        return cls(
            renderers=create_renderers(methods or settings.render.methods, settings),
            on_existing=on_existing or settings.output.on_existing,
        )

    @property
    def method_names(self) -> list[str]:
        return [r.name for r in self.renderers]

    def _should_skip(self, descriptor: FileDescriptor, output_path: Path) -> bool:
        if not output_path.exists():
            return False
        if self.on_existing == "overwrite":
            return False
        if self.on_existing == "newer":
            return not is_stale(descriptor.full_path, output_path)
        return True

    async def convert_file(self, descriptor: FileDescriptor, output_root: Path) -> FileResult:
        """Convert one discovered file.

        Args:
            descriptor: Source file
            output_root: Root of the mirrored output tree

        Returns:
            FileResult with the terminal state (skipped, succeeded or failed)

        Raises:
            OSError: If the output directory cannot be created
        """
        rel_path = str(descriptor.relative_path)
        output_path = output_path_for(descriptor, output_root)
        start = time.perf_counter()

        # Failing to create the output directory halts the whole run
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            if self._should_skip(descriptor, output_path):
                log.info("Skipping - PDF already exists", file=rel_path)
                return FileResult(descriptor, "skipped", output_path)

            html = await anyio.to_thread.run_sync(convert_to_html, descriptor.full_path)  # type: ignore[attr-defined]
            result = await self._render_with_fallback(descriptor, html, output_path)
        except Exception as e:
            log.error(
                "Failed to convert",
                file=rel_path,
                error=str(e),
                exc_info=not isinstance(e, PdfBatchError),
            )
            return FileResult(
                descriptor,
                "failed",
                output_path,
                error=str(e),
                duration=time.perf_counter() - start,
            )

        log.info("Converted", file=rel_path, method=result.method.value)
        return FileResult(
            descriptor,
            "succeeded",
            output_path,
            method=result.method,
            duration=time.perf_counter() - start,
        )

    async def _render_with_fallback(
        self, descriptor: FileDescriptor, html: str, output_path: Path
    ) -> RenderResult:
        """Try renderers in order; the first success wins."""
        errors: list[Exception] = []

        for renderer in self.renderers:
            try:
                log.debug("Trying rendering method", method=renderer.name, file=descriptor.name)
                with atomic_output(output_path) as temp_path:
                    return await renderer.render(html, temp_path)
            except Exception as e:
                error = e if isinstance(e, RenderError) else RenderError(renderer.name, str(e), e)
                log.warning(
                    "Rendering method failed",
                    method=renderer.name,
                    file=str(descriptor.relative_path),
                    error=str(error),
                )
                errors.append(error)

        raise FallbackExhaustedError(descriptor.full_path, errors)
