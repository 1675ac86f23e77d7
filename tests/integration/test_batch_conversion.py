"""Integration tests for batch conversion with a real browser.

Skipped when Chromium has not been installed (`playwright install chromium`).
"""

from pathlib import Path

import pytest

from pdfbatch.core.batch import BatchRunner
from pdfbatch.core.pipeline import ConversionPipeline
from pdfbatch.exceptions import RenderError
from pdfbatch.renderers import PlaywrightRenderer, RenderMethod
from pdfbatch.utils.fs import discover_files


async def _require_chromium(renderer: PlaywrightRenderer, temp_dir: Path) -> None:
    try:
        await renderer.render("<html><body>probe</body></html>", temp_dir / "probe.pdf")
    except RenderError as e:
        pytest.skip(f"Chromium not available: {e}")


@pytest.mark.asyncio
async def test_playwright_renders_pdf(temp_dir: Path):
    """Test a real render produces a PDF file."""
    renderer = PlaywrightRenderer(timeout_ms=15000)
    await _require_chromium(renderer, temp_dir)

    output = temp_dir / "page.pdf"
    result = await renderer.render("<html><body><h1>Hello</h1></body></html>", output)

    assert result.method is RenderMethod.PLAYWRIGHT
    assert output.read_bytes().startswith(b"%PDF")


@pytest.mark.asyncio
async def test_batch_conversion_end_to_end(nested_tree: Path, temp_dir: Path):
    """Test a nested tree converts to a mirrored tree of PDFs."""
    renderer = PlaywrightRenderer(timeout_ms=15000)
    await _require_chromium(renderer, temp_dir)

    files = discover_files(nested_tree)
    output_root = temp_dir / "pdf"
    pipeline = ConversionPipeline([renderer])

    summary = await BatchRunner(pipeline, output_root, concurrency=2).run(files)

    assert summary.total == 3
    assert summary.failed == 0
    assert summary.success_rate == 100.0
    for relative in ("project-charter.pdf", "planning/schedule.pdf", "planning/deep/notes.pdf"):
        pdf = output_root / relative
        assert pdf.read_bytes().startswith(b"%PDF")
    assert not list(output_root.rglob("*.part"))

    # Second run finds every PDF in place
    rerun = await BatchRunner(pipeline, output_root, concurrency=2).run(files)
    assert rerun.skipped == 3
