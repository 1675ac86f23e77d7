"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from pdfbatch.exceptions import RenderError
from pdfbatch.renderers.base import BaseRenderer, RenderMethod, RenderResult

FAKE_PDF = b"%PDF-1.4\n% fake\n%%EOF\n"


class FakeRenderer(BaseRenderer):
    """Renderer that writes a tiny PDF and records every call."""

    def __init__(self, method: RenderMethod = RenderMethod.PLAYWRIGHT) -> None:
        self.method = method
        self.calls: list[Path] = []

    async def render(self, html: str, output_path: Path) -> RenderResult:
        self.calls.append(output_path)
        output_path.write_bytes(FAKE_PDF)
        return RenderResult(success=True, method=self.method)


class FailingRenderer(BaseRenderer):
    """Renderer that leaves a partial file behind and then fails."""

    def __init__(self, method: RenderMethod = RenderMethod.PLAYWRIGHT) -> None:
        self.method = method
        self.calls: list[Path] = []

    async def render(self, html: str, output_path: Path) -> RenderResult:
        self.calls.append(output_path)
        output_path.write_bytes(b"%PDF-1.4 truncated")
        raise RenderError(self.name, "browser crashed")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Run in an isolated directory without pdfbatch.yaml or PDFBATCH_ env vars."""
    monkeypatch.chdir(tmp_path)
    for name in ("PDFBATCH_LOG_LEVEL", "PDFBATCH_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)

    from pdfbatch.config.settings import get_settings

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """Create an input tree with one file per supported format and one stray file."""
    root = temp_dir / "docs"
    root.mkdir()
    (root / "a.md").write_text("# Alpha\n\nFirst document.", encoding="utf-8")
    (root / "b.txt").write_text("Bravo line one\n\nBravo line three", encoding="utf-8")
    (root / "c.html").write_text(
        "<!DOCTYPE html><html><body><p>Charlie</p></body></html>", encoding="utf-8"
    )
    (root / "d.exe").write_bytes(b"MZ\x90\x00")
    return root


@pytest.fixture
def nested_tree(temp_dir: Path) -> Path:
    """Create an input tree with nested directories."""
    root = temp_dir / "generated-documents"
    (root / "planning").mkdir(parents=True)
    (root / "planning" / "deep").mkdir()
    (root / "project-charter.md").write_text("# Charter\n\nScope.", encoding="utf-8")
    (root / "planning" / "schedule.txt").write_text("Week 1\nWeek 2", encoding="utf-8")
    (root / "planning" / "deep" / "notes.md").write_text("Notes", encoding="utf-8")
    return root


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    """A renderer that always succeeds."""
    return FakeRenderer(RenderMethod.PLAYWRIGHT)


@pytest.fixture
def failing_renderer() -> FailingRenderer:
    """A renderer that always fails."""
    return FailingRenderer(RenderMethod.PLAYWRIGHT)


@pytest.fixture
def make_renderer():
    """Factory for fake renderers: ``make_renderer(RenderMethod.ADOBE, fail=True)``."""

    def _make(method: RenderMethod = RenderMethod.PLAYWRIGHT, fail: bool = False) -> BaseRenderer:
        return FailingRenderer(method) if fail else FakeRenderer(method)

    return _make
