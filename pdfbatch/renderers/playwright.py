"""Headless Chromium rendering through Playwright."""

from pathlib import Path

from playwright.async_api import Browser, async_playwright

from pdfbatch.config.constants import (
    DEFAULT_PAGE_FORMAT,
    DEFAULT_PAGE_MARGIN,
    DEFAULT_PAGE_TIMEOUT_MS,
)
from pdfbatch.exceptions import RenderError
from pdfbatch.renderers.base import BaseRenderer, RenderMethod, RenderResult
from pdfbatch.utils.logging import get_logger

log = get_logger(__name__)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",  # Use /tmp instead of /dev/shm
]


class PlaywrightRenderer(BaseRenderer):
    """Render HTML to PDF in an isolated Chromium instance.

    Each call launches its own browser and always closes it, so concurrent
    renders never share a page or browser process.
    """

    method = RenderMethod.PLAYWRIGHT

    def __init__(
        self,
        page_format: str = DEFAULT_PAGE_FORMAT,
        margin: str = DEFAULT_PAGE_MARGIN,
        timeout_ms: int = DEFAULT_PAGE_TIMEOUT_MS,
    ) -> None:
        self.page_format = page_format
        self.margin = margin
        self.timeout_ms = timeout_ms

    @property
    def pdf_options(self) -> dict:
        return {
            "format": self.page_format,
            "margin": {
                "top": self.margin,
                "right": self.margin,
                "bottom": self.margin,
                "left": self.margin,
            },
            "print_background": True,
            "prefer_css_page_size": False,
        }

    async def render(self, html: str, output_path: Path) -> RenderResult:
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(headless=True, args=BROWSER_ARGS)
                try:
                    await self._print(browser, html, output_path)
                finally:
                    await browser.close()
        except Exception as e:
            raise RenderError(self.name, str(e), cause=e) from e

        log.debug("Rendered with Playwright", output=str(output_path))
        return RenderResult(success=True, method=self.method)

    async def _print(self, browser: Browser, html: str, output_path: Path) -> None:
        page = await browser.new_page()
        await page.set_content(html, wait_until="load", timeout=self.timeout_ms)
        await page.wait_for_load_state("networkidle", timeout=self.timeout_ms)
        await page.pdf(path=str(output_path), **self.pdf_options)
