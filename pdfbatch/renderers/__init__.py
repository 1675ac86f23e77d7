"""Rendering methods: turn HTML documents into PDF files."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pdfbatch.exceptions import ConfigurationError
from pdfbatch.renderers.adobe import AdobeRenderer
from pdfbatch.renderers.base import BaseRenderer, RenderMethod, RenderResult
from pdfbatch.renderers.playwright import PlaywrightRenderer

if TYPE_CHECKING:
    from pdfbatch.config.settings import PdfBatchSettings


def create_renderer(method: RenderMethod | str, settings: "PdfBatchSettings") -> BaseRenderer:
    """Create the renderer for a rendering method.

    Raises:
        ConfigurationError: If the method name is unknown
    """
    try:
        method = RenderMethod(method)
    except ValueError as e:
        options = ", ".join(m.value for m in RenderMethod)
        raise ConfigurationError(f"Unknown rendering method '{method}'. Options: {options}") from e

    if method is RenderMethod.PLAYWRIGHT:
        return PlaywrightRenderer(
            page_format=settings.render.page_format,
            margin=settings.render.margin,
            timeout_ms=settings.render.timeout_ms,
        )
    if method is RenderMethod.ADOBE:
        return AdobeRenderer.from_settings(settings)
    raise ConfigurationError(f"No renderer registered for '{method.value}'")


def create_renderers(
    methods: Iterable[RenderMethod | str], settings: "PdfBatchSettings"
) -> list[BaseRenderer]:
    """Create renderers in priority order."""
    return [create_renderer(m, settings) for m in methods]


__all__ = [
    "AdobeRenderer",
    "BaseRenderer",
    "PlaywrightRenderer",
    "RenderMethod",
    "RenderResult",
    "create_renderer",
    "create_renderers",
]
