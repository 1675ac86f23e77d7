"""Rendering method interface and data classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class RenderMethod(str, Enum):
    """Closed set of backends that turn HTML into PDF."""

    PLAYWRIGHT = "playwright"
    ADOBE = "adobe"


@dataclass(frozen=True)
class RenderResult:
    """Result of a successful render."""

    success: bool
    method: RenderMethod


class BaseRenderer(ABC):
    """Abstract base class for rendering methods."""

    method: RenderMethod

    @property
    def name(self) -> str:
        return self.method.value

    @abstractmethod
    async def render(self, html: str, output_path: Path) -> RenderResult:
        """Render an HTML document to a PDF file.

        Args:
            html: Complete HTML document
            output_path: Where the PDF must be written

        Returns:
            RenderResult naming the method that produced the file

        Raises:
            RenderError: If the PDF could not be produced
        """
        pass
