"""Custom exceptions for pdfbatch."""

from pathlib import Path


class PdfBatchError(Exception):
    """Base exception class for pdfbatch."""

    pass


class DiscoveryError(PdfBatchError):
    """The scan root cannot be used for file discovery."""

    def __init__(self, root: Path, message: str) -> None:
        self.root = root
        super().__init__(f"Cannot scan {root}: {message}")


class ConversionError(PdfBatchError):
    """Error while turning a source file into HTML or PDF."""

    def __init__(self, file_path: Path, message: str, cause: Exception | None = None) -> None:
        self.file_path = file_path
        self.cause = cause
        super().__init__(f"Conversion failed for {file_path}: {message}")


class ConverterNotFoundError(ConversionError):
    """No content converter is registered for the file extension."""

    def __init__(self, file_path: Path, extension: str) -> None:
        super().__init__(file_path, f"No converter available for {extension}")
        self.extension = extension


class FallbackExhaustedError(ConversionError):
    """Every configured rendering method failed."""

    def __init__(self, file_path: Path, errors: list[Exception]) -> None:
        messages = [str(e) for e in errors]
        super().__init__(file_path, f"All conversion methods failed: {messages}")
        self.errors = errors


class RenderError(PdfBatchError):
    """A rendering method could not produce a PDF."""

    def __init__(self, method: str, message: str, cause: Exception | None = None) -> None:
        self.method = method
        self.cause = cause
        super().__init__(f"{method} conversion failed: {message}")


class ConfigurationError(PdfBatchError):
    """Configuration error."""

    pass
