"""HTML passthrough.

Pre-formatted HTML is treated as a complete document and bypasses the shared
template.
"""

from pathlib import Path

from pdfbatch.converters.base import read_source


def convert_html(file_path: Path) -> str:
    """Return the HTML file contents unmodified."""
    return read_source(file_path)
