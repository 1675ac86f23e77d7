"""Plain text to HTML conversion."""

import html
from pathlib import Path

from pdfbatch.converters.base import read_source
from pdfbatch.converters.template import render_document, title_from_filename


def text_to_html(text: str) -> str:
    """Wrap each line in a paragraph; blank lines keep their vertical space."""
    paragraphs = []
    for line in text.split("\n"):
        content = html.escape(line.strip())
        paragraphs.append(f"<p>{content or '&nbsp;'}</p>")
    return "\n".join(paragraphs)


def convert_text(file_path: Path) -> str:
    """Convert a plain text file into a complete HTML document."""
    text = read_source(file_path)
    return render_document(title_from_filename(file_path), text_to_html(text), file_path)
