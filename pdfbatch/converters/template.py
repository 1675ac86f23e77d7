"""Shared HTML document template for converted sources."""

import html
import re
from datetime import UTC, datetime
from pathlib import Path

GENERATOR_NAME = "pdfbatch - Batch PDF Generator"

STYLESHEET = """
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            line-height: 1.6;
            color: #333;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            background: white;
        }
        h1, h2, h3, h4, h5, h6 {
            color: #2c3e50;
            margin-top: 24px;
            margin-bottom: 16px;
        }
        h1 {
            border-bottom: 3px solid #3498db;
            padding-bottom: 10px;
        }
        h2 {
            border-bottom: 1px solid #bdc3c7;
            padding-bottom: 8px;
        }
        p {
            margin-bottom: 16px;
            text-align: justify;
        }
        code {
            background: #f8f9fa;
            padding: 2px 4px;
            border-radius: 3px;
            font-family: 'Courier New', monospace;
        }
        pre {
            background: #f8f9fa;
            padding: 16px;
            border-radius: 6px;
            overflow-x: auto;
            border-left: 4px solid #3498db;
        }
        blockquote {
            border-left: 4px solid #3498db;
            margin: 0;
            padding-left: 16px;
            color: #666;
            font-style: italic;
        }
        table {
            border-collapse: collapse;
            width: 100%;
            margin: 16px 0;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 12px;
            text-align: left;
        }
        th {
            background-color: #f2f2f2;
            font-weight: bold;
        }
        ul, ol {
            padding-left: 20px;
        }
        li {
            margin-bottom: 8px;
        }
        .document-header {
            border-bottom: 2px solid #3498db;
            margin-bottom: 30px;
            padding-bottom: 20px;
        }
        .document-info {
            background: #f8f9fa;
            padding: 15px;
            border-radius: 6px;
            margin-bottom: 20px;
            font-size: 0.9em;
            color: #666;
        }
        .page-break {
            page-break-before: always;
        }
        pre, table, blockquote {
            page-break-inside: avoid;
        }
        @media print {
            body {
                margin: 0;
                padding: 15mm;
            }
            .document-header {
                margin-bottom: 20px;
            }
        }
"""


def title_from_filename(file_path: Path) -> str:
    """Derive a display title from a file name.

    ``project-charter.md`` becomes ``Project Charter``.
    """
    words = file_path.stem.replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), words)


def render_document(
    title: str,
    body: str,
    source: Path | str,
    generated_at: datetime | None = None,
) -> str:
    """Wrap an HTML body in the shared document template.

    Args:
        title: Document title (escaped before embedding)
        body: Already-rendered HTML body content
        source: Source path shown in the document header
        generated_at: Generation timestamp (default: now, UTC)

    Returns:
        Complete HTML document
    """
    generated = (generated_at or datetime.now(UTC)).isoformat()
    safe_title = html.escape(title)
    safe_source = html.escape(str(source))
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{safe_title}</title>
    <style>{STYLESHEET}    </style>
</head>
<body>
    <div class="document-header">
        <h1>{safe_title}</h1>
        <div class="document-info">
            <strong>Source:</strong> {safe_source}<br>
            <strong>Generated:</strong> {generated}<br>
            <strong>Conversion:</strong> {GENERATOR_NAME}
        </div>
    </div>
    {body}
</body>
</html>"""
