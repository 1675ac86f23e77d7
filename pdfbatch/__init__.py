"""pdfbatch - batch document to PDF conversion."""

__version__ = "0.1.0"
