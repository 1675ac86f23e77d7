"""CLI commands for pdfbatch."""
