"""Command line interface for pdfbatch."""
