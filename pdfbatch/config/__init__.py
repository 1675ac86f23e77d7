"""Configuration module for pdfbatch."""

from pdfbatch.config.settings import PdfBatchSettings, get_settings, reload_settings

__all__ = ["PdfBatchSettings", "get_settings", "reload_settings"]
