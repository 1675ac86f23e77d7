"""Core conversion pipeline and batch driver."""

from pdfbatch.core.batch import BatchRunner, chunked
from pdfbatch.core.pipeline import ConversionPipeline, FileResult

__all__ = ["BatchRunner", "ConversionPipeline", "FileResult", "chunked"]
