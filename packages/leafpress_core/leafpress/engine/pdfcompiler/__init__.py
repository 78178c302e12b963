"""PDF backend - turns finalized pages into a PDF document."""

from .backend import DocumentBackend
from .compiler import DocumentInfo, PdfBackend
from .resources import PdfFontRegistry, PdfImageRegistry

__all__ = ["DocumentBackend", "DocumentInfo", "PdfBackend", "PdfFontRegistry", "PdfImageRegistry"]
