"""
leafpress - programmatic PDF document generation.

Build a tree of layout elements (text, paragraphs, tables, images, linear
layouts and page breaks) and leafpress wraps, paginates and writes it as PDF.

Features:
- Style inheritance with built-in Helvetica, Times and Courier families
- Custom TrueType font families
- Greedy line wrapping with optional pyphen hyphenation
- Left, right, center and justified alignment
- Tables whose rows move whole to the next page
- Images decoded with Pillow
- Page headers and PDF metadata

Quick Start:
    from leafpress import Document, Paragraph, Style

    doc = Document(hyphenation_locale="en_US")
    doc.push(Paragraph.of("Invoice", Style(font_size=18, bold=True)))
    doc.render_to_file("invoice.pdf")
"""

from .version import __version__, __version_info__

from .exceptions import (
    BackendError,
    ConstructionError,
    DocumentError,
    FeatureDisabled,
    HyphenationUnavailable,
    InvalidFontData,
    LayoutError,
    OutOfSpace,
)

from .document import Document, paragraph, table
from .engine.elements import Image, LinearLayout, PageBreak, Paragraph, Table, Text
from .engine.geometry import Margins, Size
from .engine.hyphenation import Hyphenator, PyphenHyphenator
from .engine.pdfcompiler import DocumentBackend, DocumentInfo, PdfBackend
from .engine.style import Alignment, Color, LineStyle, Style
from .utils.rich_logger import setup_logging
from .utils.units import A4, LETTER, cm, inch, landscape, mm

__author__ = "leafpress contributors"

__all__ = [
    # Version
    "__version__",
    "__version_info__",

    # Document API
    "Document",
    "DocumentInfo",
    "paragraph",
    "table",

    # Elements
    "Text",
    "Paragraph",
    "Table",
    "Image",
    "LinearLayout",
    "PageBreak",

    # Styles and geometry
    "Style",
    "Color",
    "LineStyle",
    "Alignment",
    "Margins",
    "Size",
    "A4",
    "LETTER",
    "landscape",
    "mm",
    "cm",
    "inch",

    # Capabilities
    "Hyphenator",
    "PyphenHyphenator",
    "DocumentBackend",
    "PdfBackend",

    # Logging
    "setup_logging",

    # Exceptions
    "DocumentError",
    "ConstructionError",
    "FeatureDisabled",
    "InvalidFontData",
    "LayoutError",
    "OutOfSpace",
    "HyphenationUnavailable",
    "BackendError",
]
