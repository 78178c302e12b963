"""

Document API - entry point for building and rendering PDF documents.

Usage example:
>>> from leafpress import Document, Paragraph, Style
>>>
>>> doc = Document(style=Style(font_family="Times", font_size=11))
>>> doc.push(Paragraph.of("Hello world"))
>>> doc.render_to_file("hello.pdf")

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .engine.element_renderer import ElementRenderer
from .engine.elements import Image, LinearLayout, Paragraph, Table, Text, validate_element
from .engine.geometry import Margins, Size
from .engine.hyphenation import Hyphenator, PyphenHyphenator
from .engine.layout_engine import LayoutEngine
from .engine.line_breaker import LineBreaker
from .engine.page_engine import PageConfig, PageEngine
from .engine.pdfcompiler import DocumentBackend, DocumentInfo, PdfBackend
from .engine.style import Alignment, Style, StyleContext
from .engine.text_metrics import FontMetricsProvider, GlyphCoverage, TextMetricsEngine
from .engine.utils.font_registry import FontCache, FontFamily
from .exceptions import BackendError, ConstructionError, FeatureDisabled, HyphenationUnavailable
from .media.image_decoder import ImageDecoder, default_image_decoder
from .utils.units import A4, mm

logger = logging.getLogger(__name__)

_DEFAULT = object()

DEFAULT_MARGIN = 20 * mm


class Document:
    """

    A sequence of top-level elements rendered into one PDF.

    Optional capabilities are resolved here, once: a hyphenation locale
    without a dictionary only logs a warning and words are never split, and a
    missing image decoder makes :meth:`image` raise :class:`FeatureDisabled`.

    Examples:
    >>> doc = Document(margins=Margins.uniform(36))
    >>> doc.push(Paragraph.of("Total", Style(bold=True)))
    >>> pdf_bytes = doc.render()

    """

    def __init__(
        self,
        page_size: Union[Size, Tuple[float, float]] = A4,
        margins: Optional[Margins] = None,
        style: Optional[Style] = None,
        hyphenation_locale: Optional[str] = None,
        hyphenator: Optional[Hyphenator] = None,
        image_decoder: Any = _DEFAULT,
        info: Optional[DocumentInfo] = None,
        header: Optional[Callable[[int], Any]] = None,
        header_spacing: float = 0.0,
        metrics: Optional[FontMetricsProvider] = None,
    ):
        """

        Creates an empty document.

        Args:
            page_size: Page size in points, e.g. ``A4`` or ``landscape(LETTER)``
            margins: Page margins (20 mm on every side by default)
            style: Document-wide style
            hyphenation_locale: Locale of the hyphenation dictionary, e.g. ``"en_US"``
            hyphenator: Hyphenator to use instead of the pyphen one
            image_decoder: Image decoder; ``None`` disables images
            info: PDF metadata
            header: Callable returning the element drawn at the top of each page
            header_spacing: Space between the header and the body
            metrics: Font metrics provider (reportlab by default)

        """
        self.page_config = PageConfig(
            page_size=page_size if isinstance(page_size, Size) else Size.from_tuple(page_size),
            margins=margins if margins is not None else Margins.uniform(DEFAULT_MARGIN),
            header=header,
            header_spacing=header_spacing,
        )
        self.metrics = metrics or TextMetricsEngine()
        self.fonts = FontCache(self.metrics)
        self.style = style or Style()
        self._check_style(self.style)

        self.hyphenation_locale = hyphenation_locale
        self.hyphenator = self._resolve_hyphenator(hyphenator, hyphenation_locale)

        self.image_decoder: Optional[ImageDecoder] = (
            default_image_decoder() if image_decoder is _DEFAULT else image_decoder
        )
        self.info = info or DocumentInfo()
        self.elements: List[Any] = []

    def __len__(self) -> int:
        return len(self.elements)

    @staticmethod
    def _resolve_hyphenator(hyphenator: Optional[Hyphenator], locale: Optional[str]) -> Optional[Hyphenator]:
        """Check the locale once; an unusable one disables hyphenation for the whole document."""
        if not locale:
            return hyphenator
        try:
            if hyphenator is None:
                return PyphenHyphenator(locale)
            hyphenator.check_locale(locale)
        except HyphenationUnavailable as exc:
            logger.warning("Hyphenation disabled: %s", exc.message)
            return None
        return hyphenator

    # Building

    def push(self, element: Any) -> "Document":
        """Append a top-level element; strings become paragraphs."""
        if isinstance(element, str):
            element = Paragraph.of(element)
        validate_element(element)
        self._check_fonts(element)
        self.elements.append(element)
        return self

    def extend(self, elements: Iterable[Any]) -> "Document":
        for element in elements:
            self.push(element)
        return self

    def add_font_family(
        self,
        name: str,
        regular: bytes,
        bold: Optional[bytes] = None,
        italic: Optional[bytes] = None,
        bold_italic: Optional[bytes] = None,
    ) -> FontFamily:
        """Register a TrueType family from bytes; styles refer to it by ``name``."""
        return self.fonts.add_font_family(name, regular, bold, italic, bold_italic)

    def load_font_family(self, directory: Union[str, Path], name: str) -> FontFamily:
        """Register ``{name}-Regular.ttf`` (and the Bold/Italic/BoldItalic files found) from ``directory``."""
        return self.fonts.load_font_family(directory, name)

    def load_system_font_family(self, name: str) -> FontFamily:
        """Register an installed family such as ``"DejaVuSans"`` from the system font directories."""
        return self.fonts.load_system_family(name)

    def set_font_fallbacks(self, *families: str) -> "Document":
        """

        Draw characters the styled font lacks with the first of ``families`` that has them.

        Examples:
        >>> doc.load_system_font_family("DejaVuSans")
        >>> doc.set_font_fallbacks("DejaVuSans")

        """
        self.fonts.set_fallback_families(families)
        return self

    def check_coverage(self, text: str, style: Optional[Style] = None) -> GlyphCoverage:
        """Report the characters of ``text`` that no font of the fallback chain can draw."""
        return self.fonts.check_coverage(self.style.merge(style), text)

    def image(self, data: bytes, dpi: float = 300.0, scale: float = 1.0,
              alignment: Union[str, Alignment] = Alignment.LEFT) -> Image:
        """Decode ``data`` and build an :class:`Image` element (not pushed)."""
        decoder = self._require_decoder()
        return Image(decoder.decode(data), dpi=dpi, scale=scale, alignment=alignment)

    def image_from_path(self, path: Union[str, Path], dpi: float = 300.0, scale: float = 1.0,
                        alignment: Union[str, Alignment] = Alignment.LEFT) -> Image:
        decoder = self._require_decoder()
        return Image(decoder.decode_file(path), dpi=dpi, scale=scale, alignment=alignment)

    def _require_decoder(self) -> ImageDecoder:
        if self.image_decoder is None:
            raise FeatureDisabled("Image support is disabled: no image decoder is available",
                                  feature="images", element_type="Image")
        return self.image_decoder

    # Validation

    def _check_style(self, style: Optional[Style]) -> None:
        if style is not None and style.font_family is not None and not self.fonts.has_family(style.font_family):
            raise ConstructionError(
                f"Unknown font family: {style.font_family}",
                field_name="font_family",
                field_value=style.font_family,
            )

    def _check_fonts(self, element: Any) -> None:
        if isinstance(element, Text):
            self._check_style(element.style)
        elif isinstance(element, Paragraph):
            self._check_style(element.style)
            for run in element.runs:
                self._check_style(run.style)
        elif isinstance(element, Table):
            self._check_style(element.style)
            for row in element.rows:
                for cell in row:
                    self._check_fonts(cell)
        elif isinstance(element, LinearLayout):
            self._check_style(element.style)
            for child in element.children:
                self._check_fonts(child)

    def _check_header(self) -> None:
        # Headers are built per page; the first one stands in for the rest
        header = self.page_config.header
        if header is None:
            return
        element = header(1)
        validate_element(element)
        self._check_fonts(element)

    # Rendering

    def render(self, backend: Optional[DocumentBackend] = None) -> bytes:
        """

        Lay out every element and serialize the pages.

        Args:
            backend: Backend receiving the pages (a new :class:`PdfBackend` by default)

        Returns:
            The finished document bytes

        Raises:
            LayoutError: When content cannot be laid out
            BackendError: When serialization fails

        """
        self._check_header()
        backend = backend if backend is not None else PdfBackend(self.info)
        line_breaker = LineBreaker(self.fonts.text_width, self.hyphenator, self.hyphenation_locale)
        renderer = ElementRenderer(self.fonts, line_breaker)
        engine = LayoutEngine(renderer, PageEngine(self.page_config, backend))

        root = LinearLayout(tuple(self.elements))
        pages = engine.paginate(root, StyleContext(self.style))
        data = backend.finish()
        logger.info("Rendered %d elements on %d pages", len(self.elements), pages)
        return data

    def render_to_file(self, path: Union[str, Path]) -> Path:
        """Render and write the PDF to ``path``."""
        path = Path(path)
        data = self.render()
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise BackendError(f"Could not write {path}", output_path=str(path), cause=exc) from exc
        return path


def paragraph(*runs: Union[str, Text], style: Optional[Style] = None) -> Paragraph:
    """Build a paragraph from strings and :class:`Text` runs."""
    return Paragraph(tuple(runs), style)


def table(rows: Sequence[Sequence[Any]], column_weights: Optional[Sequence[float]] = None, **kwargs: Any) -> Table:
    """Build a table; string cells become paragraphs."""
    converted = tuple(
        tuple(Paragraph.of(cell) if isinstance(cell, str) else cell for cell in row) for row in rows
    )
    weights = tuple(column_weights) if column_weights is not None else None
    return Table(converted, weights, **kwargs)
