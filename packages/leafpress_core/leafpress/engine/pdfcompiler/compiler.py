"""PDF backend - writes finalized pages with a reportlab canvas."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from reportlab.lib.pagesizes import A4  # type: ignore
from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfgen import canvas  # type: ignore

from ...exceptions import BackendError
from ...version import __version__
from .backend import DocumentBackend
from .resources import PdfFontRegistry, PdfImageRegistry
from .utils import apply_fill_color, apply_stroke_color, link_rect, to_pdf_y

if TYPE_CHECKING:  # pragma: no cover
    from ...media.image_decoder import DecodedImage
    from ..area import TextRun
    from ..geometry import Point, Rect
    from ..style import LineStyle, Style

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentInfo:
    """Metadata written to the PDF info dictionary."""
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: str = f"leafpress {__version__}"


class PdfBackend(DocumentBackend):
    """

    Backend producing PDF bytes through ``reportlab.pdfgen.canvas``.

    Fonts and images are registered lazily in per-document registries so each
    resource is embedded once. Any reportlab failure surfaces as
    :class:`BackendError`.

    """

    def __init__(self, info: Optional[DocumentInfo] = None, compress: bool = True):
        self.info = info or DocumentInfo()
        self.font_registry = PdfFontRegistry()
        self.image_registry = PdfImageRegistry()
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4, pageCompression=1 if compress else 0)
        self._page_height = A4[1]
        self._open_page = False
        self.page_count = 0
        self.finished = False
        self._apply_info()

    def _apply_info(self) -> None:
        c = self._canvas
        if self.info.title:
            c.setTitle(self.info.title)
        if self.info.author:
            c.setAuthor(self.info.author)
        if self.info.subject:
            c.setSubject(self.info.subject)
        if self.info.creator:
            c.setCreator(self.info.creator)

    def _check_open(self) -> None:
        if self.finished:
            raise BackendError("Document is already finished")
        if not self._open_page:
            raise BackendError("No page is open; call set_page_size first")

    def set_page_size(self, width: float, height: float) -> None:
        if self.finished:
            raise BackendError("Document is already finished")
        if self._open_page:
            raise BackendError("Previous page was not ended")
        try:
            self._canvas.setPageSize((width, height))
        except Exception as exc:
            raise BackendError("Could not set page size", cause=exc) from exc
        self._page_height = height
        self._open_page = True

    def draw_text(self, run: "TextRun", position: "Point", style: "Style") -> None:
        self._check_open()
        if not run.text:
            return
        c = self._canvas
        size = style.size
        baseline = to_pdf_y(self._page_height, position.y)
        try:
            font_name = self.font_registry.register_font(run.font)
            c.setFont(font_name, size)
            apply_fill_color(c, style.fill_color)
            c.drawString(position.x, baseline, run.text)
            if run.link:
                ascent, descent = pdfmetrics.getAscentDescent(font_name, size)
                c.linkURL(run.link, link_rect(position.x, baseline, run.width, ascent, descent),
                          relative=0, thickness=0)
        except BackendError:
            raise
        except Exception as exc:
            raise BackendError(f"Could not draw text {run.text!r}", cause=exc) from exc

    def draw_line(self, start: "Point", end: "Point", line_style: "LineStyle") -> None:
        self._check_open()
        c = self._canvas
        try:
            c.saveState()
            c.setLineWidth(line_style.thickness)
            apply_stroke_color(c, line_style.color)
            c.line(start.x, to_pdf_y(self._page_height, start.y), end.x, to_pdf_y(self._page_height, end.y))
            c.restoreState()
        except Exception as exc:
            raise BackendError("Could not draw line", cause=exc) from exc

    def draw_image(self, image: "DecodedImage", rect: "Rect") -> None:
        self._check_open()
        try:
            reader = self.image_registry.register_image(image)
            self._canvas.drawImage(reader, rect.x, to_pdf_y(self._page_height, rect.bottom),
                                   width=rect.width, height=rect.height, mask="auto")
        except Exception as exc:
            raise BackendError("Could not draw image", cause=exc) from exc

    def end_page(self) -> None:
        self._check_open()
        try:
            self._canvas.showPage()
        except Exception as exc:
            raise BackendError("Could not close page", cause=exc) from exc
        self._open_page = False
        self.page_count += 1

    def finish(self) -> bytes:
        if self.finished:
            raise BackendError("Document is already finished")
        if self._open_page:
            raise BackendError("Last page was not ended")
        try:
            self._canvas.save()
        except Exception as exc:
            raise BackendError("Could not serialize PDF", cause=exc) from exc
        self.finished = True
        data = self._buffer.getvalue()
        logger.debug("Serialized %d pages (%d bytes, %d fonts, %d images)", self.page_count, len(data),
                     len(self.font_registry), len(self.image_registry))
        return data
