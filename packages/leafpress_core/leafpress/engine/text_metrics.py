"""

Font metrics provider - text widths and vertical metrics.

Uses ReportLab for font metrics:
- built-in PDF fonts (Helvetica, Times, Courier) through their AFM data
- TrueType fonts parsed from bytes with ``TTFont``

All values are in points.

"""

from __future__ import annotations

import hashlib
import io
import logging
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFError, TTFont  # type: ignore

from ..exceptions import ConstructionError, InvalidFontData

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FontHandle:
    """Reference to a loaded font; identity is the ReportLab font name."""

    name: str
    builtin: bool
    font: Any = field(default=None, compare=False, hash=False, repr=False)
    digest: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Metrics:
    """Vertical metrics of a font at a given size (descent is negative)."""

    line_height: float
    glyph_height: float
    ascent: float
    descent: float

    def max(self, other: "Metrics") -> "Metrics":
        return Metrics(
            line_height=max(self.line_height, other.line_height),
            glyph_height=max(self.glyph_height, other.glyph_height),
            ascent=max(self.ascent, other.ascent),
            descent=min(self.descent, other.descent),
        )

    def scaled(self, line_spacing: float) -> "Metrics":
        return Metrics(
            line_height=self.line_height * line_spacing,
            glyph_height=self.glyph_height,
            ascent=self.ascent,
            descent=self.descent,
        )


@dataclass(frozen=True, slots=True)
class GlyphCoverage:
    """Which distinct characters of a text a font (or fallback chain) can draw."""

    total: int
    missing: Tuple[str, ...] = ()

    @property
    def covered(self) -> int:
        return self.total - len(self.missing)

    @property
    def is_complete(self) -> bool:
        return not self.missing

    @property
    def coverage_percent(self) -> float:
        if self.total == 0:
            return 100.0
        return self.covered * 100.0 / self.total


@dataclass(frozen=True, slots=True)
class TextMeasure:
    width: float
    metrics: Metrics


class FontMetricsProvider(ABC):
    """Converts text and font size into advance widths and vertical metrics."""

    @abstractmethod
    def load(self, data: bytes, name: Optional[str] = None) -> FontHandle:
        """Parse font bytes; raises :class:`InvalidFontData` when they are not a usable font."""

    @abstractmethod
    def builtin(self, name: str) -> FontHandle:
        """Return a handle for one of the standard PDF fonts."""

    @abstractmethod
    def width(self, handle: FontHandle, text: str, size: float) -> float:
        """Advance width of ``text``."""

    @abstractmethod
    def metrics(self, handle: FontHandle, size: float) -> Metrics:
        """Vertical metrics at ``size``."""

    def has_glyph(self, handle: FontHandle, char: str) -> bool:
        """Whether ``handle`` draws ``char`` with a real glyph rather than .notdef."""
        return True

    def measure(self, handle: FontHandle, text: str, size: float) -> TextMeasure:
        return TextMeasure(width=self.width(handle, text, size), metrics=self.metrics(handle, size))


class TextMetricsEngine(FontMetricsProvider):
    """

    ReportLab-backed metrics provider.

    Vertical metrics are cached per (font, size) and loaded fonts per content
    digest, so the same font bytes are parsed once.

    """

    def __init__(self):
        self._metrics_cache: Dict[Tuple[str, float], Metrics] = {}
        self._loaded: Dict[str, FontHandle] = {}

    def load(self, data: bytes, name: Optional[str] = None) -> FontHandle:
        if not data:
            raise InvalidFontData("Font data is empty", field_name="data")
        digest = hashlib.sha1(data).hexdigest()
        cached = self._loaded.get(digest)
        if cached is not None:
            return cached

        font_name = f"{name or 'Font'}-{digest[:10]}"
        try:
            font = TTFont(font_name, io.BytesIO(data))
        except (TTFError, struct.error, ValueError, IndexError, KeyError) as exc:
            raise InvalidFontData(f"Could not parse font data for {name or 'font'}", field_name="data",
                                  cause=exc) from exc

        handle = FontHandle(name=font_name, builtin=False, font=font, digest=digest)
        self._loaded[digest] = handle
        logger.debug("Loaded TrueType font %s (%d bytes)", font_name, len(data))
        return handle

    def builtin(self, name: str) -> FontHandle:
        if name not in pdfmetrics.standardFonts:
            raise ConstructionError(f"{name} is not a standard PDF font", field_name="font",
                                    field_value=name)
        return FontHandle(name=name, builtin=True, font=pdfmetrics.getFont(name))

    def width(self, handle: FontHandle, text: str, size: float) -> float:
        if not text:
            return 0.0
        if handle.builtin:
            return pdfmetrics.stringWidth(text, handle.name, size)
        return handle.font.stringWidth(text, size)

    def has_glyph(self, handle: FontHandle, char: str) -> bool:
        if handle.builtin:
            # The standard fonts are drawn with WinAnsiEncoding
            try:
                char.encode("cp1252")
            except UnicodeEncodeError:
                return False
            return True
        return ord(char) in handle.font.face.charToGlyph

    def metrics(self, handle: FontHandle, size: float) -> Metrics:
        key = (handle.name, size)
        cached = self._metrics_cache.get(key)
        if cached is not None:
            return cached

        if handle.builtin:
            ascent, descent = pdfmetrics.getAscentDescent(handle.name, size)
        else:
            face = handle.font.face
            ascent = face.ascent * size / 1000.0
            descent = face.descent * size / 1000.0

        glyph_height = ascent - descent
        metrics = Metrics(line_height=glyph_height, glyph_height=glyph_height, ascent=ascent, descent=descent)
        self._metrics_cache[key] = metrics
        return metrics
