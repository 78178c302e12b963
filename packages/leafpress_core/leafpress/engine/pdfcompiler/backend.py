"""Interface between the layout engine and a document writer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ...media.image_decoder import DecodedImage
    from ..area import TextRun
    from ..geometry import Point, Rect
    from ..style import LineStyle, Style


class DocumentBackend(ABC):
    """

    Receives the drawing instructions of finalized pages.

    Coordinates are absolute page coordinates in points with the origin in the
    top left corner. Every page starts with ``set_page_size`` and ends with
    ``end_page``.

    """

    @abstractmethod
    def set_page_size(self, width: float, height: float) -> None:
        """Start a page of the given size."""

    @abstractmethod
    def draw_text(self, run: "TextRun", position: "Point", style: "Style") -> None:
        """Draw ``run`` with the left end of its baseline at ``position``."""

    @abstractmethod
    def draw_line(self, start: "Point", end: "Point", line_style: "LineStyle") -> None:
        """Stroke a straight line."""

    @abstractmethod
    def draw_image(self, image: "DecodedImage", rect: "Rect") -> None:
        """Draw ``image`` scaled into ``rect``."""

    @abstractmethod
    def end_page(self) -> None:
        """Close the current page."""

    @abstractmethod
    def finish(self) -> bytes:
        """Serialize all pages and return the document bytes."""
