"""

Drawable areas and the pages they belong to.

An :class:`Area` is a rectangle on a :class:`Page` with a vertical cursor.
Positions passed to the ``draw_*`` methods are local: ``x`` from the left edge
of the area, ``y`` down from the cursor. Instructions are recorded on the page
in absolute top-left page coordinates and handed to the backend when the page
is finalized.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from ..exceptions import LayoutError, OutOfSpace
from .geometry import EPSILON, Point, Rect, Size
from .style import LineStyle, Style
from .text_metrics import FontHandle

if TYPE_CHECKING:  # pragma: no cover
    from ..media.image_decoder import DecodedImage
    from .pdfcompiler.backend import DocumentBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextRun:
    """Text already measured in ``font``; ``width`` is its advance width."""

    text: str
    font: FontHandle
    width: float
    link: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TextInstruction:
    run: TextRun
    position: Point  # left end of the baseline
    style: Style


@dataclass(frozen=True, slots=True)
class LineInstruction:
    start: Point
    end: Point
    line_style: LineStyle


@dataclass(frozen=True, slots=True)
class ImageInstruction:
    image: "DecodedImage"
    rect: Rect


DrawInstruction = Union[TextInstruction, LineInstruction, ImageInstruction]


class Page:
    """Instructions recorded for one physical page."""

    def __init__(self, number: int, size: Size, backend: "DocumentBackend", content_height: float):
        self.number = number
        self.size = size
        self.backend = backend
        # Height of the body area on a fresh page; an area this tall cannot get more room elsewhere
        self.content_height = content_height
        self.instructions: List[DrawInstruction] = []
        self.finalized = False

    def record(self, instruction: DrawInstruction) -> None:
        if self.finalized:
            raise LayoutError(f"Page {self.number} is already finalized", page_number=self.number)
        self.instructions.append(instruction)

    def finalize(self) -> None:
        if self.finalized:
            raise LayoutError(f"Page {self.number} is already finalized", page_number=self.number)
        backend = self.backend
        backend.set_page_size(self.size.width, self.size.height)
        for instruction in self.instructions:
            if isinstance(instruction, TextInstruction):
                backend.draw_text(instruction.run, instruction.position, instruction.style)
            elif isinstance(instruction, LineInstruction):
                backend.draw_line(instruction.start, instruction.end, instruction.line_style)
            else:
                backend.draw_image(instruction.image, instruction.rect)
        backend.end_page()
        self.finalized = True
        logger.debug("Finalized page %d with %d instructions", self.number, len(self.instructions))


class Area:
    """A rectangular region of a page with a forward-only cursor."""

    def __init__(self, page: Page, x: float, y: float, width: float, height: float,
                 parent: Optional["Area"] = None):
        if width < -EPSILON or height < -EPSILON:
            raise ValueError(f"Area dimensions must be non-negative, got {width}x{height}")
        self.page = page
        self.x = x
        self.y = y
        self.width = max(0.0, width)
        self.height = max(0.0, height)
        self.parent = parent
        self.cursor = 0.0

    def __repr__(self) -> str:
        return (f"Area(page={self.page.number}, x={self.x:.2f}, y={self.y:.2f}, "
                f"width={self.width:.2f}, height={self.height:.2f}, cursor={self.cursor:.2f})")

    @property
    def remaining_height(self) -> float:
        return max(0.0, self.height - self.cursor)

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def is_fresh(self) -> bool:
        """True when a new page could not offer more vertical room than this area has left."""
        return self.remaining_height >= self.page.content_height - EPSILON

    def advance(self, dy: float) -> None:
        if dy < 0:
            raise ValueError(f"Cannot move the cursor backwards (dy={dy})")
        if dy > self.remaining_height + EPSILON:
            raise OutOfSpace(
                f"Cannot advance {dy:.2f}pt, only {self.remaining_height:.2f}pt left",
                requested=dy,
                available=self.remaining_height,
                page_number=self.page.number,
            )
        self.cursor = min(self.height, self.cursor + dy)

    def carve(self, width: Optional[float] = None, height: Optional[float] = None,
              x_offset: float = 0.0) -> "Area":
        """Sub-area at the current cursor, ``x_offset`` from the left edge."""
        if x_offset < 0:
            raise ValueError("x_offset must not be negative")
        if width is None:
            width = self.width - x_offset
        if height is None:
            height = self.remaining_height
        if x_offset + width > self.width + EPSILON:
            raise OutOfSpace(
                f"Sub-area of width {width:.2f}pt at {x_offset:.2f}pt exceeds width {self.width:.2f}pt",
                requested=x_offset + width,
                available=self.width,
                page_number=self.page.number,
            )
        if height > self.remaining_height + EPSILON:
            raise OutOfSpace(
                f"Sub-area of height {height:.2f}pt exceeds remaining {self.remaining_height:.2f}pt",
                requested=height,
                available=self.remaining_height,
                page_number=self.page.number,
            )
        return Area(self.page, self.x + x_offset, self.y + self.cursor, width,
                    min(height, self.remaining_height), parent=self)

    def split_horizontally(self, weights: Sequence[float]) -> List["Area"]:
        """Columns at the cursor with widths proportional to ``weights``."""
        if not weights or any(w <= 0 for w in weights):
            raise ValueError("weights must be a non-empty sequence of positive numbers")
        total = float(sum(weights))
        areas = []
        offset = 0.0
        for weight in weights:
            width = min(self.width * weight / total, self.width - offset)
            areas.append(self.carve(width=width, x_offset=offset))
            offset += width
        return areas

    def _absolute(self, x: float, y: float) -> Point:
        return Point(self.x + x, self.y + self.cursor + y)

    def draw_text(self, run: TextRun, x: float, baseline: float, style: Style) -> None:
        self.page.record(TextInstruction(run, self._absolute(x, baseline), style))

    def draw_line(self, start: Point, end: Point, line_style: Optional[LineStyle] = None) -> None:
        self.page.record(LineInstruction(self._absolute(start.x, start.y), self._absolute(end.x, end.y),
                                         line_style or LineStyle()))

    def draw_image(self, image: "DecodedImage", rect: Rect) -> None:
        self.page.record(ImageInstruction(image, rect.translate(self.x, self.y + self.cursor)))

    def checkpoint(self) -> int:
        return len(self.page.instructions)

    def rollback(self, mark: int) -> None:
        """Drop every instruction recorded on the page after ``mark``."""
        if self.page.finalized:
            raise LayoutError("Cannot roll back a finalized page", page_number=self.page.number)
        del self.page.instructions[mark:]

    def finalize(self) -> None:
        if self.parent is not None:
            raise LayoutError("Only a page area can be finalized", page_number=self.page.number)
        self.page.finalize()
