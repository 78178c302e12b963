"""
Document elements and render continuations.

The element set is closed: :class:`Text`, :class:`Paragraph`, :class:`Table`,
:class:`Image`, :class:`LinearLayout` and :class:`PageBreak`. Elements are
immutable; the state of a partially rendered element lives in the
continuation value returned by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from ..exceptions import ConstructionError
from ..media.image_decoder import DecodedImage
from ..utils.units import pixels_to_points
from .style import Alignment, LineStyle, Style

DEFAULT_DPI = 300.0

VERTICAL = "vertical"
HORIZONTAL = "horizontal"


@dataclass(frozen=True, slots=True)
class Text:
    """A string drawn in one style, optionally linking to ``link``."""

    text: str
    style: Optional[Style] = None
    link: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Ordered text runs wrapped together."""

    runs: Tuple[Text, ...] = ()
    style: Optional[Style] = None

    def __post_init__(self):
        runs = tuple(Text(run) if isinstance(run, str) else run for run in self.runs)
        for run in runs:
            if not isinstance(run, Text):
                raise ConstructionError("Paragraph runs must be Text elements", element_type="Paragraph",
                                        field_name="runs", field_value=type(run).__name__)
        object.__setattr__(self, "runs", runs)

    @classmethod
    def of(cls, text: str, style: Optional[Style] = None) -> "Paragraph":
        return cls((Text(text),), style)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class Table:
    """

    Rows of cells laid out in weighted columns.

    Rows are atomic: a row is either drawn completely on a page or moved to
    the next one.

    """

    rows: Tuple[Tuple[Any, ...], ...]
    column_weights: Optional[Tuple[float, ...]] = None
    grid: Optional[LineStyle] = None
    padding: float = 0.0
    style: Optional[Style] = None

    def __post_init__(self):
        rows = tuple(tuple(row) for row in self.rows)
        if not rows or not rows[0]:
            raise ConstructionError("Table needs at least one row and one column", element_type="Table",
                                    field_name="rows")
        columns = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != columns:
                raise ConstructionError(
                    f"Row {index} has {len(row)} cells, expected {columns}",
                    element_type="Table",
                    field_name="rows",
                    field_value=index,
                )
        object.__setattr__(self, "rows", rows)

        weights = self.column_weights
        if weights is None:
            weights = (1.0,) * columns
        weights = tuple(float(w) for w in weights)
        if len(weights) != columns:
            raise ConstructionError(f"Expected {columns} column weights, got {len(weights)}",
                                    element_type="Table", field_name="column_weights", field_value=weights)
        if any(w <= 0 for w in weights):
            raise ConstructionError("Column weights must be positive", element_type="Table",
                                    field_name="column_weights", field_value=weights)
        object.__setattr__(self, "column_weights", weights)

        if self.padding < 0:
            raise ConstructionError("Cell padding must not be negative", element_type="Table",
                                    field_name="padding", field_value=self.padding)

    @property
    def column_count(self) -> int:
        return len(self.rows[0])

    def column_widths(self, total_width: float) -> Tuple[float, ...]:
        weight_sum = sum(self.column_weights)
        return tuple(total_width * w / weight_sum for w in self.column_weights)


@dataclass(frozen=True, slots=True)
class Image:
    """A decoded raster placed at ``dpi`` and scaled by ``scale``."""

    image: DecodedImage
    dpi: float = DEFAULT_DPI
    scale: float = 1.0
    alignment: Alignment = Alignment.LEFT

    def __post_init__(self):
        if not isinstance(self.image, DecodedImage):
            raise ConstructionError("Image needs a decoded image", element_type="Image", field_name="image")
        if self.dpi <= 0:
            raise ConstructionError("dpi must be positive", element_type="Image", field_name="dpi",
                                    field_value=self.dpi)
        if self.scale <= 0:
            raise ConstructionError("scale must be positive", element_type="Image", field_name="scale",
                                    field_value=self.scale)
        object.__setattr__(self, "alignment", Alignment.parse(self.alignment))

    @property
    def width(self) -> float:
        return pixels_to_points(self.image.width, self.dpi) * self.scale

    @property
    def height(self) -> float:
        return pixels_to_points(self.image.height, self.dpi) * self.scale


@dataclass(frozen=True, slots=True)
class LinearLayout:
    """

    Children stacked vertically, or side by side in weighted columns when
    ``direction`` is horizontal.

    """

    children: Tuple[Any, ...] = ()
    direction: str = VERTICAL
    weights: Optional[Tuple[float, ...]] = None
    style: Optional[Style] = None

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        if self.direction not in (VERTICAL, HORIZONTAL):
            raise ConstructionError(f"Unknown layout direction: {self.direction}", element_type="LinearLayout",
                                    field_name="direction", field_value=self.direction)
        if self.weights is not None:
            if self.direction != HORIZONTAL:
                raise ConstructionError("Weights only apply to horizontal layouts", element_type="LinearLayout",
                                        field_name="weights")
            weights = tuple(float(w) for w in self.weights)
            if len(weights) != len(self.children) or any(w <= 0 for w in weights):
                raise ConstructionError("Expected one positive weight per child", element_type="LinearLayout",
                                        field_name="weights", field_value=weights)
            object.__setattr__(self, "weights", weights)

    @classmethod
    def vertical(cls, *children: Any, style: Optional[Style] = None) -> "LinearLayout":
        return cls(children, VERTICAL, None, style)

    @classmethod
    def horizontal(cls, *children: Any, weights: Optional[Sequence[float]] = None,
                   style: Optional[Style] = None) -> "LinearLayout":
        return cls(children, HORIZONTAL, tuple(weights) if weights is not None else None, style)

    @property
    def is_horizontal(self) -> bool:
        return self.direction == HORIZONTAL

    def column_weights(self) -> Tuple[float, ...]:
        return self.weights if self.weights is not None else (1.0,) * len(self.children)


@dataclass(frozen=True, slots=True)
class PageBreak:
    """Forces the following content onto a new page."""


Element = Union[Text, Paragraph, Table, Image, LinearLayout, PageBreak]
ELEMENT_TYPES = (Text, Paragraph, Table, Image, LinearLayout, PageBreak)


# Continuations


class _Marker:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name

    def __reduce__(self):
        return self.name


PENDING = _Marker("PENDING")
DONE = _Marker("DONE")


@dataclass(frozen=True, slots=True)
class TextCursor:
    """Position of the first word (and character inside it) not drawn yet."""

    word_index: int = 0
    char_offset: int = 0


@dataclass(frozen=True, slots=True)
class TableCursor:
    row: int


@dataclass(frozen=True, slots=True)
class LayoutCursor:
    child_index: int
    child_cursor: Any = None


@dataclass(frozen=True, slots=True)
class ColumnsCursor:
    """One entry per column: ``None`` to start, ``DONE`` when finished, else the column's continuation."""

    cursors: Tuple[Any, ...]


Continuation = Union[TextCursor, TableCursor, LayoutCursor, ColumnsCursor, _Marker]


@dataclass(frozen=True, slots=True)
class RenderResult:
    height: float = 0.0
    continuation: Optional[Continuation] = None

    @property
    def finished(self) -> bool:
        return self.continuation is None


def validate_element(element: Any) -> None:
    """Reject anything outside the closed element set, recursing into containers."""
    if not isinstance(element, ELEMENT_TYPES):
        raise ConstructionError(f"Unsupported element type: {type(element).__name__}",
                                field_name="element", field_value=type(element).__name__)
    if isinstance(element, Table):
        for row in element.rows:
            for cell in row:
                validate_element(cell)
    elif isinstance(element, LinearLayout):
        for child in element.children:
            validate_element(child)
