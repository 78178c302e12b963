"""
Styles and the scoped style context.

A :class:`Style` is a partial set of formatting attributes. Styles are merged
parent-first: every attribute set on the child overrides the parent, while the
bold and italic effects are sticky. A :class:`StyleContext` is an immutable
stack of merged styles; pushing a delta returns a new context and leaves the
caller's context untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ..exceptions import ConstructionError

if TYPE_CHECKING:  # pragma: no cover
    from .text_metrics import FontHandle, Metrics
    from .utils.font_registry import FontCache

DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_SPACING = 1.0


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"

    @classmethod
    def parse(cls, value: Union[str, "Alignment"]) -> "Alignment":
        """Normalize alignment names ("start", "middle", "justified", ...)."""
        if isinstance(value, Alignment):
            return value
        token = str(value).strip().lower()
        if token in ("left", "start", "l"):
            return cls.LEFT
        if token in ("center", "centre", "middle", "c"):
            return cls.CENTER
        if token in ("right", "end", "r"):
            return cls.RIGHT
        if token in ("justify", "justified", "j", "both"):
            return cls.JUSTIFY
        raise ConstructionError(f"Unknown alignment: {value!r}", field_name="alignment", field_value=value)


@dataclass(frozen=True, slots=True)
class Color:
    """A color in RGB, CMYK or greyscale; all components range from 0 to 255."""

    space: str
    components: Tuple[int, ...]

    def __post_init__(self):
        expected = {"rgb": 3, "cmyk": 4, "grey": 1}
        if self.space not in expected:
            raise ConstructionError(f"Unknown color space: {self.space}", field_name="color")
        if len(self.components) != expected[self.space]:
            raise ConstructionError(
                f"{self.space} color needs {expected[self.space]} components, got {len(self.components)}",
                field_name="color",
                field_value=self.components,
            )
        if any(not 0 <= c <= 255 for c in self.components):
            raise ConstructionError("Color components must be within 0..255", field_name="color",
                                    field_value=self.components)

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls("rgb", (r, g, b))

    @classmethod
    def cmyk(cls, c: int, m: int, y: int, k: int) -> "Color":
        return cls("cmyk", (c, m, y, k))

    @classmethod
    def greyscale(cls, value: int) -> "Color":
        return cls("grey", (value,))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        token = value.lstrip("#")
        if len(token) != 6:
            raise ConstructionError(f"Invalid hex color: {value!r}", field_name="color", field_value=value)
        try:
            return cls.rgb(int(token[0:2], 16), int(token[2:4], 16), int(token[4:6], 16))
        except ValueError as exc:
            raise ConstructionError(f"Invalid hex color: {value!r}", field_name="color",
                                    field_value=value, cause=exc) from exc

    def normalized(self) -> Tuple[float, ...]:
        """Components scaled to 0..1."""
        return tuple(c / 255.0 for c in self.components)


BLACK = Color.rgb(0, 0, 0)


@dataclass(frozen=True, slots=True)
class Style:
    """
    Partial formatting attributes.

    Unset attributes (``None``) are inherited from the parent context; the
    effective values fall back to a 12pt font, single line spacing, black and
    left alignment.
    """

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None
    color: Optional[Color] = None
    bold: bool = False
    italic: bool = False
    alignment: Optional[Alignment] = None

    def __post_init__(self):
        if self.font_size is not None and self.font_size <= 0:
            raise ConstructionError("Font size must be positive", field_name="font_size",
                                    field_value=self.font_size)
        if self.line_spacing is not None and self.line_spacing <= 0:
            raise ConstructionError("Line spacing must be positive", field_name="line_spacing",
                                    field_value=self.line_spacing)
        if self.alignment is not None and not isinstance(self.alignment, Alignment):
            object.__setattr__(self, "alignment", Alignment.parse(self.alignment))

    def merge(self, other: Optional["Style"]) -> "Style":
        """Return this style overridden by every attribute set on ``other``."""
        if other is None:
            return self
        return Style(
            font_family=other.font_family if other.font_family is not None else self.font_family,
            font_size=other.font_size if other.font_size is not None else self.font_size,
            line_spacing=other.line_spacing if other.line_spacing is not None else self.line_spacing,
            color=other.color if other.color is not None else self.color,
            bold=self.bold or other.bold,
            italic=self.italic or other.italic,
            alignment=other.alignment if other.alignment is not None else self.alignment,
        )

    @property
    def size(self) -> float:
        return self.font_size if self.font_size is not None else DEFAULT_FONT_SIZE

    @property
    def spacing(self) -> float:
        return self.line_spacing if self.line_spacing is not None else DEFAULT_LINE_SPACING

    @property
    def fill_color(self) -> Color:
        return self.color if self.color is not None else BLACK

    @property
    def effective_alignment(self) -> Alignment:
        return self.alignment if self.alignment is not None else Alignment.LEFT

    def with_font_family(self, name: str) -> "Style":
        return replace(self, font_family=name)

    def with_font_size(self, size: float) -> "Style":
        return replace(self, font_size=size)

    def with_line_spacing(self, spacing: float) -> "Style":
        return replace(self, line_spacing=spacing)

    def with_color(self, color: Color) -> "Style":
        return replace(self, color=color)

    def with_alignment(self, alignment: Union[str, Alignment]) -> "Style":
        return replace(self, alignment=Alignment.parse(alignment))

    def bolded(self) -> "Style":
        return replace(self, bold=True)

    def italicized(self) -> "Style":
        return replace(self, italic=True)


@dataclass(frozen=True, slots=True)
class LineStyle:
    """Stroke used for table grid lines; thickness in points."""

    thickness: float = 0.3
    color: Color = BLACK

    def __post_init__(self):
        if self.thickness < 0:
            raise ConstructionError("Line thickness must not be negative", field_name="thickness",
                                    field_value=self.thickness)


class StyleContext:
    """Immutable scoped stack of styles."""

    __slots__ = ("style", "parent", "depth")

    def __init__(self, style: Optional[Style] = None, parent: Optional["StyleContext"] = None):
        self.style = style or Style()
        self.parent = parent
        self.depth = 0 if parent is None else parent.depth + 1

    def push(self, delta: Optional[Style]) -> "StyleContext":
        if delta is None:
            delta = Style()
        return StyleContext(self.style.merge(delta), parent=self)

    def pop(self) -> "StyleContext":
        if self.parent is None:
            raise ValueError("Cannot pop the root style context")
        return self.parent

    def font(self, fonts: "FontCache") -> "FontHandle":
        return fonts.resolve(self.style)

    def metrics(self, fonts: "FontCache") -> "Metrics":
        """Vertical metrics of the effective font, line height scaled by the line spacing."""
        return fonts.line_metrics(self.style)

    def line_height(self, fonts: "FontCache") -> float:
        return self.metrics(fonts).line_height

    def text_width(self, fonts: "FontCache", text: str) -> float:
        return fonts.text_width(self.style, text)

    def __repr__(self) -> str:
        return f"StyleContext(depth={self.depth}, style={self.style!r})"
