"""
Layout engine: styles, measurement, line wrapping and pagination.
"""

from .area import Area, Page
from .element_renderer import ElementRenderer
from .elements import (
    Image,
    LinearLayout,
    PageBreak,
    Paragraph,
    RenderResult,
    Table,
    Text,
)
from .geometry import Margins, Point, Rect, Size
from .layout_engine import LayoutEngine
from .line_breaker import LineBreaker
from .page_engine import PageConfig, PageEngine
from .style import Alignment, Color, LineStyle, Style, StyleContext
from .text_metrics import TextMetricsEngine

__all__ = [
    "Alignment",
    "Area",
    "Color",
    "ElementRenderer",
    "Image",
    "LayoutEngine",
    "LineBreaker",
    "LineStyle",
    "LinearLayout",
    "Margins",
    "Page",
    "PageBreak",
    "PageConfig",
    "PageEngine",
    "Paragraph",
    "Point",
    "Rect",
    "RenderResult",
    "Size",
    "Style",
    "StyleContext",
    "Table",
    "Text",
    "TextMetricsEngine",
]
