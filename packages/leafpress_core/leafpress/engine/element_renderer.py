"""

ElementRenderer - draws one element into an area.

``render(element, area, style, cursor)`` returns a :class:`RenderResult` with
the height consumed in ``area`` and, when the element did not finish, the
continuation to pass back on the next page. Dispatch is a table keyed by the
element type.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..exceptions import LayoutError, OutOfSpace
from .area import Area, TextRun
from .elements import (
    DONE,
    PENDING,
    ColumnsCursor,
    Image,
    LayoutCursor,
    LinearLayout,
    PageBreak,
    Paragraph,
    RenderResult,
    Table,
    TableCursor,
    Text,
    TextCursor,
)
from .geometry import EPSILON, Point, Rect
from .line_breaker import Line, LineBreaker, Word, tokenize
from .style import Alignment, StyleContext
from .text_alignment import TextAlignmentEngine
from .text_metrics import Metrics
from .utils.font_registry import FontCache

logger = logging.getLogger(__name__)


class ElementRenderer:
    """

    Renders the closed element set.

    Word lists are measured once per (element, effective style) and kept for
    the lifetime of the renderer, so resuming a paragraph on a new page never
    re-measures it.

    """

    def __init__(self, fonts: FontCache, line_breaker: Optional[LineBreaker] = None):
        self.fonts = fonts
        self.line_breaker = line_breaker or LineBreaker(fonts.text_width)
        self._words: Dict[Tuple[int, Any], Tuple[Any, List[Word]]] = {}
        self._dispatch: Dict[type, Callable[..., RenderResult]] = {
            Text: self._render_text,
            Paragraph: self._render_text,
            Table: self._render_table,
            Image: self._render_image,
            LinearLayout: self._render_layout,
            PageBreak: self._render_page_break,
        }

    def render(self, element: Any, area: Area, style: StyleContext, cursor: Any = None) -> RenderResult:
        handler = self._dispatch.get(type(element))
        if handler is None:
            raise TypeError(f"Cannot render element of type {type(element).__name__}")
        available = area.remaining_height
        result = handler(element, area, style, cursor)
        if result.height > available + EPSILON:
            raise LayoutError(
                f"{type(element).__name__} reported {result.height:.2f}pt in an area with {available:.2f}pt",
                element_type=type(element).__name__,
                page_number=area.page.number,
            )
        return result

    # Text

    def words_for(self, element: Any, style: StyleContext) -> List[Word]:
        key = (id(element), style.style)
        cached = self._words.get(key)
        if cached is not None and cached[0] is element:
            return cached[1]

        if isinstance(element, Paragraph):
            runs = [(run.text, style.style.merge(run.style), run.link) for run in element.runs]
        else:
            runs = [(element.text, style.style, element.link)]
        words = tokenize(runs, self.fonts.text_width, self.fonts.segment_text)
        # The element is kept alive next to its words so the id cannot be reused
        self._words[key] = (element, words)
        return words

    def line_metrics(self, line: Line) -> Metrics:
        metrics: Optional[Metrics] = None
        for style in line.styles:
            current = self.fonts.line_metrics(style)
            metrics = current if metrics is None else metrics.max(current)
        return metrics

    def _render_text(self, element: Any, area: Area, style: StyleContext,
                     cursor: Optional[TextCursor]) -> RenderResult:
        context = style.push(element.style)
        words = self.words_for(element, context)
        alignment = context.style.effective_alignment
        consumed = 0.0

        for line in self.line_breaker.iter_lines(words, area.width, cursor):
            metrics = self.line_metrics(line)
            if metrics.line_height > area.remaining_height + EPSILON:
                if consumed == 0 and area.is_fresh:
                    raise OutOfSpace(
                        f"Line of height {metrics.line_height:.2f}pt does not fit on an empty page",
                        requested=metrics.line_height,
                        available=area.remaining_height,
                        element_type=type(element).__name__,
                    )
                return RenderResult(consumed, line.start)
            self._draw_line(line, area, metrics, alignment)
            area.advance(metrics.line_height)
            consumed += metrics.line_height

        return RenderResult(consumed)

    def _draw_line(self, line: Line, area: Area, metrics: Metrics, alignment: Alignment) -> None:
        positions = TextAlignmentEngine.word_positions(line, area.width, alignment)
        for word, x in zip(line.words, positions):
            for fragment in word.runs():
                run = TextRun(fragment.text, self.fonts.resolve(fragment.style), fragment.width, fragment.link)
                area.draw_text(run, x, metrics.ascent, fragment.style)
                x += fragment.width

    # Table

    def _render_table(self, table: Table, area: Area, style: StyleContext,
                      cursor: Optional[TableCursor]) -> RenderResult:
        context = style.push(table.style)
        widths = table.column_widths(area.width)
        start = cursor.row if cursor is not None else 0
        consumed = 0.0

        for index in range(start, len(table.rows)):
            mark = area.checkpoint()
            height = self._render_row(table, table.rows[index], area, context, widths)
            if height is None:
                area.rollback(mark)
                if consumed == 0 and area.is_fresh:
                    raise OutOfSpace(f"Table row {index} does not fit on an empty page",
                                     available=area.remaining_height, element_type="Table")
                logger.debug("Table row %d moved to the next page", index)
                return RenderResult(consumed, TableCursor(index))
            if table.grid is not None:
                self._draw_grid(table, area, widths, height, top=index == start)
            area.advance(height)
            consumed += height

        return RenderResult(consumed)

    def _render_row(self, table: Table, row: Tuple[Any, ...], area: Area, style: StyleContext,
                    widths: Tuple[float, ...]) -> Optional[float]:
        """Draw every cell of ``row``; ``None`` when one of them does not finish."""
        padding = table.padding
        if 2 * padding > area.remaining_height + EPSILON:
            return None
        row_height = 0.0
        x = 0.0
        for cell, width in zip(row, widths):
            inner = area.carve(width=width, x_offset=x)
            x += width
            inner.advance(padding)
            content = inner.carve(width=max(0.0, width - 2 * padding), x_offset=padding,
                                  height=inner.remaining_height - padding)
            try:
                result = self.render(cell, content, style)
            except OutOfSpace:
                if area.is_fresh:
                    raise
                return None
            if result.continuation is not None:
                return None
            row_height = max(row_height, result.height)
        return row_height + 2 * padding

    def _draw_grid(self, table: Table, area: Area, widths: Tuple[float, ...], height: float, top: bool) -> None:
        grid = table.grid
        if top:
            area.draw_line(Point(0.0, 0.0), Point(area.width, 0.0), grid)
        area.draw_line(Point(0.0, height), Point(area.width, height), grid)
        x = 0.0
        area.draw_line(Point(x, 0.0), Point(x, height), grid)
        for width in widths:
            x += width
            area.draw_line(Point(x, 0.0), Point(x, height), grid)

    # Image

    def _render_image(self, image: Image, area: Area, style: StyleContext, cursor: Any) -> RenderResult:
        width, height = image.width, image.height
        if width > area.width + EPSILON:
            raise OutOfSpace(f"Image of width {width:.2f}pt is wider than the area ({area.width:.2f}pt)",
                             requested=width, available=area.width, element_type="Image")
        if height > area.remaining_height + EPSILON:
            if area.is_fresh:
                raise OutOfSpace(f"Image of height {height:.2f}pt does not fit on an empty page",
                                 requested=height, available=area.remaining_height, element_type="Image")
            return RenderResult(0.0, PENDING)

        x = TextAlignmentEngine.calculate_x(area.width, width, image.alignment)
        area.draw_image(image.image, Rect(x, 0.0, width, height))
        area.advance(height)
        return RenderResult(height)

    # Layouts

    def _render_layout(self, layout: LinearLayout, area: Area, style: StyleContext, cursor: Any) -> RenderResult:
        if layout.is_horizontal:
            return self._render_columns(layout, area, style, cursor)
        return self._render_vertical(layout, area, style, cursor)

    def _render_vertical(self, layout: LinearLayout, area: Area, style: StyleContext,
                         cursor: Optional[LayoutCursor]) -> RenderResult:
        context = style.push(layout.style)
        index = cursor.child_index if cursor is not None else 0
        child_cursor = cursor.child_cursor if cursor is not None else None
        consumed = 0.0

        while index < len(layout.children):
            child_area = area.carve()
            result = self.render(layout.children[index], child_area, context, child_cursor)
            if result.height:
                area.advance(result.height)
                consumed += result.height
            if result.continuation is not None:
                return RenderResult(consumed, LayoutCursor(index, result.continuation))
            index += 1
            child_cursor = None

        return RenderResult(consumed)

    def _render_columns(self, layout: LinearLayout, area: Area, style: StyleContext,
                        cursor: Optional[ColumnsCursor]) -> RenderResult:
        if not layout.children:
            return RenderResult()
        context = style.push(layout.style)
        columns = area.split_horizontally(layout.column_weights())
        cursors = cursor.cursors if cursor is not None else (None,) * len(layout.children)

        height = 0.0
        pending = []
        for child, column, child_cursor in zip(layout.children, columns, cursors):
            if child_cursor is DONE:
                pending.append(DONE)
                continue
            result = self.render(child, column, context, child_cursor)
            height = max(height, result.height)
            pending.append(DONE if result.continuation is None else result.continuation)

        area.advance(height)
        if all(entry is DONE for entry in pending):
            return RenderResult(height)
        return RenderResult(height, ColumnsCursor(tuple(pending)))

    def _render_page_break(self, element: PageBreak, area: Area, style: StyleContext, cursor: Any) -> RenderResult:
        if cursor is PENDING:
            return RenderResult()
        return RenderResult(0.0, PENDING)
