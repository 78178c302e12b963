"""

LayoutEngine - pagination driver.

Renders a root element page by page: each page is finalized as soon as the
element stops on it, and the returned continuation is resumed on a fresh
page from the :class:`PageEngine` until nothing is left.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..exceptions import LayoutError
from .area import Area
from .element_renderer import ElementRenderer
from .page_engine import PageEngine
from .style import StyleContext

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Drives an :class:`ElementRenderer` across the pages of a :class:`PageEngine`."""

    def __init__(self, renderer: ElementRenderer, pages: PageEngine):
        self.renderer = renderer
        self.pages = pages

    def paginate(self, element: Any, style: StyleContext) -> int:
        """

        Lay ``element`` out over as many pages as it needs.

        Args:
            element: Root element
            style: Style context of the document

        Returns:
            Number of pages produced

        Raises:
            LayoutError: When an unsplittable part does not fit an empty page
                (``OutOfSpace``) or rendering stops making progress; the
                page number is attached to the error

        """
        cursor: Optional[Any] = None
        while True:
            area = self.next_area(style)
            depth = style.depth
            try:
                result = self.renderer.render(element, area, style, cursor)
            except LayoutError as exc:
                if exc.page_number is None:
                    exc.page_number = area.page.number
                logger.error("Layout failed on page %d: %s", area.page.number, exc.message)
                raise

            if style.depth != depth:
                raise LayoutError("Style context changed during rendering", page_number=area.page.number)
            if result.height > area.height + 1e-6:
                raise LayoutError(
                    f"Rendered height {result.height:.2f}pt exceeds page area {area.height:.2f}pt",
                    page_number=area.page.number,
                )

            area.finalize()
            if result.continuation is None:
                break
            if result.continuation == cursor and result.height == 0 and area.is_fresh:
                raise LayoutError("Rendering made no progress on an empty page", page_number=area.page.number,
                                  element_type=type(element).__name__)
            cursor = result.continuation

        logger.debug("Layout finished with %d pages", self.pages.page_count)
        return self.pages.page_count

    def next_area(self, style: StyleContext) -> Area:
        """Request a page and draw its header, if any."""
        area = self.pages.new_area()
        header = self.pages.config.header
        if header is None:
            return area

        element = header(area.page.number)
        try:
            result = self.renderer.render(element, area, style)
        except LayoutError as exc:
            exc.page_number = area.page.number
            raise
        if result.continuation is not None:
            raise LayoutError("Page header does not fit on one page", page_number=area.page.number,
                              element_type=type(element).__name__)
        # render already moved the cursor past the header
        area.advance(min(self.pages.config.header_spacing, area.remaining_height))
        area.page.content_height = area.remaining_height
        return area
