"""Page engine for creating pages with margins applied.

This engine handles:
- Page size and margins of every page
- Page numbering
- The optional per-page header element
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..exceptions import ConstructionError
from .area import Area, Page
from .geometry import Margins, Size

if TYPE_CHECKING:  # pragma: no cover
    from .pdfcompiler.backend import DocumentBackend

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PageConfig:
    """Configuration for page creation."""
    page_size: Size
    margins: Margins
    header: Optional[Callable[[int], Any]] = None  # page number -> element drawn at the top
    header_spacing: float = 0.0

    def __post_init__(self):
        if not isinstance(self.page_size, Size):
            self.page_size = Size.from_tuple(self.page_size)
        if self.content_width <= 0 or self.content_height <= 0:
            raise ConstructionError(
                "Margins leave no room for content",
                field_name="margins",
                field_value=self.margins,
            )
        if self.header_spacing < 0:
            raise ConstructionError("Header spacing must not be negative", field_name="header_spacing",
                                    field_value=self.header_spacing)

    @property
    def content_width(self) -> float:
        """Width between the left and right margins."""
        return self.page_size.width - self.margins.horizontal

    @property
    def content_height(self) -> float:
        """Height between the top and bottom margins."""
        return self.page_size.height - self.margins.vertical


class PageEngine:
    """Supplies fresh page areas on demand."""

    def __init__(self, config: PageConfig, backend: "DocumentBackend"):
        """Initialize page engine.

        Args:
            config: Page configuration
            backend: Backend receiving the finalized pages
        """
        self.config = config
        self.backend = backend
        self.page_count = 0

    def new_area(self) -> Area:
        """Create the next page and return its body area (margins applied)."""
        self.page_count += 1
        config = self.config
        page = Page(
            number=self.page_count,
            size=config.page_size,
            backend=self.backend,
            content_height=config.content_height,
        )
        logger.debug("Requested page %d", page.number)
        return Area(page, config.margins.left, config.margins.top, config.content_width, config.content_height)

    def reset(self) -> None:
        """Reset page engine for new document."""
        self.page_count = 0
