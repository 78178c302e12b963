"""Resource management for PDF (fonts, images)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Tuple

from reportlab.lib.utils import ImageReader  # type: ignore
from reportlab.pdfbase import pdfmetrics  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from ...media.image_decoder import DecodedImage
    from ..text_metrics import FontHandle

logger = logging.getLogger(__name__)


class PdfFontRegistry:
    """

    Fonts used by one document.

    TrueType fonts are registered with reportlab the first time a page uses
    them; reportlab then embeds each registered font once, however many pages
    draw with it.

    """

    def __init__(self):
        self._fonts: Dict[str, "FontHandle"] = {}

    def register_font(self, handle: "FontHandle") -> str:
        """Make ``handle`` available to the canvas and return its font name.

        Args:
            handle: Font resolved by the layout engine

        Returns:
            Name to pass to ``canvas.setFont``
        """
        if handle.name in self._fonts:
            return handle.name
        if not handle.builtin and handle.name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(handle.font)
            logger.debug("Registered TrueType font %s", handle.name)
        self._fonts[handle.name] = handle
        return handle.name

    def __len__(self) -> int:
        return len(self._fonts)


class PdfImageRegistry:
    """Registry mapping decoded images to reportlab image readers, one reader per image."""

    def __init__(self):
        self._images: Dict[int, Tuple["DecodedImage", ImageReader]] = {}

    def register_image(self, image: "DecodedImage") -> ImageReader:
        """Return the reader for ``image``, creating it on first use.

        Args:
            image: Decoded image

        Returns:
            ImageReader wrapping the decoded pixels
        """
        key = id(image)
        entry = self._images.get(key)
        if entry is not None and entry[0] is image:
            return entry[1]
        reader = ImageReader(image.image)
        self._images[key] = (image, reader)
        logger.debug("Registered %dx%d image", image.width, image.height)
        return reader

    def __len__(self) -> int:
        return len(self._images)
