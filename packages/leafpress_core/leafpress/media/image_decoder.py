"""
Raster image decoding.

Images are decoded once when the element is built: the layout engine only
needs the pixel size, and the PDF backend embeds the decoded image.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

try:  # pragma: no cover - optional dependency
    from PIL import Image as PILImage
    from PIL import UnidentifiedImageError
except ImportError:  # pragma: no cover - optional dependency
    PILImage = None  # type: ignore
    UnidentifiedImageError = OSError  # type: ignore

from ..exceptions import ConstructionError, FeatureDisabled

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """Pixel size and mode of a decoded raster; ``image`` is the decoder's own object."""

    width: int
    height: int
    mode: str
    image: Any = field(default=None, compare=False, hash=False, repr=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConstructionError(
                f"Image must have a positive size, got {self.width}x{self.height}",
                element_type="Image",
                field_name="size",
                field_value=(self.width, self.height),
            )


class ImageDecoder(ABC):
    @abstractmethod
    def decode(self, data: bytes) -> DecodedImage:
        """Decode image bytes; raises :class:`ConstructionError` for unreadable data."""

    def decode_file(self, path: Union[str, Path]) -> DecodedImage:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ConstructionError(f"Could not read image {path}", element_type="Image",
                                    field_name="path", field_value=str(path), cause=exc) from exc
        return self.decode(data)


class PillowImageDecoder(ImageDecoder):
    """Decodes PNG, JPEG, GIF and the other formats Pillow understands."""

    def __init__(self):
        if PILImage is None:
            raise FeatureDisabled("Pillow is not installed", feature="images", element_type="Image")

    def decode(self, data: bytes) -> DecodedImage:
        if not data:
            raise ConstructionError("Image data is empty", element_type="Image", field_name="data")
        try:
            with PILImage.open(io.BytesIO(data)) as img:
                img.load()
                # Flatten palettes and odd modes to something reportlab embeds directly
                if img.mode not in ("RGB", "RGBA", "L", "CMYK"):
                    converted = img.convert("RGBA" if "transparency" in img.info or img.mode in ("LA", "PA") else "RGB")
                else:
                    converted = img.copy()
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise ConstructionError("Could not decode image data", element_type="Image", field_name="data",
                                    cause=exc) from exc

        width, height = converted.size
        logger.debug("Decoded %dx%d %s image", width, height, converted.mode)
        return DecodedImage(width=width, height=height, mode=converted.mode, image=converted)


def default_image_decoder() -> Optional[ImageDecoder]:
    """The Pillow decoder, or ``None`` when Pillow is not available."""
    if PILImage is None:
        logger.warning("Pillow is not installed; image elements are disabled")
        return None
    return PillowImageDecoder()
