"""
Units and page sizes.

All layout values in leafpress are PDF points (1/72 inch). The unit factors
and paper sizes are the ones reportlab uses, so values can be passed straight
to the backend.
"""

from typing import Tuple

from reportlab.lib.pagesizes import A3, A4, A5, LEGAL, LETTER, landscape  # type: ignore
from reportlab.lib.units import cm, inch, mm  # type: ignore

PT_PER_INCH = 72.0

__all__ = [
    "A3",
    "A4",
    "A5",
    "LEGAL",
    "LETTER",
    "landscape",
    "cm",
    "inch",
    "mm",
    "pixels_to_points",
    "points_to_mm",
    "mm_to_points",
    "page_size",
]


def mm_to_points(value: float) -> float:
    """Convert millimeters to points."""
    return float(value) * mm


def points_to_mm(value: float) -> float:
    """Convert points to millimeters."""
    return float(value) / mm


def pixels_to_points(pixels: float, dpi: float) -> float:
    """
    Convert a pixel length to points at the given resolution.

    Args:
        pixels: Length in pixels
        dpi: Dots per inch of the raster

    Returns:
        Length in points
    """
    if dpi <= 0:
        raise ValueError("dpi must be positive")
    return float(pixels) * PT_PER_INCH / float(dpi)


def page_size(name: str) -> Tuple[float, float]:
    """Look up a paper size by name ("a4", "letter", ...)."""
    sizes = {"a3": A3, "a4": A4, "a5": A5, "letter": LETTER, "legal": LEGAL}
    try:
        return sizes[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown page size: {name}") from None
