"""Utility helpers: units, page sizes and logging setup."""

from .rich_logger import setup_logging
from .units import (
    A3,
    A4,
    A5,
    LEGAL,
    LETTER,
    cm,
    inch,
    landscape,
    mm,
    mm_to_points,
    page_size,
    pixels_to_points,
    points_to_mm,
)

__all__ = [
    "setup_logging",
    "A3",
    "A4",
    "A5",
    "LEGAL",
    "LETTER",
    "cm",
    "inch",
    "landscape",
    "mm",
    "mm_to_points",
    "page_size",
    "pixels_to_points",
    "points_to_mm",
]
