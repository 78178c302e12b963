"""Utility functions for PDF generation."""

from typing import Tuple

from ..style import Color


def to_pdf_y(page_height: float, y: float) -> float:
    """Convert a top-down page coordinate to PDF user space (origin bottom left)."""
    return page_height - y


def apply_fill_color(canvas, color: Color) -> None:
    """Set the canvas fill color from a leafpress color.

    Args:
        canvas: reportlab canvas
        color: Color in RGB, CMYK or greyscale
    """
    values = color.normalized()
    if color.space == "cmyk":
        canvas.setFillColorCMYK(*values)
    elif color.space == "grey":
        canvas.setFillGray(values[0])
    else:
        canvas.setFillColorRGB(*values)


def apply_stroke_color(canvas, color: Color) -> None:
    """Set the canvas stroke color from a leafpress color."""
    values = color.normalized()
    if color.space == "cmyk":
        canvas.setStrokeColorCMYK(*values)
    elif color.space == "grey":
        canvas.setStrokeGray(values[0])
    else:
        canvas.setStrokeColorRGB(*values)


def link_rect(x: float, baseline: float, width: float, ascent: float, descent: float) -> Tuple[float, float, float, float]:
    """Annotation rectangle of a text run in PDF user space (descent is negative)."""
    return (x, baseline + descent, x + width, baseline + ascent)
