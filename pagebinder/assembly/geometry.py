"""Containment-fit geometry for placing pages on a fixed canvas."""

import math

from .models import Canvas, Placement
from ..errors import GeometryError


def fit_to_canvas(width: float, height: float, canvas: Canvas) -> Placement:
    """
    Scale a page uniformly so it fits inside the canvas and center it.

    The scale is the largest factor that keeps both sides within the
    canvas, so the page is never cropped or stretched.

    Args:
        width: Source page width
        height: Source page height
        canvas: Target page size

    Returns:
        Placement with the offset, scaled size, and scale factor

    Raises:
        GeometryError: If the source size is zero, negative, or not finite
        ValueError: If the canvas itself has no area
    """
    if not (canvas.width > 0 and canvas.height > 0):
        raise ValueError(f"Invalid canvas size: {canvas.width}x{canvas.height}")

    if not all(math.isfinite(v) and v > 0 for v in (width, height)):
        raise GeometryError(f"Page has no usable size: {width}x{height}")

    scale = min(canvas.width / width, canvas.height / height)

    # Clamp so rounding never pushes the limiting side past the canvas edge
    scaled_width = min(width * scale, canvas.width)
    scaled_height = min(height * scale, canvas.height)

    return Placement(
        x=(canvas.width - scaled_width) / 2,
        y=(canvas.height - scaled_height) / 2,
        width=scaled_width,
        height=scaled_height,
        scale=scale,
    )
