"""Conversions between display-space and source-space.

The canvas shows the source image shrunk into a bounded display box.
Squares live in display-space while the user edits them and are scaled into
source-space only when the composite is exported.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Tuple

from . import config
from .geometry import Extent, Rectangle


def fit_extent(
    source: Extent,
    max_width: float = config.MAX_DISPLAY_WIDTH,
    max_height: float = config.MAX_DISPLAY_HEIGHT,
) -> Extent:
    """Return the display extent for ``source``.

    Images larger than the box are scaled down preserving aspect ratio;
    smaller images are shown at their own size.
    """
    width, height = source.width, source.height
    if width > max_width or height > max_height:
        ratio = min(max_width / width, max_height / height)
        width = max(1, int(width * ratio))
        height = max(1, int(height * ratio))
    return Extent(width, height)


def scale_factors(display: Extent, source: Extent) -> Tuple[float, float]:
    """Return ``(sx, sy)`` multipliers taking display lengths to source lengths."""
    return source.width / display.width, source.height / display.height


def _scaled(rect: Rectangle, sx: float, sy: float) -> Rectangle:
    return replace(
        rect,
        x=rect.x * sx,
        y=rect.y * sy,
        width=rect.width * sx,
        height=rect.height * sy,
    )


def to_source_space(rect: Rectangle, display: Extent, source: Extent) -> Rectangle:
    sx, sy = scale_factors(display, source)
    return _scaled(rect, sx, sy)


def to_display_space(rect: Rectangle, display: Extent, source: Extent) -> Rectangle:
    sx, sy = scale_factors(display, source)
    return _scaled(rect, 1.0 / sx, 1.0 / sy)


def rects_to_source_space(
    rects: Iterable[Rectangle], display: Extent, source: Extent
) -> List[Rectangle]:
    return [to_source_space(rect, display, source) for rect in rects]


def scaled_stroke_width(width: float, display: Extent, source: Extent) -> float:
    """Scale a display stroke width by the horizontal factor."""
    sx, _ = scale_factors(display, source)
    return width * sx
