"""Rectangle math shared by the layout generator and the interaction engine.

Everything here is plain Python so it can be unit tested without a Qt
environment.  Coordinates are floats in whatever space the caller works in
(display-space for the canvas, source-space at export time).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Extent:
    """Width and height of a drawing surface or image."""

    width: float
    height: float


@dataclass
class Rectangle:
    """An overlay square anchored at its top-left corner.

    ``aspect_ratio`` is captured from ``width / height`` when the rectangle is
    created and is never recomputed afterwards; resizing derives the width
    from the height through it.
    """

    x: float
    y: float
    width: float
    height: float
    aspect_ratio: Optional[float] = None

    def __post_init__(self) -> None:
        if self.aspect_ratio is None:
            self.aspect_ratio = self.width / self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def overlaps(a: Rectangle, b: Rectangle) -> bool:
    """Return ``True`` when ``a`` and ``b`` share an area greater than zero.

    Rectangles that only touch along an edge do not overlap.
    """
    return not (
        a.right <= b.x
        or a.x >= b.right
        or a.bottom <= b.y
        or a.y >= b.bottom
    )


def overlaps_any(rect: Rectangle, others) -> bool:
    return any(overlaps(rect, other) for other in others)


def contains_point(rect: Rectangle, x: float, y: float) -> bool:
    """Inclusive point-in-rectangle test."""
    return rect.x <= x <= rect.right and rect.y <= y <= rect.bottom


def in_handle_zone(rect: Rectangle, x: float, y: float, radius: float) -> bool:
    """Return ``True`` if ``(x, y)`` lies in the square of half-side ``radius``
    centred on the bottom-right corner of ``rect``."""
    return (
        rect.right - radius <= x <= rect.right + radius
        and rect.bottom - radius <= y <= rect.bottom + radius
    )


def contained(rect: Rectangle, extent: Extent, tolerance: float = 1e-9) -> bool:
    """Return ``True`` if ``rect`` lies inside ``extent``.

    ``tolerance`` absorbs float rounding left by the clamps.
    """
    return (
        rect.x >= -tolerance
        and rect.y >= -tolerance
        and rect.right <= extent.width + tolerance
        and rect.bottom <= extent.height + tolerance
    )


def clamp_position(rect: Rectangle, extent: Extent) -> Rectangle:
    """Move ``rect`` inside ``extent`` keeping its size.

    A rectangle larger than the extent is pinned to the origin.
    """
    x = max(0.0, min(rect.x, extent.width - rect.width))
    y = max(0.0, min(rect.y, extent.height - rect.height))
    return replace(rect, x=x, y=y)


def clamp_size(rect: Rectangle, extent: Extent) -> Rectangle:
    """Shrink ``rect`` so its far edges stay inside ``extent``; origin is fixed.

    Both sides shrink by the same factor so the width/height ratio survives
    the clamp.
    """
    max_width = extent.width - rect.x
    max_height = extent.height - rect.y
    factor = min(1.0, max_width / rect.width, max_height / rect.height)
    if factor >= 1.0:
        return replace(rect)
    return replace(rect, width=rect.width * factor, height=rect.height * factor)
