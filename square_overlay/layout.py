"""Random placement of overlay squares.

:class:`LayoutGenerator` owns the placement policy: a square's height is
drawn uniformly from the configured :class:`SizeBounds`, its width is a fixed
fraction of the height, and its position is retried until it stops
overlapping the squares already placed or the retry budget runs out.  When
the budget is exhausted the last candidate is accepted anyway, so placement
never blocks and never fails.

The generator is UI agnostic; pass a seeded :class:`random.Random` to make
layouts reproducible in tests.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import config
from .geometry import Extent, Rectangle, overlaps_any

logger = logging.getLogger("square_overlay.layout")


@dataclass(frozen=True)
class SizeBounds:
    """Allowed square heights in display-space units.

    Inverted bounds (``min_height > max_height``) collapse to the single
    height ``min_height``; heights below one unit are raised to one.
    """

    min_height: float
    max_height: float

    @classmethod
    def from_slider(
        cls,
        min_value: float,
        max_value: float,
        scale: int = config.SIZE_SLIDER_SCALE,
    ) -> "SizeBounds":
        """Build bounds from slider positions expressed in tenths."""
        return cls(int(min_value * scale), int(max_value * scale))

    @property
    def inverted(self) -> bool:
        return self.min_height > self.max_height

    def normalized(self) -> tuple[int, int]:
        """Return the inclusive integer height range actually drawn from."""
        low = max(1, int(math.floor(self.min_height)))
        high = max(low, int(math.floor(self.max_height)))
        return low, high

    def clamp(self, height: float) -> float:
        low = max(1.0, float(self.min_height))
        high = max(low, float(self.max_height))
        return max(low, min(height, high))


class LayoutGenerator:
    """Generate and maintain a list of non-overlapping squares."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        max_attempts: int = config.PLACEMENT_MAX_ATTEMPTS,
        width_ratio: float = config.WIDTH_RATIO,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be greater than zero")
        self._rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.width_ratio = width_ratio

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _randint(self, low: float, high: float) -> int:
        low_i = int(math.floor(low))
        high_i = int(math.floor(high))
        if high_i < low_i:
            return low_i
        return self._rng.randint(low_i, high_i)

    def _draw_size(self, bounds: SizeBounds) -> tuple[int, int]:
        low, high = bounds.normalized()
        height = self._rng.randint(low, high)
        width = max(1, int(math.floor(height * self.width_ratio)))
        return width, height

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate_one(
        self,
        extent: Extent,
        bounds: SizeBounds,
        existing: Sequence[Rectangle] = (),
    ) -> Rectangle:
        """Place one square that avoids ``existing`` if the budget allows.

        The size is drawn once; only the position is retried.
        """
        width, height = self._draw_size(bounds)
        candidate: Optional[Rectangle] = None
        for _ in range(self.max_attempts):
            x = self._randint(0, extent.width - width)
            y = self._randint(0, extent.height - height)
            candidate = Rectangle(float(x), float(y), float(width), float(height))
            if not overlaps_any(candidate, existing):
                return candidate

        logger.debug(
            "No free slot for %dx%d square after %d attempts; accepting overlap",
            width,
            height,
            self.max_attempts,
        )
        return candidate

    def generate_all(
        self, count: int, extent: Extent, bounds: SizeBounds
    ) -> List[Rectangle]:
        """Return a fresh layout of ``count`` squares.

        Overlap is only avoided against squares of this batch.
        """
        rects: List[Rectangle] = []
        for _ in range(max(0, count)):
            rects.append(self.generate_one(extent, bounds, rects))
        logger.info(
            "Generated %d squares on %gx%g canvas", len(rects), extent.width, extent.height
        )
        return rects

    def resize_count(
        self,
        rects: List[Rectangle],
        new_count: int,
        extent: Extent,
        bounds: SizeBounds,
    ) -> None:
        """Grow or shrink ``rects`` in place to ``new_count`` squares.

        Growing appends new squares placed against the whole current list;
        shrinking keeps the first ``new_count`` squares.
        """
        new_count = max(0, new_count)
        current = len(rects)
        if new_count > current:
            for _ in range(new_count - current):
                rects.append(self.generate_one(extent, bounds, rects))
        elif new_count < current:
            del rects[new_count:]
        logger.debug("Square count %d -> %d", current, len(rects))

    def rescale_all(self, rects: Sequence[Rectangle], bounds: SizeBounds) -> None:
        """Redraw every square's size in place without moving it.

        Overlap is not re-checked, so resizing may produce overlaps.
        """
        for rect in rects:
            width, height = self._draw_size(bounds)
            rect.width = float(width)
            rect.height = float(height)
