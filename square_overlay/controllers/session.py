"""Session state for the overlay editor.

:class:`OverlaySession` is the single owner of everything the editor
mutates: the source and canvas extents and the ordered list of squares.  It
hands itself to the :class:`~square_overlay.interaction.InteractionController`
as context, so pointer handlers and control handlers always see the same
list.  User-facing settings (square count and size bounds) are never stored
here; they are read on demand through a :class:`ControlsAdapter`, which lets
tests and non-Qt front ends supply plain callables instead of widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .. import config
from ..geometry import Extent, Rectangle
from ..interaction import InteractionController
from ..layout import LayoutGenerator, SizeBounds
from ..mapping import fit_extent, rects_to_source_space, scaled_stroke_width

logger = logging.getLogger("square_overlay.session")


@dataclass(frozen=True)
class ControlsAdapter:
    """Adapter encapsulating how to read the user's layout settings."""

    read_count: Callable[[], int]
    read_bounds: Callable[[], SizeBounds]


class OverlaySession:
    """Own the canvas, the squares and the gesture state of one editor."""

    def __init__(
        self,
        adapter: ControlsAdapter,
        *,
        generator: Optional[LayoutGenerator] = None,
        handle_radius: float = config.RESIZE_HANDLE_RADIUS,
        max_display: Extent = Extent(config.MAX_DISPLAY_WIDTH, config.MAX_DISPLAY_HEIGHT),
    ) -> None:
        self._adapter = adapter
        self._generator = generator or LayoutGenerator()
        self._max_display = max_display
        self.source_extent: Optional[Extent] = None
        self.canvas_extent: Extent = Extent(0, 0)
        self.rectangles: List[Rectangle] = []
        self.interaction = InteractionController(self, handle_radius=handle_radius)

    @property
    def has_image(self) -> bool:
        return self.source_extent is not None

    @property
    def size_bounds(self) -> SizeBounds:
        return self._adapter.read_bounds()

    @property
    def count(self) -> int:
        return max(0, int(self._adapter.read_count()))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load_image(self, source_extent: Extent) -> Extent:
        """Fit the canvas to a newly loaded image and lay out fresh squares.

        Returns the canvas extent.
        """
        self.source_extent = source_extent
        self.canvas_extent = fit_extent(
            source_extent, self._max_display.width, self._max_display.height
        )
        logger.info(
            "Image %gx%g shown at %gx%g",
            source_extent.width,
            source_extent.height,
            self.canvas_extent.width,
            self.canvas_extent.height,
        )
        self.shuffle()
        return self.canvas_extent

    def unload(self) -> None:
        self.source_extent = None
        self.canvas_extent = Extent(0, 0)
        self.rectangles.clear()
        self.interaction.reset()

    # ------------------------------------------------------------------
    # Layout operations
    # ------------------------------------------------------------------
    def shuffle(self) -> bool:
        """Replace the layout with a freshly generated one.

        Without an image the squares are cleared and ``False`` is returned.
        """
        self.interaction.reset()
        if not self.has_image:
            self.rectangles.clear()
            return False
        bounds = self.size_bounds
        if bounds.inverted:
            logger.warning(
                "Size bounds inverted (%g > %g); using %g",
                bounds.min_height,
                bounds.max_height,
                bounds.min_height,
            )
        # Replace contents rather than rebinding so references stay valid.
        self.rectangles[:] = self._generator.generate_all(
            self.count, self.canvas_extent, bounds
        )
        return True

    def update_count(self) -> None:
        """Append or drop squares to match the configured count."""
        if not self.has_image:
            return
        self._generator.resize_count(
            self.rectangles, self.count, self.canvas_extent, self.size_bounds
        )

    def update_sizes(self) -> None:
        """Redraw square sizes from the configured bounds keeping positions."""
        if not self.has_image:
            return
        self._generator.rescale_all(self.rectangles, self.size_bounds)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def source_rectangles(self) -> List[Rectangle]:
        """Return copies of the squares scaled into source-space."""
        if not self.has_image:
            return []
        return rects_to_source_space(self.rectangles, self.canvas_extent, self.source_extent)

    def source_stroke_width(self, width: float = config.STROKE_WIDTH) -> float:
        if not self.has_image:
            return width
        return scaled_stroke_width(width, self.canvas_extent, self.source_extent)
