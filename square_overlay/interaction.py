"""Pointer-driven drag and resize of overlay squares.

:class:`InteractionController` is an explicit state machine with three
states: :class:`Idle`, :class:`Dragging` and :class:`Resizing`.  Widgets feed
it pointer coordinates in display-space and repaint when a move reports a
mutation.  The controller never raises on odd input; out-of-range pointers
are absorbed by clamping and a gesture whose square disappeared (count
lowered or layout shuffled mid-gesture) simply ends.

The controller reads the squares, the canvas extent and the size bounds
from a context object at event time, typically
:class:`~square_overlay.controllers.session.OverlaySession`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from . import config
from .geometry import (
    Rectangle,
    clamp_position,
    clamp_size,
    contains_point,
    in_handle_zone,
)

logger = logging.getLogger("square_overlay.interaction")


class Cursor(enum.Enum):
    """Cursor affordance advertised while no gesture is active."""

    DEFAULT = "default"
    MOVE = "move"
    RESIZE = "resize"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    index: int
    offset_x: float
    offset_y: float


@dataclass(frozen=True)
class Resizing:
    index: int
    start_x: float
    start_y: float
    start_width: float
    start_height: float


InteractionState = Union[Idle, Dragging, Resizing]

IDLE = Idle()


class InteractionController:
    """Track one drag or resize gesture at a time."""

    def __init__(self, context, *, handle_radius: float = config.RESIZE_HANDLE_RADIUS) -> None:
        self._context = context
        self.handle_radius = handle_radius
        self._state: InteractionState = IDLE
        self._cursor = Cursor.DEFAULT

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def active(self) -> bool:
        return not isinstance(self._state, Idle)

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------
    def _handle_hit(self, x: float, y: float) -> Optional[int]:
        rects = self._context.rectangles
        for index in range(len(rects) - 1, -1, -1):
            if in_handle_zone(rects[index], x, y, self.handle_radius):
                return index
        return None

    def _body_hit(self, x: float, y: float) -> Optional[int]:
        rects = self._context.rectangles
        for index in range(len(rects) - 1, -1, -1):
            if contains_point(rects[index], x, y):
                return index
        return None

    def cursor_at(self, x: float, y: float) -> Cursor:
        """Return the affordance for a pointer at ``(x, y)``.

        Uses the same priority as :meth:`pointer_down`: any handle zone
        first, then any square body.
        """
        if self._handle_hit(x, y) is not None:
            return Cursor.RESIZE
        if self._body_hit(x, y) is not None:
            return Cursor.MOVE
        return Cursor.DEFAULT

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def pointer_down(self, x: float, y: float) -> InteractionState:
        """Start a resize or drag on the topmost square under the pointer.

        Resize handles win over square bodies across the whole stack.
        """
        rects = self._context.rectangles
        index = self._handle_hit(x, y)
        if index is not None:
            rect = rects[index]
            self._state = Resizing(index, x, y, rect.width, rect.height)
        else:
            index = self._body_hit(x, y)
            if index is not None:
                rect = rects[index]
                self._state = Dragging(index, x - rect.x, y - rect.y)
            else:
                self._state = IDLE
        logger.debug("pointer down at (%.1f, %.1f): %s", x, y, self._state)
        return self._state

    def pointer_move(self, x: float, y: float) -> bool:
        """Apply the active gesture; return ``True`` when a square changed."""
        state = self._state
        if isinstance(state, Idle):
            self._cursor = self.cursor_at(x, y)
            return False

        rects = self._context.rectangles
        if state.index >= len(rects):
            logger.debug("square %d vanished mid-gesture; back to idle", state.index)
            self._state = IDLE
            return False

        if isinstance(state, Dragging):
            rects[state.index] = self._dragged(rects[state.index], state, x, y)
        else:
            rects[state.index] = self._resized(rects[state.index], state, y)
        return True

    def pointer_up(self) -> None:
        if self.active:
            logger.debug("gesture finished: %s", self._state)
        self._state = IDLE

    pointer_leave = pointer_up

    def reset(self) -> None:
        self._state = IDLE
        self._cursor = Cursor.DEFAULT

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _dragged(self, rect: Rectangle, state: Dragging, x: float, y: float) -> Rectangle:
        moved = replace(rect, x=x - state.offset_x, y=y - state.offset_y)
        return clamp_position(moved, self._context.canvas_extent)

    def _resized(self, rect: Rectangle, state: Resizing, y: float) -> Rectangle:
        # Height follows the vertical delta; width follows the aspect lock.
        height = self._context.size_bounds.clamp(state.start_height + (y - state.start_y))
        sized = replace(rect, width=height * rect.aspect_ratio, height=height)
        return clamp_size(sized, self._context.canvas_extent)
