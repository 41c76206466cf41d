"""Controller layer for decoupling editor state from widgets."""

from .session import ControlsAdapter, OverlaySession

__all__ = [
    "ControlsAdapter",
    "OverlaySession",
]
