"""Qt widgets for the overlay editor."""

from .canvas import OverlayCanvas
from .control_panel import ControlPanel, CountDefaults, SizeDefaults

__all__ = ["ControlPanel", "CountDefaults", "OverlayCanvas", "SizeDefaults"]
