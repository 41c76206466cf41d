"""Control panel widget for the Square Overlay main window."""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QSlider,
)

from .. import config
from ..layout import SizeBounds


@dataclass(frozen=True)
class CountDefaults:
    """Configuration for the square count slider."""

    value: int
    minimum: int
    maximum: int


@dataclass(frozen=True)
class SizeDefaults:
    """Configuration for the min/max size sliders, in tenths of display units."""

    min_value: int
    max_value: int
    minimum: int
    maximum: int
    scale: int = config.SIZE_SLIDER_SCALE


class ControlPanel(QFrame):
    """Toolbar exposing image actions and layout settings."""

    openRequested = Signal()
    pasteRequested = Signal()
    shuffleRequested = Signal()
    copyRequested = Signal()
    saveRequested = Signal()
    closeRequested = Signal()
    countChanged = Signal(int)
    sizesChanged = Signal()

    def __init__(
        self,
        *,
        count_defaults: CountDefaults,
        size_defaults: SizeDefaults,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._count_defaults = count_defaults
        self._size_defaults = size_defaults

        self.setObjectName("controlPanel")
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        self._build_layout()
        self.set_layout_controls_enabled(False)

    # Public control accessors -------------------------------------------------
    @property
    def count_slider(self) -> QSlider:
        return self._count_slider

    @property
    def min_size_slider(self) -> QSlider:
        return self._min_slider

    @property
    def max_size_slider(self) -> QSlider:
        return self._max_slider

    @property
    def shuffle_button(self) -> QPushButton:
        return self._shuffle_btn

    @property
    def copy_button(self) -> QPushButton:
        return self._copy_btn

    @property
    def close_button(self) -> QPushButton:
        return self._close_btn

    def count(self) -> int:
        return self._count_slider.value()

    def size_bounds(self) -> SizeBounds:
        return SizeBounds.from_slider(
            self._min_slider.value(),
            self._max_slider.value(),
            self._size_defaults.scale,
        )

    def set_layout_controls_enabled(self, enabled: bool) -> None:
        """Enable or disable everything that needs a loaded image."""
        for widget in self._layout_controls:
            widget.setEnabled(enabled)

    # Layout builders ---------------------------------------------------------
    def _build_layout(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(12)

        open_btn = QPushButton("Open…")
        open_btn.setToolTip(f"Open an image ({config.OPEN_SHORTCUT})")
        open_btn.clicked.connect(self.openRequested.emit)
        layout.addWidget(open_btn)

        paste_btn = QPushButton("Paste")
        paste_btn.setToolTip(f"Paste an image from the clipboard ({config.PASTE_SHORTCUT})")
        paste_btn.clicked.connect(self.pasteRequested.emit)
        layout.addWidget(paste_btn)

        line = QFrame()
        line.setFrameShape(QFrame.VLine)
        line.setFrameShadow(QFrame.Sunken)
        layout.addWidget(line)

        self._count_slider, count_label = self._build_slider(
            layout,
            "Squares:",
            self._count_defaults.minimum,
            self._count_defaults.maximum,
            self._count_defaults.value,
        )
        self._count_slider.valueChanged.connect(self.countChanged.emit)

        self._min_slider, min_label = self._build_slider(
            layout,
            "Min size:",
            self._size_defaults.minimum,
            self._size_defaults.maximum,
            self._size_defaults.min_value,
        )
        self._max_slider, max_label = self._build_slider(
            layout,
            "Max size:",
            self._size_defaults.minimum,
            self._size_defaults.maximum,
            self._size_defaults.max_value,
        )
        self._min_slider.valueChanged.connect(lambda _: self.sizesChanged.emit())
        self._max_slider.valueChanged.connect(lambda _: self.sizesChanged.emit())

        self._shuffle_btn = QPushButton("Shuffle")
        self._shuffle_btn.setToolTip(f"Lay the squares out again ({config.SHUFFLE_SHORTCUT})")
        self._shuffle_btn.clicked.connect(self.shuffleRequested.emit)
        layout.addWidget(self._shuffle_btn)

        self._copy_btn = QPushButton("Copy")
        self._copy_btn.setToolTip(f"Copy the full-size image ({config.COPY_SHORTCUT})")
        self._copy_btn.clicked.connect(self.copyRequested.emit)
        layout.addWidget(self._copy_btn)

        self._save_btn = QPushButton("Save…")
        self._save_btn.setToolTip(f"Save the full-size image ({config.SAVE_SHORTCUT})")
        self._save_btn.clicked.connect(self.saveRequested.emit)
        layout.addWidget(self._save_btn)

        self._close_btn = QPushButton("Close")
        self._close_btn.setToolTip(f"Close the image ({config.CLOSE_SHORTCUT})")
        self._close_btn.clicked.connect(self.closeRequested.emit)
        layout.addWidget(self._close_btn)

        layout.addStretch()

        self._layout_controls = (
            self._count_slider,
            count_label,
            self._min_slider,
            min_label,
            self._max_slider,
            max_label,
            self._shuffle_btn,
            self._copy_btn,
            self._save_btn,
            self._close_btn,
        )

    def _build_slider(self, parent_layout, caption, minimum, maximum, value):
        parent_layout.addWidget(QLabel(caption))
        slider = QSlider(Qt.Horizontal)
        slider.setRange(minimum, maximum)
        slider.setValue(value)
        slider.setFixedWidth(120)
        slider.setAccessibleName(caption.rstrip(":"))
        parent_layout.addWidget(slider)
        value_label = QLabel(str(value))
        value_label.setMinimumWidth(24)
        slider.valueChanged.connect(lambda v: value_label.setText(str(v)))
        parent_layout.addWidget(value_label)
        return slider, value_label


__all__ = [
    "ControlPanel",
    "CountDefaults",
    "SizeDefaults",
]
