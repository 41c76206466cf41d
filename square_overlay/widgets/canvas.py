# widgets/canvas.py
"""
Defines OverlayCanvas: the display surface that paints the image and its
squares and turns mouse events into session gestures.
"""
from typing import Optional
import logging

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QRectF, QSize, Signal
from PySide6.QtGui import QPainter, QPixmap, QColor, QPen

from .. import config
from ..interaction import Cursor

logger = logging.getLogger("square_overlay.canvas")

_CURSOR_SHAPES = {
    Cursor.DEFAULT: Qt.ArrowCursor,
    Cursor.MOVE: Qt.SizeAllCursor,
    Cursor.RESIZE: Qt.SizeFDiagCursor,
}


class OverlayCanvas(QWidget):
    """Paint the scaled source image and stroke every square on top of it."""

    fileDropped = Signal(str)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.pixmap: Optional[QPixmap] = None
        self.stroke_color = QColor(*config.STROKE_COLOR)
        self.stroke_width = config.STROKE_WIDTH

        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.setMinimumSize(QSize(320, 180))
        self.setAccessibleName("Overlay Canvas")

    def setImage(self, pixmap: QPixmap) -> None:
        """Show ``pixmap`` stretched to the session's canvas extent."""
        self.pixmap = pixmap
        extent = self.session.canvas_extent
        self.setFixedSize(int(extent.width), int(extent.height))
        self.update()
        logger.info("Canvas showing %dx%d", int(extent.width), int(extent.height))

    def clearImage(self) -> None:
        self.pixmap = None
        self.setMinimumSize(QSize(320, 180))
        self.setMaximumSize(QSize(16777215, 16777215))
        self.unsetCursor()
        self.update()

    def sizeHint(self) -> QSize:
        extent = self.session.canvas_extent
        if self.pixmap is not None and extent.width and extent.height:
            return QSize(int(extent.width), int(extent.height))
        return QSize(640, 360)

    # Painting ----------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.SmoothPixmapTransform)
            if self.pixmap is None:
                self._draw_placeholder(painter)
                return
            extent = self.session.canvas_extent
            painter.drawPixmap(QRectF(0, 0, extent.width, extent.height), self.pixmap, QRectF(self.pixmap.rect()))
            pen = QPen(self.stroke_color)
            pen.setWidthF(self.stroke_width)
            pen.setJoinStyle(Qt.MiterJoin)
            painter.setPen(pen)
            painter.setBrush(Qt.NoBrush)
            for rect in self.session.rectangles:
                painter.drawRect(QRectF(rect.x, rect.y, rect.width, rect.height))
        finally:
            painter.end()

    def _draw_placeholder(self, painter: QPainter) -> None:
        rect = self.rect()
        painter.fillRect(rect, QColor(245, 245, 245))
        painter.setPen(QColor(150, 150, 150))
        painter.drawText(rect, Qt.AlignCenter, "Drop an image here\nor paste with Ctrl+V")

    # Pointer handling ------------------------------------------------------------
    def mousePressEvent(self, event):
        if self.pixmap is None or event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.session.interaction.pointer_down(pos.x(), pos.y())
        event.accept()

    def mouseMoveEvent(self, event):
        if self.pixmap is None:
            return
        pos = event.position()
        interaction = self.session.interaction
        if interaction.pointer_move(pos.x(), pos.y()):
            self.update()
        elif not interaction.active:
            self.setCursor(_CURSOR_SHAPES[interaction.cursor])

    def mouseReleaseEvent(self, event):
        self.session.interaction.pointer_up()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.session.interaction.pointer_leave()
        super().leaveEvent(event)

    # Drag and drop -----------------------------------------------------------
    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        for url in event.mimeData().urls():
            if url.isLocalFile():
                self.fileDropped.emit(url.toLocalFile())
                event.acceptProposedAction()
                return
        event.ignore()
