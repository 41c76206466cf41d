# main.py
"""
Entry point and main application window for Square Overlay.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

from PySide6.QtCore import QStandardPaths, Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from . import config
from .controllers import ControlsAdapter, OverlaySession
from .imaging import pil_to_qpixmap, png_bytes_to_qimage, qimage_to_png_bytes
from .presenter import OverlayPresenter
from .widgets.canvas import OverlayCanvas
from .widgets.control_panel import ControlPanel, CountDefaults, SizeDefaults
from .workers import start_worker

LOGGER_NAME = "square_overlay"


def configure_logging(log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent so importing this module repeatedly (e.g.
    in tests) does not stack handlers.  ``SQUARE_OVERLAY_LOG_DIR`` overrides
    the default location next to the package.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    if log_dir is None:
        env_dir = os.environ.get("SQUARE_OVERLAY_LOG_DIR")
        log_dir = Path(env_dir) if env_dir else Path(__file__).resolve().parents[1]
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / config.LOG_FILENAME,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger


logger = configure_logging()


def global_exception_handler(exc_type, value, tb):
    logger.error("Uncaught exception", exc_info=(exc_type, value, tb))
    sys.__excepthook__(exc_type, value, tb)


sys.excepthook = global_exception_handler


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Square Overlay")
        self.resize(1320, 820)

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(8, 6, 8, 6)
        main_layout.setSpacing(8)

        self.control_panel = ControlPanel(
            count_defaults=CountDefaults(
                value=config.COUNT_DEFAULT,
                minimum=config.COUNT_MIN,
                maximum=config.COUNT_MAX,
            ),
            size_defaults=SizeDefaults(
                min_value=config.MIN_SIZE_DEFAULT,
                max_value=config.MAX_SIZE_DEFAULT,
                minimum=config.SIZE_MIN,
                maximum=config.SIZE_MAX,
            ),
            parent=self,
        )
        main_layout.addWidget(self.control_panel)

        sep = QFrame()
        sep.setFrameShape(QFrame.HLine)
        sep.setFrameShadow(QFrame.Sunken)
        sep.setFixedHeight(1)
        main_layout.addWidget(sep)

        self.session = OverlaySession(
            ControlsAdapter(
                read_count=self.control_panel.count,
                read_bounds=self.control_panel.size_bounds,
            )
        )
        self.canvas = OverlayCanvas(self.session)
        main_layout.addWidget(self.canvas, alignment=Qt.AlignCenter)
        main_layout.addStretch()

        self.presenter = OverlayPresenter(self)
        self._workers = []
        self._bind_control_panel()
        self._create_shortcuts()
        logger.info("MainWindow initialized.")

    def _bind_control_panel(self) -> None:
        panel = self.control_panel
        panel.openRequested.connect(self._open_image)
        panel.pasteRequested.connect(self._paste_image)
        panel.shuffleRequested.connect(self.presenter.shuffle)
        panel.copyRequested.connect(self.presenter.copy_to_clipboard)
        panel.saveRequested.connect(self._save_image)
        panel.closeRequested.connect(self.presenter.clear_image)
        panel.countChanged.connect(lambda _: self.presenter.count_changed())
        panel.sizesChanged.connect(self.presenter.sizes_changed)
        self.canvas.fileDropped.connect(self.presenter.load_image_from_path)

    def _create_shortcuts(self):
        QShortcut(QKeySequence(config.OPEN_SHORTCUT), self, activated=self._open_image)
        QShortcut(QKeySequence(config.PASTE_SHORTCUT), self, activated=self._paste_image)
        QShortcut(
            QKeySequence(config.COPY_SHORTCUT), self, activated=self.presenter.copy_to_clipboard
        )
        QShortcut(QKeySequence(config.SAVE_SHORTCUT), self, activated=self._save_image)
        QShortcut(QKeySequence(config.CLOSE_SHORTCUT), self, activated=self.presenter.clear_image)
        QShortcut(QKeySequence(config.SHUFFLE_SHORTCUT), self, activated=self.presenter.shuffle)

    # --- Image acquisition ---
    def _image_filter(self) -> str:
        pattern = " ".join(f"*.{ext}" for ext in config.SUPPORTED_IMAGE_FORMATS)
        return f"Images ({pattern})"

    def _open_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Image",
            QStandardPaths.writableLocation(QStandardPaths.PicturesLocation) or "",
            self._image_filter(),
        )
        if path:
            self.presenter.load_image_from_path(path)

    def _paste_image(self) -> None:
        mime = QApplication.clipboard().mimeData()
        if mime is not None and mime.hasImage():
            self.presenter.paste_image(qimage_to_png_bytes(QApplication.clipboard().image()))
            return
        if mime is not None and mime.hasUrls():
            for url in mime.urls():
                if url.isLocalFile():
                    self.presenter.load_image_from_path(url.toLocalFile())
                    return
        self.presenter.paste_image(None)

    def _save_image(self) -> None:
        if not self.session.has_image:
            self.show_notice("Save", "No image to save.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Image",
            QStandardPaths.writableLocation(QStandardPaths.PicturesLocation) or "",
            "PNG (*.png);;JPEG (*.jpg *.jpeg);;WEBP (*.webp)",
        )
        if not path:
            return
        if not Path(path).suffix:
            path = f"{path}.png"
        self.presenter.save_to_file(path)

    # --- View interface used by the presenter ---
    def show_source(self, source) -> None:
        self.canvas.setImage(pil_to_qpixmap(source.image))
        self.setWindowTitle(f"Square Overlay - {source.label}")

    def clear_source(self) -> None:
        self.canvas.clearImage()
        self.setWindowTitle("Square Overlay")

    def refresh_canvas(self) -> None:
        self.canvas.update()

    def set_controls_enabled(self, enabled: bool) -> None:
        self.control_panel.set_layout_controls_enabled(enabled)

    def show_notice(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)
        QMessageBox.information(self, title, text)

    def show_warning(self, title: str, text: str) -> None:
        QMessageBox.warning(self, title, text)

    def show_error(self, title: str, text: str) -> None:
        QMessageBox.critical(self, title, text)

    def set_clipboard_png(self, data: bytes) -> None:
        QApplication.clipboard().setImage(png_bytes_to_qimage(data))

    def run_in_background(
        self,
        fn: Callable[[], Any],
        *,
        on_result: Callable[[Any], None],
        on_error: Callable[[str], None],
    ) -> None:
        self.statusBar().showMessage("Exporting…")

        def _on_finished() -> None:
            self.statusBar().clearMessage()
            self._workers.remove(worker)

        worker = start_worker(
            fn, on_result=on_result, on_error=on_error, on_finished=_on_finished
        )
        self._workers.append(worker)


def run() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setStyle("Fusion")
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
