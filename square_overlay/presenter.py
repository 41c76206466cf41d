"""
OverlayPresenter: application logic between the main window and the session.

The presenter never imports Qt.  Everything widget related goes through the
view, which is expected to provide ``session``, ``show_source``,
``clear_source``, ``refresh_canvas``, ``set_controls_enabled``,
``show_notice``, ``show_warning``, ``show_error``, ``run_in_background`` and
``set_clipboard_png``.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from utils.image_operations import (
    ExportError,
    ImageLoadError,
    SourceImage,
    compose_overlay,
    decode_image_bytes,
    load_image,
    render_composite_png,
    save_image,
)


class OverlayPresenter:
    def __init__(self, view):
        self.view = view
        self.source: Optional[SourceImage] = None
        self.logger = logging.getLogger("square_overlay.presenter")

    @property
    def session(self):
        return self.view.session

    # Image acquisition -------------------------------------------------------
    def load_image_from_path(self, path: Union[str, Path]) -> bool:
        try:
            source = load_image(path)
        except ImageLoadError as exc:
            self.logger.warning("Open failed: %s", exc)
            self.view.show_warning("Open Image", str(exc))
            return False
        self._apply_source(source)
        return True

    def paste_image(self, data: Optional[bytes]) -> bool:
        """Load image bytes taken from the clipboard, if there are any."""
        if not data:
            self.view.show_notice("Paste", "No image found in clipboard.")
            return False
        try:
            source = decode_image_bytes(data, "clipboard")
        except ImageLoadError as exc:
            self.logger.warning("Paste failed: %s", exc)
            self.view.show_warning("Paste", str(exc))
            return False
        self._apply_source(source)
        return True

    def _apply_source(self, source: SourceImage) -> None:
        self.source = source
        self.session.load_image(source.extent)
        self.view.show_source(source)
        self.view.set_controls_enabled(True)
        self.view.refresh_canvas()

    def clear_image(self) -> None:
        self.source = None
        self.session.unload()
        self.view.clear_source()
        self.view.set_controls_enabled(False)
        self.view.refresh_canvas()

    # Layout controls -----------------------------------------------------------
    def shuffle(self) -> None:
        if not self.session.shuffle():
            self.view.set_controls_enabled(False)
        self.view.refresh_canvas()

    def count_changed(self) -> None:
        self.session.update_count()
        self.view.refresh_canvas()

    def sizes_changed(self) -> None:
        self.session.update_sizes()
        self.view.refresh_canvas()

    # Export ------------------------------------------------------------------
    def copy_to_clipboard(self) -> bool:
        """Compose the original-size image in the background and copy it."""
        if self.source is None or not self.session.has_image:
            self.view.show_notice("Copy", "No image to copy.")
            return False

        image = self.source.image
        rects = self.session.source_rectangles()
        line_width = self.session.source_stroke_width()

        def _compose() -> bytes:
            return render_composite_png(image, rects, line_width)

        self.view.run_in_background(
            _compose,
            on_result=self._deliver_to_clipboard,
            on_error=self._report_export_error,
        )
        return True

    def _deliver_to_clipboard(self, data: bytes) -> None:
        try:
            self.view.set_clipboard_png(data)
        except ExportError as exc:
            self._report_export_error(str(exc))
            return
        self.logger.info("Copied %d squares to clipboard", len(self.session.rectangles))

    def save_to_file(self, path: Union[str, Path]) -> bool:
        if self.source is None or not self.session.has_image:
            self.view.show_notice("Save", "No image to save.")
            return False

        image = self.source.image
        rects = self.session.source_rectangles()
        line_width = self.session.source_stroke_width()

        def _write() -> Path:
            return save_image(compose_overlay(image, rects, line_width=line_width), path)

        self.view.run_in_background(
            _write,
            on_result=lambda saved: self.logger.info("Saved composite to %s", saved),
            on_error=self._report_export_error,
        )
        return True

    def _report_export_error(self, message: str) -> None:
        self.logger.error("Export failed: %s", message)
        self.view.show_error("Export Failed", f"Could not export image: {message}")
