"""Pillow helpers for loading source images and burning squares into them.

The functions here never touch Qt so the export path can run in a worker
thread and be tested headless.  Loading normalises EXIF orientation once;
compositing always works on a copy of the source image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from PIL import Image, ImageDraw, ImageOps, UnidentifiedImageError

from square_overlay import config
from square_overlay.geometry import Extent, Rectangle

from .validation import image_extensions, validate_image_path, validate_output_path

logger = logging.getLogger("square_overlay.imaging")

ColorValue = tuple[int, ...]


class ImageLoadError(Exception):
    """Raised when a source image cannot be read or decoded."""


class ExportError(Exception):
    """Raised when the composite cannot be produced or delivered."""


@dataclass(frozen=True)
class SourceImage:
    """A decoded source image and where it came from."""

    image: Image.Image
    label: str

    @property
    def extent(self) -> Extent:
        width, height = self.image.size
        return Extent(width, height)


def _normalise(image: Image.Image) -> Image.Image:
    image = ImageOps.exif_transpose(image)
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    return image


def load_image(path: Union[str, Path]) -> SourceImage:
    """Load the image at ``path`` after validating it.

    Raises:
        ImageLoadError: The path is rejected or the file is not an image.
    """
    try:
        safe_path = validate_image_path(path, image_extensions())
        with Image.open(safe_path) as img:
            img.load()
            image = _normalise(img)
    except (ValueError, UnidentifiedImageError, OSError) as exc:
        logger.warning("Could not load image %s: %s", path, exc)
        raise ImageLoadError(f"Could not load image: {exc}") from exc
    logger.info("Loaded %s (%dx%d)", safe_path.name, image.width, image.height)
    return SourceImage(image, safe_path.name)


def decode_image_bytes(data: Optional[bytes], label: str = "clipboard") -> SourceImage:
    """Decode encoded image bytes, e.g. PNG data taken from the clipboard."""
    if not data:
        raise ImageLoadError("No image data provided")
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            image = _normalise(img)
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning("Could not decode %s image: %s", label, exc)
        raise ImageLoadError(f"Could not decode image: {exc}") from exc
    logger.info("Decoded %s image (%dx%d)", label, image.width, image.height)
    return SourceImage(image, label)


def compose_overlay(
    image: Image.Image,
    rects: Iterable[Rectangle],
    *,
    color: ColorValue = config.STROKE_COLOR,
    line_width: float = config.STROKE_WIDTH,
) -> Image.Image:
    """Return a copy of ``image`` with every rectangle outline drawn on it.

    ``rects`` must already be in the image's own coordinate space.  The
    stroke is centred on the rectangle edge, as a canvas ``strokeRect``
    would draw it.
    """
    result = image.copy()
    draw = ImageDraw.Draw(result)
    stroke = max(1, int(round(line_width)))
    half = stroke / 2.0
    for rect in rects:
        box = (
            int(round(rect.x - half)),
            int(round(rect.y - half)),
            int(round(rect.right + half)) - 1,
            int(round(rect.bottom + half)) - 1,
        )
        draw.rectangle(box, outline=color, width=stroke)
    return result


def encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def save_image(image: Image.Image, path: Union[str, Path], *, quality: int = 95) -> Path:
    """Validate ``path`` and write ``image`` there in the format its suffix names.

    Raises:
        ExportError: The path is rejected or Pillow fails to write.
    """
    try:
        safe_path = validate_output_path(path, image_extensions())
    except ValueError as exc:
        raise ExportError(str(exc)) from exc

    fmt = safe_path.suffix[1:].upper()
    if fmt == "JPG":
        fmt = "JPEG"
    save_params: Dict[str, Any] = {"format": fmt}
    if fmt == "JPEG":
        image = image.convert("RGB")
        save_params.update({"quality": quality, "optimize": True})
    elif fmt == "WEBP":
        save_params.update({"quality": quality, "method": 6})
    elif fmt == "PNG":
        save_params.update({"optimize": True, "compress_level": 6})

    try:
        image.save(str(safe_path), **save_params)
    except (OSError, ValueError, KeyError) as exc:
        raise ExportError(f"Failed to save image to {safe_path}: {exc}") from exc
    logger.info("Saved composite to %s", safe_path)
    return safe_path


def render_composite_png(
    image: Image.Image,
    rects: Sequence[Rectangle],
    line_width: float,
) -> bytes:
    """Compose and PNG-encode in one step; used by the clipboard export worker."""
    try:
        return encode_png(compose_overlay(image, rects, line_width=line_width))
    except (OSError, ValueError) as exc:
        raise ExportError(f"Failed to render composite: {exc}") from exc


__all__ = [
    "ExportError",
    "ImageLoadError",
    "SourceImage",
    "compose_overlay",
    "decode_image_bytes",
    "encode_png",
    "load_image",
    "render_composite_png",
    "save_image",
]
