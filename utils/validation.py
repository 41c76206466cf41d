"""Input validation for image paths picked, dropped or typed by the user."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Set, Union
from urllib.parse import urlparse

from square_overlay import config


def image_extensions() -> Set[str]:
    """Return the allowed suffixes (with leading dot) from config."""
    return {f".{fmt.lower()}" for fmt in config.SUPPORTED_IMAGE_FORMATS}


def _has_url_scheme(path_str: str) -> bool:
    """Return True if *path_str* looks like a URL with a scheme.

    Single-letter schemes such as ``"C"`` are Windows drive letters.
    """
    parsed = urlparse(path_str)
    return bool(parsed.scheme and len(parsed.scheme) > 1)


def _check_suffix(p: Path, allowed_exts: Iterable[str]) -> None:
    if p.suffix.lower() not in {ext.lower() for ext in allowed_exts}:
        raise ValueError(f"Unsupported file extension: {p.suffix or '(none)'}")


def validate_image_path(path: Union[str, Path], allowed_exts: Iterable[str]) -> Path:
    """Return the resolved *path* of an existing image file.

    Raises ``ValueError`` for URLs, missing files, directories and
    unsupported extensions.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    try:
        p = p.resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"File does not exist: {path_str}") from exc

    if not p.is_file():
        raise ValueError(f"Not a file: {path_str}")
    _check_suffix(p, allowed_exts)
    return p


def validate_output_path(path: Union[str, Path], allowed_exts: Iterable[str]) -> Path:
    """Return the resolved output *path* once its directory and suffix check out."""
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser().resolve()
    if not p.parent.is_dir():
        raise ValueError(f"Directory does not exist: {p.parent}")
    _check_suffix(p, allowed_exts)
    return p
