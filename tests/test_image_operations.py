from io import BytesIO

import pytest
from PIL import Image

from square_overlay.geometry import Extent, Rectangle
from utils.image_operations import (
    ExportError,
    ImageLoadError,
    compose_overlay,
    decode_image_bytes,
    encode_png,
    load_image,
    render_composite_png,
    save_image,
)

RED = (255, 0, 0)
WHITE = (255, 255, 255)


def test_compose_overlay_strokes_edges_only():
    img = Image.new("RGB", (100, 80), color="white")
    result = compose_overlay(img, [Rectangle(10, 10, 50, 40)], color=RED, line_width=2)

    # stroke straddles the edge: one pixel outside, one inside
    assert result.getpixel((9, 30)) == RED
    assert result.getpixel((10, 30)) == RED
    assert result.getpixel((11, 30)) == WHITE
    assert result.getpixel((59, 30)) == RED
    assert result.getpixel((60, 30)) == RED
    assert result.getpixel((61, 30)) == WHITE
    assert result.getpixel((30, 9)) == RED
    assert result.getpixel((30, 50)) == RED
    # interior untouched and source untouched
    assert result.getpixel((35, 30)) == WHITE
    assert img.getpixel((10, 30)) == WHITE


def test_compose_overlay_uses_scaled_stroke():
    img = Image.new("RGB", (200, 200), color="white")
    result = compose_overlay(img, [Rectangle(40, 40, 100, 100)], color=RED, line_width=8)
    assert result.getpixel((36, 90)) == RED
    assert result.getpixel((43, 90)) == RED
    assert result.getpixel((44, 90)) == WHITE
    assert result.getpixel((35, 90)) == WHITE


def test_render_composite_png_returns_png_bytes():
    img = Image.new("RGBA", (30, 30), color=(0, 0, 255, 255))
    data = render_composite_png(img, [Rectangle(5, 5, 10, 10)], 2)
    with Image.open(BytesIO(data)) as decoded:
        assert decoded.format == "PNG"
        assert decoded.size == (30, 30)


def test_load_image_reports_extent(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (64, 32), color="green").save(path)
    source = load_image(path)
    assert source.extent == Extent(64, 32)
    assert source.label == "photo.png"


def test_load_image_converts_palette_images(tmp_path):
    path = tmp_path / "palette.gif"
    Image.new("P", (8, 8)).save(path)
    assert load_image(path).image.mode == "RGBA"


@pytest.mark.parametrize("name, payload", [("fake.png", b"not an image"), ("notes.txt", b"text")])
def test_load_image_rejects_bad_files(tmp_path, name, payload):
    path = tmp_path / name
    path.write_bytes(payload)
    with pytest.raises(ImageLoadError):
        load_image(path)


def test_load_image_rejects_missing_file(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")


def test_decode_image_bytes(tmp_path):
    data = encode_png(Image.new("RGB", (12, 7)))
    source = decode_image_bytes(data)
    assert source.extent == Extent(12, 7)
    assert source.label == "clipboard"
    with pytest.raises(ImageLoadError):
        decode_image_bytes(None)
    with pytest.raises(ImageLoadError):
        decode_image_bytes(b"garbage")


def test_save_image_writes_requested_format(tmp_path):
    img = Image.new("RGBA", (10, 10), color=(10, 20, 30, 255))
    saved = save_image(img, tmp_path / "out.jpg")
    with Image.open(saved) as reread:
        assert reread.format == "JPEG"


def test_save_image_rejects_bad_destination(tmp_path):
    img = Image.new("RGB", (10, 10))
    with pytest.raises(ExportError):
        save_image(img, tmp_path / "missing" / "out.png")
    with pytest.raises(ExportError):
        save_image(img, tmp_path / "out.txt")
