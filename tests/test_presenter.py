import random
from io import BytesIO

import pytest
from unittest.mock import MagicMock
from PIL import Image

from square_overlay.controllers import ControlsAdapter, OverlaySession
from square_overlay.layout import LayoutGenerator, SizeBounds
from square_overlay.presenter import OverlayPresenter
from utils.image_operations import ExportError, encode_png


@pytest.fixture
def mock_view():
    view = MagicMock()
    adapter = ControlsAdapter(read_count=lambda: 3, read_bounds=lambda: SizeBounds(40, 80))
    view.session = OverlaySession(adapter, generator=LayoutGenerator(random.Random(5)))

    # Run background jobs inline so results can be asserted on directly.
    def _run_inline(fn, *, on_result, on_error):
        try:
            result = fn()
        except Exception as exc:
            on_error(str(exc))
        else:
            on_result(result)

    view.run_in_background.side_effect = _run_inline
    return view


@pytest.fixture
def presenter(mock_view):
    return OverlayPresenter(mock_view)


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (400, 300), color="white").save(path)
    return path


def test_load_image_from_path_updates_view(presenter, mock_view, png_path):
    assert presenter.load_image_from_path(png_path) is True

    assert mock_view.session.has_image
    assert len(mock_view.session.rectangles) == 3
    mock_view.show_source.assert_called_once_with(presenter.source)
    mock_view.set_controls_enabled.assert_called_with(True)
    mock_view.refresh_canvas.assert_called()


def test_load_image_failure_shows_warning(presenter, mock_view, tmp_path):
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"nope")

    assert presenter.load_image_from_path(bad) is False
    mock_view.show_warning.assert_called_once()
    assert mock_view.show_warning.call_args.args[0] == "Open Image"
    mock_view.show_notice.assert_not_called()
    assert not mock_view.session.has_image


def test_paste_without_image_data_notifies(presenter, mock_view):
    assert presenter.paste_image(None) is False
    mock_view.show_notice.assert_called_once_with("Paste", "No image found in clipboard.")


def test_paste_undecodable_bytes_shows_warning(presenter, mock_view):
    assert presenter.paste_image(b"garbage") is False
    mock_view.show_warning.assert_called_once()
    assert mock_view.show_warning.call_args.args[0] == "Paste"
    assert presenter.source is None


def test_paste_image_bytes_loads_source(presenter, mock_view):
    data = encode_png(Image.new("RGB", (64, 48)))
    assert presenter.paste_image(data) is True
    assert presenter.source.label == "clipboard"
    assert mock_view.session.source_extent.width == 64


def test_copy_without_image_notifies(presenter, mock_view):
    assert presenter.copy_to_clipboard() is False
    mock_view.show_notice.assert_called_once_with("Copy", "No image to copy.")
    mock_view.run_in_background.assert_not_called()


def test_copy_delivers_png_to_clipboard(presenter, mock_view, png_path):
    presenter.load_image_from_path(png_path)

    assert presenter.copy_to_clipboard() is True
    mock_view.set_clipboard_png.assert_called_once()
    data = mock_view.set_clipboard_png.call_args.args[0]
    with Image.open(BytesIO(data)) as composite:
        assert composite.size == (400, 300)
    mock_view.show_error.assert_not_called()


def test_clipboard_failure_reports_export_error(presenter, mock_view, png_path):
    presenter.load_image_from_path(png_path)
    mock_view.set_clipboard_png.side_effect = ExportError("clipboard busy")

    presenter.copy_to_clipboard()
    mock_view.show_error.assert_called_once_with(
        "Export Failed", "Could not export image: clipboard busy"
    )


def test_save_to_file_writes_composite(presenter, mock_view, png_path, tmp_path):
    presenter.load_image_from_path(png_path)
    out = tmp_path / "out.png"

    assert presenter.save_to_file(out) is True
    assert out.exists()
    mock_view.show_error.assert_not_called()


def test_save_to_bad_destination_reports_error(presenter, mock_view, png_path, tmp_path):
    presenter.load_image_from_path(png_path)
    presenter.save_to_file(tmp_path / "missing" / "out.png")
    mock_view.show_error.assert_called_once()
    assert mock_view.show_error.call_args.args[0] == "Export Failed"


def test_shuffle_without_image_disables_controls(presenter, mock_view):
    presenter.shuffle()
    mock_view.set_controls_enabled.assert_called_once_with(False)
    mock_view.refresh_canvas.assert_called_once()


def test_slider_changes_refresh_canvas(presenter, mock_view, png_path):
    presenter.load_image_from_path(png_path)
    mock_view.refresh_canvas.reset_mock()

    presenter.count_changed()
    presenter.sizes_changed()
    assert mock_view.refresh_canvas.call_count == 2


def test_clear_image_resets_session(presenter, mock_view, png_path):
    presenter.load_image_from_path(png_path)
    presenter.clear_image()

    assert presenter.source is None
    assert mock_view.session.rectangles == []
    mock_view.clear_source.assert_called_once()
    mock_view.set_controls_enabled.assert_called_with(False)
