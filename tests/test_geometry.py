import pytest

from square_overlay.geometry import (
    Extent,
    Rectangle,
    clamp_position,
    clamp_size,
    contained,
    contains_point,
    in_handle_zone,
    overlaps,
)


def test_overlap_requires_positive_area():
    a = Rectangle(0, 0, 10, 10)
    assert overlaps(a, Rectangle(5, 5, 10, 10))
    # shared edge only
    assert not overlaps(a, Rectangle(10, 0, 10, 10))
    assert not overlaps(a, Rectangle(0, 10, 10, 10))
    # shared corner only
    assert not overlaps(a, Rectangle(10, 10, 5, 5))
    assert not overlaps(a, Rectangle(50, 50, 5, 5))


def test_overlap_is_symmetric_and_detects_containment():
    outer = Rectangle(0, 0, 100, 100)
    inner = Rectangle(40, 40, 5, 5)
    assert overlaps(outer, inner)
    assert overlaps(inner, outer)


def test_aspect_ratio_captured_once():
    rect = Rectangle(0, 0, 33, 50)
    assert rect.aspect_ratio == pytest.approx(0.66)
    rect.width = 10
    assert rect.aspect_ratio == pytest.approx(0.66)


def test_contains_point_is_inclusive():
    rect = Rectangle(10, 10, 20, 20)
    assert contains_point(rect, 10, 10)
    assert contains_point(rect, 30, 30)
    assert not contains_point(rect, 30.5, 20)


def test_handle_zone_surrounds_bottom_right_corner():
    rect = Rectangle(10, 10, 50, 50)
    assert in_handle_zone(rect, 60, 60, 10)
    assert in_handle_zone(rect, 70, 50, 10)
    assert in_handle_zone(rect, 50, 70, 10)
    assert not in_handle_zone(rect, 71, 60, 10)
    assert not in_handle_zone(rect, 30, 30, 10)


def test_clamp_position_keeps_size():
    extent = Extent(400, 300)
    clamped = clamp_position(Rectangle(390, -20, 50, 50), extent)
    assert clamped.as_tuple() == (350, 0, 50, 50)
    assert contained(clamped, extent)


def test_clamp_position_pins_oversized_rect_to_origin():
    clamped = clamp_position(Rectangle(30, 30, 500, 50), Extent(400, 300))
    assert clamped.x == 0
    assert clamped.y == 30


def test_clamp_size_keeps_origin_and_aspect():
    rect = Rectangle(350, 10, 33, 50)
    clamped = clamp_size(Rectangle(350, 10, 66, 100, aspect_ratio=rect.aspect_ratio), Extent(400, 300))
    assert (clamped.x, clamped.y) == (350, 10)
    assert clamped.right <= 400
    assert clamped.width / clamped.height == pytest.approx(0.66)


def test_clamp_size_shrinks_both_sides_by_tightest_axis():
    extent = Extent(400, 300)
    assert clamp_size(Rectangle(380, 280, 50, 50), extent).as_tuple() == (380, 280, 20, 20)
    # only the bottom edge overflows, the width still shrinks with it
    assert clamp_size(Rectangle(380, 200, 10, 200), extent).as_tuple() == (380, 200, 5, 100)


def test_clamp_size_leaves_fitting_rect_alone():
    rect = Rectangle(0, 0, 40, 40)
    assert clamp_size(rect, Extent(400, 300)) == rect
