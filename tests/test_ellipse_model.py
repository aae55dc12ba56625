"""Test bounding box → ellipse model mapping and degenerate runs.

Tests for src.coverage_oracle.ellipse_model and geometry:
    - Semi-axes are (span - 1) / 2, center is origin + semi-axis
    - Degenerate boxes have no model
    - degenerate_run() returns exact lines, empty sets, or None
    - round_half_up() ties go toward +inf
    - ClipRect inclusive bounds and intersection

Run:
    pytest tests/test_ellipse_model.py -v
"""

import pytest

from src.coverage_oracle.ellipse_model import EllipseModel, degenerate_run, is_degenerate
from src.coverage_oracle.geometry import ClipRect, Pixel, round_half_up


def test_model_from_bbox():
    model = EllipseModel.from_bbox(0, 0, 11, 6)
    assert model.rx == 5.0
    assert model.ry == 2.5
    assert model.cx == 5.0
    assert model.cy == 2.5
    assert model.max_radius == 5.0


def test_model_from_offset_bbox():
    model = EllipseModel.from_bbox(-3, 10, 2, 9)
    assert model.rx == 0.5
    assert model.ry == 4.0
    assert model.cx == -2.5
    assert model.cy == 14.0


def test_model_is_immutable():
    model = EllipseModel.from_bbox(0, 0, 5, 5)
    with pytest.raises(AttributeError):
        model.rx = 3.0


@pytest.mark.parametrize("x_span, y_span", [(1, 5), (5, 1), (0, 5), (-2, 4), (1, 1)])
def test_model_rejects_degenerate(x_span, y_span):
    assert is_degenerate(x_span, y_span)
    with pytest.raises(ValueError, match="Degenerate"):
        EllipseModel.from_bbox(0, 0, x_span, y_span)


def test_degenerate_vertical_run():
    assert degenerate_run(2, 7, 1, 4) == {(2, 7), (2, 8), (2, 9), (2, 10)}


def test_degenerate_horizontal_run():
    assert degenerate_run(-1, 3, 3, 1) == {(-1, 3), (0, 3), (1, 3)}


def test_degenerate_single_point():
    assert degenerate_run(4, 4, 1, 1) == {(4, 4)}


@pytest.mark.parametrize("x_span, y_span", [(0, 0), (0, 7), (7, 0), (-1, 7), (7, -5), (1, 0)])
def test_degenerate_empty(x_span, y_span):
    assert degenerate_run(0, 0, x_span, y_span) == set()


def test_regular_box_is_not_degenerate():
    assert degenerate_run(0, 0, 2, 2) is None
    assert not is_degenerate(2, 2)


@pytest.mark.parametrize("value, expected", [
    (0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (9.5, 10),
    (-0.5, 0), (-1.5, -1), (-2.5, -2), (-2.51, -3), (7.0, 7),
    (0.49999999999999994, 0), (-0.5000000000000001, -1), (4503599627370497.0, 4503599627370497),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_pixel_equals_tuple():
    assert Pixel(1, 2) == (1, 2)
    assert hash(Pixel(1, 2)) == hash((1, 2))
    assert {Pixel(1, 2), (1, 2)} == {(1, 2)}


def test_clip_rect_inclusive_bounds():
    clip = ClipRect(2, 3, 4, 2)
    assert clip.x_max == 5
    assert clip.y_max == 4
    assert clip.contains(2, 3)
    assert clip.contains(5, 4)
    assert not clip.contains(6, 4)
    assert not clip.contains(5, 5)
    assert not clip.contains(1, 3)


def test_clip_rect_empty():
    clip = ClipRect(0, 0, 0, 10)
    assert clip.is_empty
    assert not clip.contains(0, 0)


def test_clip_rect_negative_span():
    with pytest.raises(ValueError):
        ClipRect(0, 0, -1, 3)


def test_clip_rect_intersected():
    a = ClipRect(0, 0, 10, 10)
    assert a.intersected(ClipRect(5, -2, 10, 4)) == ClipRect(5, 0, 5, 2)
    assert a.intersected(None) == a
    assert a.intersected(ClipRect(20, 20, 3, 3)).is_empty


def test_clip_rect_bounding():
    assert ClipRect.bounding([(1, 5), (3, 2), (2, 2)]) == ClipRect(1, 2, 3, 4)
    assert ClipRect.bounding([]) is None
