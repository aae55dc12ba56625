"""Test the polar inside test and the 3×3 boundary classification.

Tests for src.coverage_oracle.classifier:
    - Center and near-center points are inside, far points outside
    - Points exactly on the outline are not strictly inside
    - Agreement with the implicit equation away from the outline
    - Sub-sample counts for fully inside, fully outside and straddling pixels
    - Trace callback receives one line per sub-sample

Run:
    pytest tests/test_classifier.py -v
"""

import numpy as np
import pytest

from src.coverage_oracle.classifier import (
    SUBSAMPLE_COUNT,
    count_inside_subsamples,
    is_boundary_count,
    is_boundary_pixel,
    is_strictly_inside,
    local_radius,
)


@pytest.mark.parametrize("dx, dy, expected", [
    (0.0, 0.0, True),
    (4.9, 0.0, True),
    (-4.9, 0.0, True),
    (0.0, 2.4, True),
    (0.0, -2.4, True),
    (5.0, 0.0, False),
    (-5.0, 0.0, False),
    (0.0, 2.6, False),
    (5.5, 0.5, False),
    (3.0, 2.1, False),
    (3.0, 1.5, True),
])
def test_is_strictly_inside_11x6(dx, dy, expected):
    assert is_strictly_inside(5.0, 2.5, dx, dy) is expected


def test_local_radius_on_axes():
    assert local_radius(5.0, 2.5, 1.0, 0.0) == pytest.approx(5.0)
    assert local_radius(5.0, 2.5, 0.0, 1.0) == pytest.approx(2.5)
    assert local_radius(3.0, 3.0, 1.0, 1.0) == pytest.approx(3.0)


def test_matches_implicit_equation_away_from_outline():
    rng = np.random.default_rng(123456789)
    rx, ry = 7.5, 3.0
    for dx, dy in rng.uniform(-10.0, 10.0, size=(500, 2)):
        value = (dx / rx) ** 2 + (dy / ry) ** 2
        if abs(value - 1.0) < 1e-6:
            continue
        assert is_strictly_inside(rx, ry, dx, dy) is bool(value < 1.0)


def test_count_fully_inside():
    assert count_inside_subsamples(5.0, 2.5, 0.0, 0.0) == SUBSAMPLE_COUNT == 9


def test_count_fully_outside():
    assert count_inside_subsamples(5.0, 2.5, 6.0, 0.0) == 0
    assert count_inside_subsamples(5.0, 2.5, 0.0, -3.5) == 0


def test_count_straddling_right_end():
    # Column dx = 4.5 is inside, dx = 5.0 touches the outline, dx = 5.5 is outside
    assert count_inside_subsamples(5.0, 2.5, 5.0, 0.0) == 3


@pytest.mark.parametrize("count, expected", [(0, False), (1, True), (8, True), (9, False)])
def test_is_boundary_count(count, expected):
    assert is_boundary_count(count) is expected


def test_is_boundary_pixel():
    assert is_boundary_pixel(5.0, 2.5, 5.0, 0.0)
    assert is_boundary_pixel(5.0, 2.5, 0.0, -2.5)
    assert not is_boundary_pixel(5.0, 2.5, 0.0, 0.0)
    assert not is_boundary_pixel(5.0, 2.5, 7.0, 0.0)


def test_trace_lines():
    lines = []
    count_inside_subsamples(2.0, 2.0, 2.0, 0.0, trace=lines.append)
    assert len(lines) == SUBSAMPLE_COUNT
    assert all(line.startswith("sub-sample") for line in lines)
    assert sum("inside=True" in line for line in lines) == 3
