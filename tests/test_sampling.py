"""Test angular sampling and radial perturbation.

Tests for src.coverage_oracle.sampling:
    - Step is at most atan(1/max_r)/2 and divides 2π exactly
    - step_count + 1 angles from 0 to 2π inclusive
    - Step count grows linearly with the radius
    - Zero radius is rejected
    - Three candidates per angle at radii r - 0.5, r, r + 0.5
    - Classifier offsets come from the rounded pixel, not the raw sample

Run:
    pytest tests/test_sampling.py -v
"""

import math

import pytest

from src.coverage_oracle.ellipse_model import EllipseModel
from src.coverage_oracle.sampling import AngularSampler, RADIAL_OFFSETS, RadialPerturber


@pytest.mark.parametrize("max_r", [0.5, 1.0, 2.5, 5.0, 17.0, 250.0])
def test_step_bounded_and_exact_multiple(max_r):
    sampler = AngularSampler.for_radius(max_r)
    assert sampler.step_rad <= math.atan(1.0 / max_r) * 0.5 + 1e-15
    assert sampler.step_count * sampler.step_rad == pytest.approx(2 * math.pi, rel=1e-12)


def test_step_count_for_radius_5():
    sampler = AngularSampler.for_radius(5.0)
    # atan(0.2) / 2 ≈ 0.0987 rad → ceil(63.66) steps
    assert sampler.step_count == 64
    assert sampler.step_rad == pytest.approx(2 * math.pi / 64)


def test_angles_cover_full_turn():
    sampler = AngularSampler.for_radius(3.0)
    angles = list(sampler.angles())
    assert len(angles) == sampler.step_count + 1 == len(sampler)
    assert angles[0] == 0.0
    assert angles[-1] == pytest.approx(2 * math.pi)
    steps = [b - a for a, b in zip(angles, angles[1:])]
    assert max(steps) == pytest.approx(min(steps))


def test_step_count_linear_in_radius():
    small = AngularSampler.for_radius(10.0).step_count
    large = AngularSampler.for_radius(100.0).step_count
    assert 9 < large / small < 11
    # ≈ 4π per unit of radius for large radii
    assert large == pytest.approx(4 * math.pi * 100.0, rel=0.01)


@pytest.mark.parametrize("max_r", [0.0, -1.0])
def test_zero_radius_rejected(max_r):
    with pytest.raises(ValueError, match="positive radius"):
        AngularSampler.for_radius(max_r)


def test_sampler_for_model_uses_largest_axis():
    model = EllipseModel.from_bbox(0, 0, 5, 21)
    assert AngularSampler.for_model(model) == AngularSampler.for_radius(10.0)


def test_candidates_at_angle_zero():
    model = EllipseModel.from_bbox(0, 0, 11, 6)
    candidates = list(RadialPerturber(model).candidates(0.0))

    assert [c.radial_offset for c in candidates] == list(RADIAL_OFFSETS)
    # cx + 4.5 = 9.5 rounds up to 10, cx + 5.5 = 10.5 rounds up to 11, cy = 2.5 → 3
    assert [c.pixel for c in candidates] == [(10, 3), (10, 3), (11, 3)]
    assert [c.dx for c in candidates] == [5.0, 5.0, 6.0]
    assert all(c.dy == 0.5 for c in candidates)


def test_candidate_offsets_match_rounded_pixel():
    model = EllipseModel.from_bbox(3, -4, 14, 9)
    perturber = RadialPerturber(model)
    for angle in AngularSampler.for_model(model).angles():
        for c in perturber.candidates(angle):
            assert c.dx == c.pixel.x - model.cx
            assert c.dy == c.pixel.y - model.cy
            assert isinstance(c.pixel.x, int) and isinstance(c.pixel.y, int)


def test_candidates_stay_near_outline():
    model = EllipseModel.from_bbox(0, 0, 21, 13)
    perturber = RadialPerturber(model)
    for angle in AngularSampler.for_model(model).angles():
        for c in perturber.candidates(angle):
            # Perturbed radius ≤ r + 0.5, rounding adds ≤ 0.5 per axis
            assert abs(c.dx) <= model.rx + 1.0
            assert abs(c.dy) <= model.ry + 1.0
