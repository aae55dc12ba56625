"""Angular sampling and radial perturbation of the ideal ellipse outline.

AngularSampler:
    step = atan(1 / max_r) / 2 moves a sample by about half a pixel of arc at
    the largest radius. The step is then shrunk so that 2π is an exact multiple
    of it, which gives uniform spacing and a last sample back at angle 0.

RadialPerturber:
    For each angle, three nested ellipses of semi-axes (rx + k/2, ry + k/2),
    k in {-1, 0, 1}, are sampled. The sampled point is rounded to a pixel and
    the offset of that pixel's center from the ellipse center is what the
    classifier sees. Scanning half a pixel on each side of the outline means a
    boundary pixel is visited even when the nominal sample lands on its
    neighbor.
"""

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple

from .ellipse_model import EllipseModel
from .geometry import Pixel, round_half_up

TWO_PI = 2.0 * math.pi

# Radius offsets in pixels: inside, on and outside the outline
RADIAL_OFFSETS = (-0.5, 0.0, 0.5)


@dataclass(frozen=True)
class AngularSampler:
    step_count: int
    step_rad: float

    @classmethod
    def for_radius(cls, max_r: float) -> 'AngularSampler':
        """Sampler for an ellipse whose largest semi-axis is max_r.

        Raises
        ------
        ValueError
            If max_r <= 0 (degenerate ellipses never reach the sampler)
        """
        if not max_r > 0.0:
            raise ValueError(f"Angular sampling needs a positive radius, got {max_r}")
        step_rad = math.atan(1.0 / max_r) * 0.5
        step_count = int(math.ceil(TWO_PI / step_rad))
        return cls(step_count=step_count, step_rad=TWO_PI / step_count)

    @classmethod
    def for_model(cls, model: EllipseModel) -> 'AngularSampler':
        return cls.for_radius(model.max_radius)

    def __len__(self) -> int:
        return self.step_count + 1

    def angles(self) -> Iterator[float]:
        """Yield i * step_rad for i in [0, step_count] (both ends included)."""
        for i in range(self.step_count + 1):
            yield i * self.step_rad


class Candidate(NamedTuple):
    """Rounded sample pixel and its center offset from the ellipse center."""
    pixel: Pixel
    dx: float
    dy: float
    radial_offset: float


class RadialPerturber:
    """Candidate pixels at radii r - 0.5, r and r + 0.5 for a given angle."""

    def __init__(self, model: EllipseModel):
        self.model = model

    def candidates(self, angle_rad: float) -> Iterator[Candidate]:
        model = self.model
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        for offset in RADIAL_OFFSETS:
            theo_dx = (model.rx + offset) * cos_a
            theo_dy = (model.ry + offset) * sin_a
            tmp_x = round_half_up(model.cx + theo_dx)
            tmp_y = round_half_up(model.cy + theo_dy)
            yield Candidate(
                pixel=Pixel(tmp_x, tmp_y),
                dx=tmp_x - model.cx,
                dy=tmp_y - model.cy,
                radial_offset=offset,
            )
