"""Theoretical coverage oracle for oval rasterizers.

Modules:
    - geometry: Pixel, ClipRect, rounding convention
    - ellipse_model: bounding box → center and semi-axes, degenerate runs
    - sampling: angular steps and the three perturbed radii
    - classifier: polar inside test and 3×3 boundary test
    - accumulator: clip-aware pixel set
    - oracle: compute_oval_boundary_pixels() entry point
    - footprint: painted-footprint checks and 8-connectivity
    - grid_render: magnified grid / ASCII views
    - suite: YAML-described batches with golden expectations
"""

from .accumulator import CoverageAccumulator
from .ellipse_model import EllipseModel, degenerate_run
from .footprint import (
    FootprintReport,
    compare_footprint,
    connected_components,
    count_dangling_pixels,
    is_8_connected,
)
from .geometry import ClipRect, Pixel, round_half_up
from .oracle import compute_oval_boundary_pixels
from .sampling import AngularSampler, RadialPerturber

__all__ = [
    'AngularSampler',
    'ClipRect',
    'CoverageAccumulator',
    'EllipseModel',
    'FootprintReport',
    'Pixel',
    'RadialPerturber',
    'compare_footprint',
    'compute_oval_boundary_pixels',
    'connected_components',
    'count_dangling_pixels',
    'degenerate_run',
    'is_8_connected',
    'round_half_up',
]
