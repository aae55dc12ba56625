"""Boundary classification of candidate pixels.

Inside test (polar form):
    The local radius of the ellipse in the direction of (dx, dy) is the norm of
    (rx cos t, ry sin t) with t = atan2(dy * rx, dx * ry), the parametric angle
    whose ellipse point lies on the ray through (dx, dy). A point is strictly
    inside iff its distance to the center is below that radius. Unlike
    dx²/rx² + dy²/ry² < 1 this never divides by a semi-axis.

Boundary test:
    A pixel is on the boundary iff its 3×3 grid of sub-samples at half-pixel
    offsets is neither all inside nor all outside.

Sub-samples lying exactly on the outline may land on either side due to
floating-point rounding. The dense angular sampling and the three radii
visit neighboring pixels too, so a single misclassified sub-sample does not
open a gap in the final set.
"""

import math
from typing import Callable, Optional

# Half-pixel offsets of the 3×3 sub-sample grid
SUBSAMPLE_OFFSETS = (-0.5, 0.0, 0.5)
SUBSAMPLE_COUNT = len(SUBSAMPLE_OFFSETS) ** 2


def local_radius(rx: float, ry: float, dx: float, dy: float) -> float:
    """Distance from center to the outline along the ray through (dx, dy)."""
    angle = math.atan2(dy * rx, dx * ry)
    ox = rx * math.cos(angle)
    oy = ry * math.sin(angle)
    return math.sqrt(ox * ox + oy * oy)


def is_strictly_inside(rx: float, ry: float, dx: float, dy: float) -> bool:
    """True if the offset (dx, dy) from the center is strictly inside the ellipse."""
    return math.sqrt(dx * dx + dy * dy) < local_radius(rx, ry, dx, dy)


def count_inside_subsamples(
    rx: float,
    ry: float,
    dx: float,
    dy: float,
    trace: Optional[Callable[[str], None]] = None
) -> int:
    """Number of the 9 sub-samples around pixel offset (dx, dy) strictly inside.

    Parameters
    ----------
    rx, ry : float
        Semi-axes of the ellipse, both > 0
    dx, dy : float
        Offset of the pixel center from the ellipse center
    trace : callable, optional
        Receives one line per sub-sample with its local radius

    Returns
    -------
    int
        Inside count in [0, 9]
    """
    inside_count = 0
    for u in SUBSAMPLE_OFFSETS:
        for v in SUBSAMPLE_OFFSETS:
            sx = dx + u
            sy = dy + v
            inside = is_strictly_inside(rx, ry, sx, sy)
            if trace is not None:
                trace(
                    f"sub-sample dx={sx} dy={sy} local_r={local_radius(rx, ry, sx, sy)} inside={inside}"
                )
            if inside:
                inside_count += 1
    return inside_count


def is_boundary_count(inside_count: int) -> bool:
    return 0 < inside_count < SUBSAMPLE_COUNT


def is_boundary_pixel(
    rx: float,
    ry: float,
    dx: float,
    dy: float,
    trace: Optional[Callable[[str], None]] = None
) -> bool:
    """True if the ideal outline passes through the pixel centered at (dx, dy)."""
    return is_boundary_count(count_inside_subsamples(rx, ry, dx, dy, trace))
