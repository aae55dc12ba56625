"""Theoretical pixel coverage of an ideal oval outline.

Given the integer bounding box of an axis-aligned ellipse, computes the set of
pixels the mathematically ideal outline passes through, without reference to
any rasterizer. Used as the expected footprint when testing oval drawing.

Pipeline:
    EllipseModel.from_bbox() → AngularSampler → RadialPerturber (3 radii)
        → classifier (3×3 sub-samples) → CoverageAccumulator → Set[Pixel]

Degenerate boxes (a span <= 1) bypass the pipeline and are resolved exactly.

Cost is linear in the largest semi-axis: step_count ≈ 4π·max_r.
The function is pure and holds no shared state, so it can be called from
several threads at once.

Usage:
    from src.coverage_oracle import ClipRect, compute_oval_boundary_pixels

    pixels = compute_oval_boundary_pixels(None, 0, 0, 11, 6)
    clipped = compute_oval_boundary_pixels(ClipRect(0, 0, 6, 6), 0, 0, 11, 6)
"""

import logging
import math
from typing import Callable, Optional, Set

from .accumulator import CoverageAccumulator
from .classifier import count_inside_subsamples, is_boundary_count
from .ellipse_model import EllipseModel, degenerate_run
from .geometry import ClipRect, Pixel
from .sampling import AngularSampler, RadialPerturber

logger = logging.getLogger(__name__)

TraceFn = Callable[[str], None]


def compute_oval_boundary_pixels(
    clip: Optional[ClipRect],
    x: int,
    y: int,
    x_span: int,
    y_span: int,
    *,
    trace: Optional[TraceFn] = None
) -> Set[Pixel]:
    """Pixels touched by the ideal outline of the oval inscribed in a box.

    Parameters
    ----------
    clip : ClipRect or None
        Pixels outside this rectangle are dropped; None means unbounded
    x, y : int
        Top-left pixel of the bounding box
    x_span, y_span : int
        Bounding box spans in pixels; values <= 0 give an empty set
    trace : callable, optional
        Receives diagnostic lines for every sample on the nominal radius

    Returns
    -------
    Set[Pixel]
        Boundary pixels, no meaningful order

    Notes
    -----
    x_span == 1 (resp. y_span == 1) yields the exact vertical (resp.
    horizontal) run of the box, filtered by the clip.
    """
    accumulator = CoverageAccumulator(clip)

    run = degenerate_run(x, y, x_span, y_span)
    if run is not None:
        accumulator.add_all(run)
        logger.debug(
            "Degenerate oval box (%d, %d, %d, %d): %d pixels",
            x, y, x_span, y_span, len(accumulator)
        )
        return accumulator.result()

    model = EllipseModel.from_bbox(x, y, x_span, y_span)
    sampler = AngularSampler.for_model(model)
    perturber = RadialPerturber(model)

    if trace is not None:
        trace(f"cx = {model.cx}, cy = {model.cy}, rx = {model.rx}, ry = {model.ry}")
        trace(f"step_rad = {sampler.step_rad}, step_count = {sampler.step_count}")

    for i, angle in enumerate(sampler.angles()):
        for candidate in perturber.candidates(angle):
            # Tracing only the nominal radius keeps the output readable
            sample_trace = trace if candidate.radial_offset == 0.0 else None
            if sample_trace is not None:
                sample_trace(
                    f"i = {i}, ang_deg = {math.degrees(angle):.6f}, "
                    f"pixel = ({candidate.pixel.x}, {candidate.pixel.y}), "
                    f"dx = {candidate.dx}, dy = {candidate.dy}"
                )
            inside_count = count_inside_subsamples(
                model.rx, model.ry, candidate.dx, candidate.dy, sample_trace
            )
            if sample_trace is not None:
                sample_trace(f"inside_count = {inside_count}")
            if is_boundary_count(inside_count):
                accumulator.add(candidate.pixel.x, candidate.pixel.y)

    logger.debug(
        "Oval box (%d, %d, %d, %d): %d steps, %d pixels, %d clipped candidates",
        x, y, x_span, y_span, sampler.step_count,
        len(accumulator), accumulator.rejected_count
    )
    return accumulator.result()
