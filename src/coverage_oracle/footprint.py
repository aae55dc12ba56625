"""Comparison of a rasterizer's painted footprint against the oracle.

A drawing test renders an oval with the code under test, counts how many times
each pixel was painted, and checks that map against the theoretical coverage:
    - exceeding: painted but not allowed (not in the oracle set)
    - out_of_clip: painted outside the clip or the clipped bounding box
    - missing: required but not painted (only pixels inside the clip count)
    - multipainted: painted more than once
    - dangling: pixel with at most one neighbor, or with exactly two neighbors
      that touch each other, away from the clipped bounding box border. Such
      pixels indicate a gap or a spur along the curve.

Also provides the 8-connectivity helpers used to check that a pixel set forms
a single closed loop.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .geometry import ClipRect, Pixel, clip_contains

logger = logging.getLogger(__name__)

_NEIGHBOR_OFFSETS = tuple(
    (i, j) for j in (-1, 0, 1) for i in (-1, 0, 1) if (i, j) != (0, 0)
)


def neighbors8(pixel: Tuple[int, int], pixels: Set) -> Set[Pixel]:
    """8-adjacent pixels of `pixel` present in `pixels`."""
    x, y = pixel
    return {
        Pixel(x + i, y + j)
        for i, j in _NEIGHBOR_OFFSETS
        if (x + i, y + j) in pixels
    }


def are_4_adjacent(p1: Tuple[int, int], p2: Tuple[int, int]) -> bool:
    """True if both pixels share a side."""
    return abs(p1[0] - p2[0]) + abs(p1[1] - p2[1]) == 1


def connected_components(pixels: Iterable) -> List[Set[Pixel]]:
    """Split a pixel set into 8-connected components (largest first)."""
    remaining = {Pixel(*p) for p in pixels}
    components = []
    while remaining:
        seed = remaining.pop()
        component = {seed}
        queue = deque([seed])
        while queue:
            current = queue.popleft()
            for n in neighbors8(current, remaining):
                remaining.discard(n)
                component.add(n)
                queue.append(n)
        components.append(component)
    components.sort(key=len, reverse=True)
    return components


def is_8_connected(pixels: Iterable) -> bool:
    """True for a non-empty set forming a single 8-connected component."""
    return len(connected_components(pixels)) == 1


def count_dangling_pixels(clipped_bbox: Optional[ClipRect], pixels: Iterable) -> int:
    """Number of dangling pixels not lying on the clipped bounding box border.

    Parameters
    ----------
    clipped_bbox : ClipRect or None
        Pixels on its border are skipped (a clip legitimately cuts the curve
        there); None skips no pixel
    pixels : Iterable
        Painted pixel coordinates
    """
    pixel_set = {Pixel(*p) for p in pixels}
    dangling = 0
    for pixel in pixel_set:
        if clipped_bbox is not None and (
            pixel.x in (clipped_bbox.x, clipped_bbox.x_max)
            or pixel.y in (clipped_bbox.y, clipped_bbox.y_max)
        ):
            continue
        neighbors = neighbors8(pixel, pixel_set)
        if len(neighbors) <= 1:
            logger.debug("dangling: %s (%d neighbor)", pixel, len(neighbors))
            dangling += 1
        elif len(neighbors) == 2:
            p1, p2 = sorted(neighbors)
            if are_4_adjacent(p1, p2):
                logger.debug("dangling: %s (%s and %s adjacent)", pixel, p1, p2)
                dangling += 1
    return dangling


@dataclass
class FootprintReport:
    """Outcome of compare_footprint(); every set holds offending pixels."""
    exceeding: Set[Pixel] = field(default_factory=set)
    out_of_clip: Set[Pixel] = field(default_factory=set)
    missing: Set[Pixel] = field(default_factory=set)
    multipainted: Set[Pixel] = field(default_factory=set)
    dangling_count: int = 0

    def is_valid(self, allow_multipainted: bool = False, max_dangling: int = 0) -> bool:
        return (
            not self.exceeding
            and not self.out_of_clip
            and not self.missing
            and (allow_multipainted or not self.multipainted)
            and self.dangling_count <= max_dangling
        )

    def summary(self) -> Dict[str, int]:
        return {
            'exceeding': len(self.exceeding),
            'out_of_clip': len(self.out_of_clip),
            'missing': len(self.missing),
            'multipainted': len(self.multipainted),
            'dangling': self.dangling_count,
        }


def compare_footprint(
    allowed: Iterable,
    painted_count_by_pixel: Mapping[Tuple[int, int], int],
    clip: Optional[ClipRect] = None,
    bbox: Optional[ClipRect] = None,
    required: Optional[Iterable] = None
) -> FootprintReport:
    """Check painted pixel counts against allowed/required pixel sets.

    Parameters
    ----------
    allowed : Iterable
        Pixels the drawing may paint (typically the oracle output)
    painted_count_by_pixel : Mapping
        Paint count per pixel; unpainted pixels must be absent or 0
    clip : ClipRect, optional
        Clip used for drawing; None means unbounded
    bbox : ClipRect, optional
        Drawing bounding box; painting outside it counts as out of clip
    required : Iterable, optional
        Pixels that must be painted when inside the clip

    Returns
    -------
    FootprintReport
    """
    allowed_set = {Pixel(*p) for p in allowed}
    painted = {Pixel(*p): c for p, c in painted_count_by_pixel.items() if c > 0}

    clipped_bbox = bbox.intersected(clip) if bbox is not None else clip

    report = FootprintReport()
    for pixel, count in painted.items():
        if not clip_contains(clipped_bbox, pixel.x, pixel.y):
            report.out_of_clip.add(pixel)
        elif pixel not in allowed_set:
            report.exceeding.add(pixel)
        if count > 1:
            report.multipainted.add(pixel)

    for pixel in required or ():
        pixel = Pixel(*pixel)
        if clip_contains(clipped_bbox, pixel.x, pixel.y) and pixel not in painted:
            report.missing.add(pixel)

    report.dangling_count = count_dangling_pixels(clipped_bbox, painted.keys())

    if not report.is_valid():
        logger.debug("Footprint issues: %s", report.summary())
    return report
