"""Geometric description of an axis-aligned ellipse from its pixel bounding box.

A bounding box (x, y, x_span, y_span) maps to semi-axes
rx = (x_span - 1) / 2 and ry = (y_span - 1) / 2, so the outermost pixel
centers of the box lie exactly on the ideal ellipse. Spans of 1 therefore give
a zero radius, which the general algorithm cannot handle: those boxes are
resolved exactly by degenerate_run() instead.
"""

from dataclasses import dataclass
from typing import Optional, Set

from .geometry import Pixel


@dataclass(frozen=True)
class EllipseModel:
    cx: float
    cy: float
    rx: float
    ry: float

    @classmethod
    def from_bbox(cls, x: int, y: int, x_span: int, y_span: int) -> 'EllipseModel':
        """Build the model of the ellipse inscribed in a pixel bounding box.

        Raises
        ------
        ValueError
            If the box is degenerate (a span <= 1); see degenerate_run()
        """
        if x_span <= 1 or y_span <= 1:
            raise ValueError(
                f"Degenerate bounding box spans ({x_span}, {y_span}) have no ellipse model"
            )
        rx = (x_span - 1) * 0.5
        ry = (y_span - 1) * 0.5
        return cls(cx=x + rx, cy=y + ry, rx=rx, ry=ry)

    @property
    def max_radius(self) -> float:
        return max(self.rx, self.ry)


def is_degenerate(x_span: int, y_span: int) -> bool:
    return x_span <= 1 or y_span <= 1


def degenerate_run(x: int, y: int, x_span: int, y_span: int) -> Optional[Set[Pixel]]:
    """Exact pixel set for degenerate boxes, None for regular ones.

    - Any span <= 0: empty set
    - x_span == 1: vertical run {(x, y + j) : 0 <= j < y_span}
    - y_span == 1: horizontal run {(x + i, y) : 0 <= i < x_span}
    """
    if x_span <= 0 or y_span <= 0:
        return set()
    if x_span == 1:
        return {Pixel(x, y + j) for j in range(y_span)}
    if y_span == 1:
        return {Pixel(x + i, y) for i in range(x_span)}
    return None
