"""Integer pixel primitives shared by the oracle and the footprint checker.

Provides:
    - Pixel: (x, y) value type, interchangeable with plain tuples
    - ClipRect: integer rectangle with inclusive [x, x_max] × [y, y_max] bounds
    - round_half_up(): the single rounding convention of the package

Conventions:
    - Image frame, top-left origin, +Y down
    - A rectangle of span 0 is empty and contains nothing
    - An unbounded clip is represented by None
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional


class Pixel(NamedTuple):
    """Integer pixel coordinates; equality and hashing by value."""
    x: int
    y: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    The tie test uses the exact fractional part, so values just below a half
    (e.g. 0.49999999999999994, where value + 0.5 rounds to 1.0) round down.

    >>> round_half_up(2.5), round_half_up(-2.5), round_half_up(-2.6)
    (3, -2, -3)
    """
    floor = math.floor(value)
    return int(floor) + (1 if value - floor >= 0.5 else 0)


@dataclass(frozen=True)
class ClipRect:
    """Integer rectangle (x, y, x_span, y_span).

    Bounds are inclusive: a pixel (px, py) is contained iff
    x <= px <= x_max and y <= py <= y_max, with x_max = x + x_span - 1.
    """
    x: int
    y: int
    x_span: int
    y_span: int

    def __post_init__(self):
        if self.x_span < 0 or self.y_span < 0:
            raise ValueError(
                f"ClipRect spans must be >= 0, got ({self.x_span}, {self.y_span})"
            )

    @property
    def x_max(self) -> int:
        return self.x + self.x_span - 1

    @property
    def y_max(self) -> int:
        return self.y + self.y_span - 1

    @property
    def is_empty(self) -> bool:
        return self.x_span == 0 or self.y_span == 0

    def contains(self, x: int, y: int) -> bool:
        return (self.x <= x <= self.x_max) and (self.y <= y <= self.y_max)

    def intersected(self, other: Optional['ClipRect']) -> 'ClipRect':
        """Intersection with another rectangle; None means unbounded."""
        if other is None:
            return self
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        x_span = max(0, min(self.x_max, other.x_max) - x + 1)
        y_span = max(0, min(self.y_max, other.y_max) - y + 1)
        if x_span == 0 or y_span == 0:
            return ClipRect(x, y, 0, 0)
        return ClipRect(x, y, x_span, y_span)

    @classmethod
    def bounding(cls, pixels) -> Optional['ClipRect']:
        """Smallest rectangle containing all pixels, None for an empty set."""
        pixels = list(pixels)
        if not pixels:
            return None
        xs = [p[0] for p in pixels]
        ys = [p[1] for p in pixels]
        return cls(min(xs), min(ys), max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)


def clip_contains(clip: Optional[ClipRect], x: int, y: int) -> bool:
    """Membership test where a None clip contains every pixel."""
    return clip is None or clip.contains(x, y)
