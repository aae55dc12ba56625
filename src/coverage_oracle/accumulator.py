"""Clip-aware collection of boundary pixels."""

from typing import Iterable, Optional, Set

from .geometry import ClipRect, Pixel, clip_contains


class CoverageAccumulator:
    """Set of pixels, filtered by an optional clip rectangle (None = unbounded).

    Insertion order is irrelevant and duplicates collapse, so the result does
    not depend on the order in which candidates are classified.
    """

    def __init__(self, clip: Optional[ClipRect] = None):
        self.clip = clip
        self._pixels: Set[Pixel] = set()
        self.rejected_count = 0

    def add(self, x: int, y: int) -> bool:
        """Insert (x, y) if inside the clip; returns whether it was kept."""
        if not clip_contains(self.clip, x, y):
            self.rejected_count += 1
            return False
        self._pixels.add(Pixel(x, y))
        return True

    def add_all(self, pixels: Iterable) -> None:
        for x, y in pixels:
            self.add(x, y)

    def __len__(self) -> int:
        return len(self._pixels)

    def __contains__(self, pixel) -> bool:
        return tuple(pixel) in self._pixels

    def result(self) -> Set[Pixel]:
        """Copy of the accumulated pixel set."""
        return set(self._pixels)
