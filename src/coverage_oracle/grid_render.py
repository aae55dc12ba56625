"""Magnified cell-grid rendering of pixel sets for visual inspection.

Each pixel of the bounding box becomes a cell of cell_span × cell_span image
pixels; covered cells are filled, grid lines are drawn every cell_span, and the
oval center can be marked. An ASCII form is provided for terminals and logs.

Layout (cell_span = 4, 2×1 box, first pixel covered):
    +---+---+
    |###|   |
    +---+---+
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from src.utils import fs

from .geometry import ClipRect

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREEN = (0, 200, 0)
RED = (220, 0, 0)


def render_grid(
    pixels: Iterable,
    bbox: ClipRect,
    cell_span: int = 40,
    center: Optional[Tuple[float, float]] = None,
    fill_color: Tuple[int, int, int] = GREEN,
    line_color: Tuple[int, int, int] = BLACK,
    background: Tuple[int, int, int] = WHITE,
    center_color: Tuple[int, int, int] = RED
) -> np.ndarray:
    """Render covered pixels of `bbox` as filled cells of a grid.

    Parameters
    ----------
    pixels : Iterable
        Covered pixel coordinates; pixels outside bbox are ignored
    bbox : ClipRect
        Pixel area to show, one cell per pixel
    cell_span : int
        Cell size in image pixels (>= 2), default 40
    center : (float, float), optional
        Oval center in pixel coordinates, marked by a square of half-size
        cell_span // 4
    fill_color, line_color, background, center_color : RGB tuples

    Returns
    -------
    np.ndarray
        Image, shape (bbox.y_span * cell_span + 1, bbox.x_span * cell_span + 1, 3), uint8
    """
    if cell_span < 2:
        raise ValueError(f"cell_span must be >= 2, got {cell_span}")

    height = bbox.y_span * cell_span + 1
    width = bbox.x_span * cell_span + 1
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:, :] = background

    for x, y in pixels:
        if not bbox.contains(x, y):
            continue
        col = (x - bbox.x) * cell_span
        row = (y - bbox.y) * cell_span
        img[row + 1:row + cell_span, col + 1:col + cell_span] = fill_color

    img[::cell_span, :] = line_color
    img[:, ::cell_span] = line_color

    if center is not None:
        cx = int((center[0] - bbox.x + 0.5) * cell_span)
        cy = int((center[1] - bbox.y + 0.5) * cell_span)
        r = cell_span // 4
        img[max(0, cy - r):cy + r + 1, max(0, cx - r):cx + r + 1] = center_color

    return img


def format_ascii(
    pixels: Iterable,
    bbox: ClipRect,
    on: str = "#",
    off: str = "."
) -> str:
    """One text row per pixel row of bbox, top to bottom."""
    covered = {tuple(p) for p in pixels}
    rows = []
    for y in range(bbox.y, bbox.y + bbox.y_span):
        rows.append(''.join(
            on if (x, y) in covered else off
            for x in range(bbox.x, bbox.x + bbox.x_span)
        ))
    return '\n'.join(rows)


def save_grid_png(
    pixels: Iterable,
    bbox: ClipRect,
    path: Union[str, Path],
    cell_span: int = 40,
    center: Optional[Tuple[float, float]] = None
) -> Path:
    """Render the grid and write it atomically as PNG; returns the path."""
    path = Path(path)
    fs.atomic_save_image(render_grid(pixels, bbox, cell_span, center), path)
    return path
