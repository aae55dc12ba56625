"""Oval Oracle: theoretical pixel coverage of ideal ellipse outlines.

This package computes, independently of any rasterizer, the set of integer
pixels that the ideal outline of an axis-aligned ellipse touches. It is used
as a correctness reference when testing oval drawing code.

Architecture layers (strict one-way dependency):
    scripts/, ci/ → src/coverage_oracle/ → src/utils/

Key invariants:
    - Pixel sets are sets (no order, no duplicates)
    - Bounding boxes are integer (x, y, x_span, y_span), spans of 1 are lines
    - coverage_oracle holds no module-level mutable state; every call is independent
    - YAML-only configs, no JSON
"""

__version__ = "1.0.0"
