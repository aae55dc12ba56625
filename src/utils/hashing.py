"""SHA-256 hashing for golden comparisons and provenance.

Provides:
    - sha256_file(): Hash file contents (suite provenance in metadata and reports)
    - sha256_string(): Hash a string
    - hash_pixel_set(): Hash a set of (x, y) pixels independent of iteration order

Deterministic hashing:
    - Pixel sets are sorted by (y, x) and serialized as "x,y;" records
    - Results are hex strings (64 chars)

Usage:
    from src.utils import hashing
    digest = hashing.hash_pixel_set(pixels)

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
from pathlib import Path
from typing import Iterable, Tuple, Union


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents, read in chunks.

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    hasher = hashlib.sha256()
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest()


def sha256_string(s: str) -> str:
    """Compute SHA-256 hash of a UTF-8 string."""
    return hashlib.sha256(s.encode('utf-8')).hexdigest()


def hash_pixel_set(pixels: Iterable[Tuple[int, int]]) -> str:
    """Compute SHA-256 hash of a pixel set.

    Parameters
    ----------
    pixels : Iterable[Tuple[int, int]]
        Pixel coordinates; duplicates and iteration order are irrelevant

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Examples
    --------
    >>> hash_pixel_set({(0, 1), (0, 0)}) == hash_pixel_set([(0, 0), (0, 1), (0, 0)])
    True
    """
    canonical = sorted({(int(x), int(y)) for x, y in pixels}, key=lambda p: (p[1], p[0]))
    return sha256_string(''.join(f"{x},{y};" for x, y in canonical))
