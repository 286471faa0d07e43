from __future__ import annotations

import numpy as np

from .noise_2d import noise
from .permutation import PermutationTable


def noise_map_2d(
    table: PermutationTable,
    *,
    width: int,
    height: int,
    px_per_grid: float,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Evaluate the noise field once per pixel of a ``height x width`` image.

    Pixel ``(px, py)`` samples the field at
    ``(px / px_per_grid + offset_x, py / px_per_grid + offset_y)``, so every
    ``px_per_grid`` pixels span one lattice cell. Values are returned
    unclamped, roughly in [0, 1].
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    px_per_grid = float(px_per_grid)
    if px_per_grid <= 0.0:
        raise ValueError("px_per_grid must be > 0")

    xs = np.arange(width, dtype=np.float64) / px_per_grid + float(offset_x)
    ys = np.arange(height, dtype=np.float64) / px_per_grid + float(offset_y)
    xg, yg = np.meshgrid(xs, ys)

    z = noise(xg, yg, table)
    if dtype is not None:
        z = np.asarray(z, dtype=dtype)
    return z
