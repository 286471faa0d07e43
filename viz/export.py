from __future__ import annotations

import io

import numpy as np
from PIL import Image


def noise_to_gray(z: np.ndarray) -> np.ndarray:
    """Map noise values to 8-bit grey levels as ``int(255 * v)``.

    Noise output is not clamped, so values are clipped to [0, 1] first.
    """

    z = np.asarray(z, dtype=np.float64)
    return (np.clip(z, 0.0, 1.0) * 255.0).astype(np.uint8)


def grid_overlay(img: np.ndarray, *, px_per_grid: int, value: int = 0) -> np.ndarray:
    """Return a copy of ``img`` with lattice lines every ``px_per_grid`` pixels."""

    img = np.array(img, copy=True)
    if img.ndim != 2:
        raise ValueError("expected a 2D array")
    step = int(px_per_grid)
    if step <= 0:
        raise ValueError("px_per_grid must be > 0")

    img[::step, :] = value
    img[:, ::step] = value
    return img


def gray_to_png_bytes(img: np.ndarray) -> bytes:
    img = np.asarray(img)
    if img.ndim != 2:
        raise ValueError("expected a 2D array")

    out = io.BytesIO()
    Image.fromarray(img.astype(np.uint8)).save(out, format="PNG")
    return out.getvalue()


def array_to_png_bytes(z: np.ndarray, *, normalize: bool = False) -> bytes:
    """Convert a 2D noise array to an 8-bit grayscale PNG.

    By default values are read as [0, 1] brightness. With ``normalize`` they
    are min/max stretched first; constant arrays then become all zeros.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    if normalize:
        zmin = float(np.min(z))
        zmax = float(np.max(z))
        z = np.zeros_like(z) if zmax == zmin else (z - zmin) / (zmax - zmin)

    return gray_to_png_bytes(noise_to_gray(z))


def array_to_npy_bytes(z: np.ndarray) -> bytes:
    z = np.asarray(z)
    out = io.BytesIO()
    np.save(out, z)
    return out.getvalue()
