"""Render settings and lenient parsing of user-supplied values.

Malformed input never raises here: it is logged and replaced by the
documented default, so a bad seed or grid size still produces an image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# None keeps Ken Perlin's canonical permutation.
DEFAULT_SEED: int | None = None
DEFAULT_PX_PER_GRID = 100
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_SHOW_GRID = False

MAX_SIDE = 8192

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def parse_seed(text: str | None, default: int | None = DEFAULT_SEED) -> int | None:
    if text is None or not str(text).strip():
        return default
    try:
        return int(str(text).strip())
    except ValueError:
        logger.warning("invalid seed %r, using %r", text, default)
        return default


def parse_int(
    text: str | None,
    default: int,
    *,
    min_value: int = 1,
    max_value: int = MAX_SIDE,
) -> int:
    if text is None or not str(text).strip():
        return default
    try:
        v = int(float(str(text).strip()))
    except (ValueError, OverflowError):
        logger.warning("invalid integer %r, using %d", text, default)
        return default
    if v < min_value or v > max_value:
        clamped = max(min_value, min(max_value, v))
        logger.warning("%d out of range [%d, %d], using %d", v, min_value, max_value, clamped)
        return clamped
    return v


def parse_bool(text: str | None, default: bool) -> bool:
    if text is None or not str(text).strip():
        return default
    raw = str(text).strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    logger.warning("invalid flag %r, using %s", text, default)
    return default


@dataclass(frozen=True)
class RenderConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    px_per_grid: int = DEFAULT_PX_PER_GRID
    seed: int | None = DEFAULT_SEED
    show_grid: bool = DEFAULT_SHOW_GRID

    @classmethod
    def from_strings(
        cls,
        *,
        width: str | None = None,
        height: str | None = None,
        px_per_grid: str | None = None,
        seed: str | None = None,
        show_grid: str | None = None,
    ) -> "RenderConfig":
        return cls(
            width=parse_int(width, DEFAULT_WIDTH),
            height=parse_int(height, DEFAULT_HEIGHT),
            px_per_grid=parse_int(px_per_grid, DEFAULT_PX_PER_GRID),
            seed=parse_seed(seed),
            show_grid=parse_bool(show_grid, DEFAULT_SHOW_GRID),
        )
