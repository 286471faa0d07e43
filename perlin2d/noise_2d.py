from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import numpy as np

from .core import GRADIENTS, fade, grad2_from_hash, lerp
from .permutation import PermutationTable


@dataclass(frozen=True)
class Corner2D:
    cx: int
    cy: int
    hash: int
    gx: int
    gy: int
    dx: float
    dy: float
    dot: float


def _non_finite(x: float, y: float) -> float:
    return (x - x) + (y - y)


class NoiseField:
    """Single-octave 2D gradient noise.

    Stateless: every call borrows the permutation table it is given. Raw
    noise lies roughly in [-1, 1] and is shifted to [0, 1] by ``(n + 1) / 2``
    without clamping, so values can overshoot the unit range slightly.
    """

    @staticmethod
    def _corners(x: float, y: float) -> tuple[tuple[int, int], ...]:
        x0 = math.floor(x)
        y0 = math.floor(y)
        x1 = x0 + 1
        y1 = y0 + 1
        # top-left, top-right, bottom-left, bottom-right
        return ((x0, y0), (x1, y0), (x0, y1), (x1, y1))

    def evaluate(self, x: float, y: float, table: PermutationTable) -> float:
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            # No lattice cell exists; nan/inf carry through as nan.
            return (_non_finite(x, y) + 1.0) / 2.0
        corners = self._corners(x, y)

        dots = []
        for cx, cy in corners:
            gx, gy = GRADIENTS[table.hash2(cx, cy) & 3]
            dots.append((x - cx) * gx + (y - cy) * gy)

        x0, y0 = corners[0]
        u = fade(x - x0)
        v = fade(y - y0)

        top = lerp(u, dots[0], dots[1])
        bottom = lerp(u, dots[2], dots[3])
        return (lerp(v, top, bottom) + 1.0) / 2.0

    def noise(self, x: np.ndarray, y: np.ndarray, table: PermutationTable) -> np.ndarray:
        """Array form of ``evaluate``; ``x`` and ``y`` broadcast together."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x, y = np.broadcast_arrays(x, y)

        fx0 = np.floor(x)
        fy0 = np.floor(y)
        xi0 = fx0.astype(np.int64)
        yi0 = fy0.astype(np.int64)
        xi1 = xi0 + 1
        yi1 = yi0 + 1

        xf = x - fx0
        yf = y - fy0
        u = fade(xf)
        v = fade(yf)

        gx_tl, gy_tl = grad2_from_hash(table.hash2_array(xi0, yi0))
        gx_tr, gy_tr = grad2_from_hash(table.hash2_array(xi1, yi0))
        gx_bl, gy_bl = grad2_from_hash(table.hash2_array(xi0, yi1))
        gx_br, gy_br = grad2_from_hash(table.hash2_array(xi1, yi1))

        d_tl = xf * gx_tl + yf * gy_tl
        d_tr = (xf - 1.0) * gx_tr + yf * gy_tr
        d_bl = xf * gx_bl + (yf - 1.0) * gy_bl
        d_br = (xf - 1.0) * gx_br + (yf - 1.0) * gy_br

        top = lerp(u, d_tl, d_tr)
        bottom = lerp(u, d_bl, d_br)
        return (lerp(v, top, bottom) + 1.0) / 2.0

    def debug_point(self, x: float, y: float, table: PermutationTable) -> dict:
        # Scalar breakdown for inspection; mirrors evaluate() step by step.
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raw = _non_finite(x, y)
            return {"input": {"x": x, "y": y}, "corners": {}, "raw": raw, "noise": (raw + 1.0) / 2.0}
        corners = []
        for cx, cy in self._corners(x, y):
            h = table.hash2(cx, cy)
            gx, gy = GRADIENTS[h & 3]
            dx = x - cx
            dy = y - cy
            corners.append(
                Corner2D(cx=cx, cy=cy, hash=h, gx=gx, gy=gy, dx=dx, dy=dy, dot=dx * gx + dy * gy)
            )

        tl, tr, bl, br = corners
        u = fade(x - tl.cx)
        v = fade(y - tl.cy)
        top = lerp(u, tl.dot, tr.dot)
        bottom = lerp(u, bl.dot, br.dot)
        raw = lerp(v, top, bottom)

        return {
            "input": {"x": x, "y": y},
            "cell": {"x0": tl.cx, "y0": tl.cy, "x1": br.cx, "y1": br.cy},
            "relative": {"xf": x - tl.cx, "yf": y - tl.cy},
            "fade": {"u": u, "v": v},
            "corners": {
                "top_left": asdict(tl),
                "top_right": asdict(tr),
                "bottom_left": asdict(bl),
                "bottom_right": asdict(br),
            },
            "interpolation": {"top": top, "bottom": bottom},
            "raw": raw,
            "noise": (raw + 1.0) / 2.0,
        }


_FIELD = NoiseField()


def evaluate(x: float, y: float, table: PermutationTable) -> float:
    return _FIELD.evaluate(x, y, table)


def noise(x: np.ndarray, y: np.ndarray, table: PermutationTable) -> np.ndarray:
    return _FIELD.noise(x, y, table)
