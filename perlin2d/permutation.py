from __future__ import annotations

import logging

import numpy as np

from .core import CANONICAL_PERMUTATION, make_rng

logger = logging.getLogger(__name__)


class PermutationTable:
    """Hash lookup table for 2D gradient noise.

    Holds 512 entries: a permutation of 0..255 followed by an exact copy of
    it, so ``table[table[x] + y]`` never needs a second wraparound. Starts out
    as Ken Perlin's canonical permutation.

    ``reseed`` is the only mutating operation and is not thread-safe; callers
    must not evaluate noise against a table while it is being reseeded.
    """

    SIZE = 256

    def __init__(self) -> None:
        p = np.array(CANONICAL_PERMUTATION, dtype=np.int32)
        self._table = np.concatenate([p, p])
        self._table.flags.writeable = False

    @classmethod
    def from_seed(cls, seed: int | None) -> "PermutationTable":
        table = cls()
        if seed is not None:
            table.reseed(seed)
        return table

    @property
    def table(self) -> np.ndarray:
        """Read-only view of all 512 entries."""
        return self._table

    def reseed(self, seed: int) -> None:
        """Shuffle the current permutation deterministically from ``seed``.

        The same seed applied to the same starting table always yields the
        same result. The new table is built in full and then swapped in.
        """
        p = np.array(self._table[: self.SIZE], dtype=np.int32)
        make_rng(seed).shuffle(p)
        table = np.concatenate([p, p])
        table.flags.writeable = False
        self._table = table
        logger.debug("reseeded permutation table with seed %d", int(seed))

    def lookup(self, index: int) -> int:
        return int(self._table[index & 255])

    def hash2(self, cx: int, cy: int) -> int:
        """Hash an integer lattice corner into [0, 255].

        Both coordinates are wrapped with ``& 255`` first, which maps negative
        corners into range the same way a Euclidean modulo would.
        """
        return self.lookup(self.lookup(cx & 255) + (cy & 255))

    def hash2_array(self, cx: np.ndarray, cy: np.ndarray) -> np.ndarray:
        p = self._table
        return p[p[np.asarray(cx) & 255] + (np.asarray(cy) & 255)]

    def copy(self) -> "PermutationTable":
        other = type(self).__new__(type(self))
        other._table = self._table
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return bool(np.array_equal(self._table, other._table))

    __hash__ = None  # mutable via reseed

    def __len__(self) -> int:
        return int(self._table.shape[0])

    def __repr__(self) -> str:
        head = ", ".join(str(int(v)) for v in self._table[:4])
        return f"PermutationTable([{head}, ...])"
