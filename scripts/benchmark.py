from __future__ import annotations

import time

from perlin2d.map2d import noise_map_2d
from perlin2d.noise_2d import NoiseField
from perlin2d.permutation import PermutationTable


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Intended targets (laptop-class CPU):
    - Array path, 1920x1080 image: < ~300ms
    - Scalar path, 256x256 pixels one evaluate() at a time: a few seconds
    """

    table = PermutationTable.from_seed(0)
    field = NoiseField()

    _timeit(
        "noise_map_2d 1920x1080",
        lambda: noise_map_2d(table, width=1920, height=1080, px_per_grid=100),
    )

    def run_scalar() -> None:
        for py in range(256):
            for px in range(256):
                field.evaluate(px / 100.0, py / 100.0, table)

    _timeit("evaluate() 256x256", run_scalar)
    _timeit("reseed x1000", lambda: [table.reseed(s) for s in range(1000)])


if __name__ == "__main__":
    main()
