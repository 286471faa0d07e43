from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from viz.export import array_to_npy_bytes, gray_to_png_bytes, grid_overlay, noise_to_gray

from .config import RenderConfig
from .map2d import noise_map_2d
from .permutation import PermutationTable

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line args.

    Numeric values are kept as strings here and parsed leniently by
    ``RenderConfig.from_strings`` so a typo falls back to the default.
    """
    parser = argparse.ArgumentParser(description="Render single-octave 2D Perlin noise to a PNG.")
    parser.add_argument("--output", type=Path, default=Path("perlin.png"),
                        help="PNG file to write. Default = %(default)s")
    parser.add_argument("--npy", type=Path, help="Also dump the raw noise values to this .npy file")
    parser.add_argument("--seed", help="Integer seed for the permutation table. Default = Ken Perlin's table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    image_group = parser.add_argument_group("Image settings")
    image_group.add_argument("--width", help="Image width in pixels")
    image_group.add_argument("--height", help="Image height in pixels")
    image_group.add_argument("--px-per-grid", help="Pixels per lattice cell")
    image_group.add_argument("--grid", dest="show_grid", action="store_const", const="1",
                             help="Draw lattice cell boundaries")
    image_group.add_argument("--no-grid", dest="show_grid", action="store_const", const="0",
                             help="Do not draw lattice cell boundaries (default)")
    return parser.parse_args(argv)


def render(config: RenderConfig) -> tuple[np.ndarray, np.ndarray]:
    """Render ``config`` and return ``(noise values, 8-bit image)``."""
    table = PermutationTable.from_seed(config.seed)
    z = noise_map_2d(
        table,
        width=config.width,
        height=config.height,
        px_per_grid=config.px_per_grid,
    )
    img = noise_to_gray(z)
    if config.show_grid:
        img = grid_overlay(img, px_per_grid=config.px_per_grid)
    return z, img


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = RenderConfig.from_strings(
        width=args.width,
        height=args.height,
        px_per_grid=args.px_per_grid,
        seed=args.seed,
        show_grid=args.show_grid,
    )
    logger.info(f'Seed: {config.seed if config.seed is not None else "canonical"}')
    logger.info(f"Generating {config.width}x{config.height} image, {config.px_per_grid} px per grid cell")

    z, img = render(config)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Saving {args.output}")
    args.output.write_bytes(gray_to_png_bytes(img))

    if args.npy is not None:
        args.npy.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Saving {args.npy}")
        args.npy.write_bytes(array_to_npy_bytes(z))

    return 0


if __name__ == "__main__":
    sys.exit(main())
