#!/usr/bin/env python3
"""
ASCII terrain preview.

Samples any registered noise type over a grid and prints it as a
character heightmap, banding heights into water, sand, grass, rock
and snow.
"""

import argparse
import json
import logging
from typing import List, Optional, Sequence

import numpy as np

from .core import REGISTRY, create_sampler, sample_grid
from .grammar import UnknownNoiseTypeError
from .utils import clamp

logger = logging.getLogger(__name__)

# (upper bound of normalized height, glyph, band name)
HEIGHT_BANDS = [
    (0.2, "~", "water"),
    (0.35, ".", "sand"),
    (0.6, ":", "grass"),
    (0.8, "^", "rock"),
    (1.01, "A", "snow"),
]

# Kernels whose output is already in [0, 1].
UNIT_RANGE = {"Worley", "Voronoi", "Turbulence"}


def height_band(normalized_height: float) -> str:
    """Name of the band a normalized [0, 1] height falls into."""
    for upper, _, name in HEIGHT_BANDS:
        if normalized_height < upper:
            return name
    return HEIGHT_BANDS[-1][2]


def to_unit_range(values: np.ndarray, name: str) -> np.ndarray:
    """Map kernel output to [0, 1] for banding."""
    if name in UNIT_RANGE:
        return clamp(values, 0.0, 1.0)
    return clamp((values + 1.0) / 2.0, 0.0, 1.0)


def render_ascii(heights: np.ndarray) -> List[str]:
    """Render a [0, 1] heightmap as one string per row."""
    uppers = np.array([upper for upper, _, _ in HEIGHT_BANDS])
    glyphs = np.array([glyph for _, glyph, _ in HEIGHT_BANDS])
    index = np.minimum(np.searchsorted(uppers, heights, side="right"), len(glyphs) - 1)
    return ["".join(row) for row in glyphs[index]]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for the ASCII preview."""

    parser = argparse.ArgumentParser(description="Procedural noise ASCII preview")
    parser.add_argument("noise_type", nargs="?", default="FBM",
                        help=f"Noise type ({', '.join(REGISTRY.names())})")
    parser.add_argument("--size", type=int, default=50, help="Grid size in samples")
    parser.add_argument("--frequency", type=float, default=0.05, help="Sample spacing in noise space")
    parser.add_argument("--seed", type=int, default=12345, help="Random seed")
    parser.add_argument("--config", default=None, help="Extra noise options as JSON")
    parser.add_argument("--stats", action="store_true", help="Print height band coverage")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = json.loads(args.config) if args.config else None

    try:
        sampler = create_sampler(args.noise_type, config)
    except UnknownNoiseTypeError as e:
        print(f"Error: {e}")
        return 1

    if sampler.name == "DomainWarp":
        print("Error: DomainWarp produces coordinates, not heights")
        return 1

    values = np.asarray(sample_grid(sampler, args.size, args.size,
                                    spacing=args.frequency, seed=args.seed))
    heights = to_unit_range(values, sampler.name)

    for line in render_ascii(heights):
        print(line)

    if args.stats:
        print(f"\n{sampler.name}: min {values.min():.3f}, max {values.max():.3f}")
        for _, glyph, name in HEIGHT_BANDS:
            share = np.mean([height_band(h) == name for h in heights.ravel()])
            print(f"  {glyph} {name:<6} {share:6.1%}")

    return 0


if __name__ == "__main__":
    exit(main())
