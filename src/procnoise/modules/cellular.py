"""
Cellular noise: Worley (feature distance) and Voronoi (feature identity).

One jittered feature point is scattered per integer cell. A query scans
the 3x3 (or 3x3x3) block of cells around it and keeps the nearest (F1)
and second-nearest (F2) feature distances plus the cell owning F1.
Ties keep the cell scanned first.
"""

import itertools
from functools import partial
from typing import NamedTuple

import jax
import jax.numpy as jnp

from ..config import (
    ConfigLike, DistanceFunction, NoiseConfig, VORONOI_DEFAULTS, VoronoiReturn,
    WORLEY_DEFAULTS, WorleyReturn, resolve_config,
)
from .permutation import as_float, hash_2d, hash_3d, wrap_index, wrap_seed

AXIS_DECORRELATION = 1000


class CellSample2D(NamedTuple):
    value: jnp.ndarray
    distance: jnp.ndarray
    cell_x: jnp.ndarray
    cell_y: jnp.ndarray


class CellSample3D(NamedTuple):
    value: jnp.ndarray
    distance: jnp.ndarray
    cell_x: jnp.ndarray
    cell_y: jnp.ndarray
    cell_z: jnp.ndarray


def _euclidean(*deltas):
    return jnp.sqrt(sum(d * d for d in deltas))


def _manhattan(*deltas):
    return sum(jnp.abs(d) for d in deltas)


def _chebyshev(*deltas):
    result = jnp.abs(deltas[0])
    for d in deltas[1:]:
        result = jnp.maximum(result, jnp.abs(d))
    return result


_DISTANCES = {
    DistanceFunction.EUCLIDEAN: _euclidean,
    DistanceFunction.MANHATTAN: _manhattan,
    DistanceFunction.CHEBYSHEV: _chebyshev,
}


def cell_hash(cell, seed):
    """Hash an integer-valued cell (2 or 3 coordinates) to [0, 255]."""
    index = tuple(wrap_index(c) for c in cell)
    if len(index) == 2:
        return hash_2d(index[0], index[1], seed)
    return hash_3d(index[0], index[1], index[2], seed)


def feature_point(cell, seed, jitter):
    """
    Jittered feature point of an integer-valued cell.

    Each axis draws its own hash, with the cell coordinates shifted by
    AXIS_DECORRELATION so the axes are independent. jitter=0 puts the
    point at the cell centre; jitter=1 lets it reach the cell edges.
    """
    k = AXIS_DECORRELATION
    if len(cell) == 2:
        cx, cy = (wrap_index(c) for c in cell)
        hashes = (hash_2d(cx, cy, seed), hash_2d(cx + k, cy + k, seed))
    else:
        cx, cy, cz = (wrap_index(c) for c in cell)
        hashes = (
            hash_3d(cx, cy, cz, seed),
            hash_3d(cx + k, cy + k, cz, seed),
            hash_3d(cx, cy + k, cz + k, seed),
        )
    return tuple(c + 0.5 + (h / 255.0 - 0.5) * jitter for c, h in zip(cell, hashes))


@partial(jax.jit, static_argnames=("cfg",))
def scan_features(coords, seed, cfg: NoiseConfig):
    """
    Scan the neighbourhood of each query point.

    Cells are kept as integer-valued floats; only their mod-256 index is
    hashed, so the scan stays finite past the int32 range.

    Returns:
        Tuple of (f1, f2, owner_cell) where owner_cell is a tuple of
        integer-valued float cell coordinates of the nearest feature point
    """
    coords = tuple(c * cfg.frequency for c in as_float(*coords))
    base = tuple(jnp.floor(c) for c in coords)
    distance = _DISTANCES[cfg.distance_function]

    f1 = jnp.full_like(coords[0], jnp.inf)
    f2 = jnp.full_like(coords[0], jnp.inf)
    owner = base

    # Slowest axis first: dy, dx in 2D and dz, dy, dx in 3D.
    for step in itertools.product((-1, 0, 1), repeat=len(coords)):
        cell = tuple(b + o for b, o in zip(base, reversed(step)))
        point = feature_point(cell, seed, cfg.jitter)
        d = distance(*(c - p for c, p in zip(coords, point)))

        closer = d < f1
        f2 = jnp.where(closer, f1, jnp.where(d < f2, d, f2))
        f1 = jnp.where(closer, d, f1)
        owner = tuple(jnp.where(closer, c, o) for c, o in zip(cell, owner))

    return f1, f2, owner


def _worley_value(f1, f2, return_type):
    if return_type == WorleyReturn.F2:
        result = f2
    elif return_type == WorleyReturn.F2_MINUS_F1:
        result = f2 - f1
    elif return_type == WorleyReturn.F1_PLUS_F2:
        result = (f1 + f2) * 0.5
    else:
        result = f1
    return jnp.clip(result, 0.0, 1.0)


def _voronoi_value(f1, cell_value, return_type):
    if return_type == VoronoiReturn.DISTANCE:
        return jnp.clip(f1, 0.0, 1.0)
    if return_type == VoronoiReturn.BOTH:
        return cell_value * 0.5 + jnp.clip(f1, 0.0, 1.0) * 0.5
    return cell_value


def _cell_coords(owner):
    return tuple(o.astype(jnp.int32) for o in owner)


def _worley(coords, seed, config):
    cfg = resolve_config(config, WORLEY_DEFAULTS)
    f1, f2, owner = scan_features(coords, wrap_seed(seed), cfg)
    return _worley_value(f1, f2, cfg.return_type), f1, _cell_coords(owner)


def _voronoi(coords, seed, config):
    cfg = resolve_config(config, VORONOI_DEFAULTS)
    seed = wrap_seed(seed)
    f1, _, owner = scan_features(coords, seed, cfg)
    cell_value = cell_hash(owner, seed) / 255.0
    return _voronoi_value(f1, cell_value, cfg.return_type), cell_value, f1, _cell_coords(owner)


def worley_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D Worley (cellular) noise.

    Args:
        x, y: Coordinate arrays
        seed: Random seed
        config: NoiseConfig or mapping (frequency, distanceFunction,
            returnType F1 | F2 | F2MinusF1 | F1PlusF2, jitter)

    Returns:
        Selected feature distance clamped to [0, 1]
    """
    return _worley((x, y), seed, config)[0]


def worley_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D Worley noise clamped to [0, 1]."""
    return _worley((x, y, z), seed, config)[0]


def worley_2d_full(x, y, seed: int = 0, config: ConfigLike = None) -> CellSample2D:
    """Worley value plus raw F1 distance and the owning cell."""
    value, f1, (cx, cy) = _worley((x, y), seed, config)
    return CellSample2D(value, f1, cx, cy)


def worley_3d_full(x, y, z, seed: int = 0, config: ConfigLike = None) -> CellSample3D:
    value, f1, (cx, cy, cz) = _worley((x, y, z), seed, config)
    return CellSample3D(value, f1, cx, cy, cz)


def voronoi_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D Voronoi noise.

    Useful for biome generation and region partitioning.

    Args:
        x, y: Coordinate arrays
        seed: Random seed
        config: NoiseConfig or mapping (frequency, distanceFunction,
            returnType CellValue | Distance | Both, jitter)

    Returns:
        Cell identity, clamped F1 distance or their average, in [0, 1]
    """
    return _voronoi((x, y), seed, config)[0]


def voronoi_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D Voronoi noise in [0, 1]."""
    return _voronoi((x, y, z), seed, config)[0]


def voronoi_2d_full(x, y, seed: int = 0, config: ConfigLike = None) -> CellSample2D:
    """
    Voronoi query with per-region metadata.

    Returns:
        CellSample2D of (cell value in [0, 1], raw F1 distance, cell_x, cell_y)
    """
    _, cell_value, f1, (cx, cy) = _voronoi((x, y), seed, config)
    return CellSample2D(cell_value, f1, cx, cy)


def voronoi_3d_full(x, y, z, seed: int = 0, config: ConfigLike = None) -> CellSample3D:
    _, cell_value, f1, (cx, cy, cz) = _voronoi((x, y, z), seed, config)
    return CellSample3D(cell_value, f1, cx, cy, cz)
