"""
Domain warping functions.

Domain warping distorts the coordinate space before another noise is
sampled there, breaking up grid-aligned artifacts and creating more
organic patterns. All functions here are pure coordinate transforms:
they return warped coordinates, never a noise value.
"""

from dataclasses import replace
from functools import partial
from typing import Callable, Tuple

import jax
import jax.numpy as jnp

from ..config import ConfigLike, NoiseConfig, WARP_DEFAULTS, resolve_config
from .fractal import fbm_accumulate
from .noise import base_kernel
from .permutation import as_float, wrap_seed

# Sampling offsets that decorrelate the Y and Z displacements from X.
Y_OFFSET = (5.2, 1.3, 2.8)
Z_OFFSET = (9.1, 4.7, 6.3)

FRACTAL_AXIS_SEED_STEP = 100
LAYER_SEED_STEP = 100
LAYER_Y_SEED_OFFSET = 50


def _axis_offsets(dims: int):
    return [(0.0,) * dims, Y_OFFSET[:dims], Z_OFFSET][:dims]


@partial(jax.jit, static_argnames=("cfg",))
def _warp(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    sample = base_kernel(cfg.noise_type, len(coords))
    scaled = [c * cfg.frequency for c in coords]

    warped = []
    for coord, offset in zip(coords, _axis_offsets(len(coords))):
        shifted = [s + o for s, o in zip(scaled, offset)]
        warped.append(coord + sample(*shifted, seed) * cfg.amplitude)
    return tuple(warped)


@partial(jax.jit, static_argnames=("cfg",))
def _warp_fractal(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    octave_cfg = replace(cfg, frequency=1.0, amplitude=1.0)
    scaled = [c * cfg.frequency for c in coords]

    warped = []
    for axis, (coord, offset) in enumerate(zip(coords, _axis_offsets(len(coords)))):
        shifted = [s + o for s, o in zip(scaled, offset)]
        axis_seed = seed + axis * FRACTAL_AXIS_SEED_STEP
        warped.append(coord + fbm_accumulate(tuple(shifted), axis_seed, octave_cfg) * cfg.amplitude)
    return tuple(warped)


@partial(jax.jit, static_argnames=("cfg", "layers"))
def _warp_progressive(x, y, seed, cfg: NoiseConfig, layers: int):
    warped_x, warped_y = as_float(x, y)
    sample = base_kernel(cfg.noise_type, 2)

    for i in range(1, layers + 1):
        scaled_x = warped_x * cfg.frequency
        scaled_y = warped_y * cfg.frequency
        layer_amplitude = cfg.amplitude / i
        layer_seed = seed + i * LAYER_SEED_STEP

        dx = sample(scaled_x, scaled_y, layer_seed) * layer_amplitude
        dy = sample(
            scaled_x + Y_OFFSET[0], scaled_y + Y_OFFSET[1], layer_seed + LAYER_Y_SEED_OFFSET
        ) * layer_amplitude

        warped_x = warped_x + dx
        warped_y = warped_y + dy

    return warped_x, warped_y


def warp_2d(x, y, seed: int = 0, config: ConfigLike = None) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Apply a single layer of domain warping.

    Args:
        x, y: Input coordinates
        seed: Random seed
        config: NoiseConfig or mapping (amplitude, frequency, noiseType)

    Returns:
        Tuple of (warped_x, warped_y)
    """
    return _warp((x, y), wrap_seed(seed), resolve_config(config, WARP_DEFAULTS))


def warp_3d(x, y, z, seed: int = 0, config: ConfigLike = None):
    """Single-layer 3D domain warp; returns (warped_x, warped_y, warped_z)."""
    return _warp((x, y, z), wrap_seed(seed), resolve_config(config, WARP_DEFAULTS))


def warp_fractal_2d(x, y, seed: int = 0, config: ConfigLike = None) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Apply fractal domain warping.

    Each axis displacement is a full FBM accumulation with its own seed
    offset, giving smoother and more detailed distortion than warp_2d.

    Args:
        x, y: Input coordinates
        seed: Random seed
        config: NoiseConfig or mapping (amplitude, frequency, octaves,
            lacunarity, persistence, noiseType)

    Returns:
        Tuple of (warped_x, warped_y)
    """
    return _warp_fractal((x, y), wrap_seed(seed), resolve_config(config, WARP_DEFAULTS))


def warp_fractal_3d(x, y, z, seed: int = 0, config: ConfigLike = None):
    """Fractal 3D domain warp; returns (warped_x, warped_y, warped_z)."""
    return _warp_fractal((x, y, z), wrap_seed(seed), resolve_config(config, WARP_DEFAULTS))


def warp_progressive_2d(
    x, y,
    seed: int = 0,
    layers: int = None,
    config: ConfigLike = None
) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Apply multiple layers of domain warping recursively.

    Every layer warps the output of the previous one, with the amplitude
    divided by the 1-based layer index.

    Args:
        x, y: Input coordinates
        seed: Random seed
        layers: Number of warp layers (defaults to the config's `layers`)
        config: NoiseConfig or mapping (amplitude, frequency, noiseType)

    Returns:
        Tuple of (warped_x, warped_y)
    """
    cfg = resolve_config(config, WARP_DEFAULTS)
    if layers is None:
        layers = cfg.layers
    return _warp_progressive(x, y, wrap_seed(seed), cfg, int(layers))


def apply_to_noise_2d(
    noise_fn: Callable,
    x, y,
    seed: int = 0,
    config: ConfigLike = None
) -> jnp.ndarray:
    """Sample `noise_fn(x, y, seed)` at fractally warped coordinates."""
    warped_x, warped_y = warp_fractal_2d(x, y, seed, config)
    return noise_fn(warped_x, warped_y, seed)


def apply_to_noise_3d(
    noise_fn: Callable,
    x, y, z,
    seed: int = 0,
    config: ConfigLike = None
) -> jnp.ndarray:
    """Sample `noise_fn(x, y, z, seed)` at fractally warped coordinates."""
    warped_x, warped_y, warped_z = warp_fractal_3d(x, y, z, seed, config)
    return noise_fn(warped_x, warped_y, warped_z, seed)
