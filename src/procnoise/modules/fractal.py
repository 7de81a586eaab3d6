"""
Fractal combinators over the lattice kernels.

Each combinator samples its base kernel once per octave, scaling the
frequency by `lacunarity` every octave and offsetting the seed by
OCTAVE_SEED_STEP so octaves are decorrelated:
- FBM: weighted sum
- Billow: weighted sum of absolute values, rescaled to [-1, 1]
- Ridged multifractal: inverted, squared, self-weighted octaves
- Turbulence: weighted sum of absolute values raised to `power`

The configuration is a static jit argument: the base kernel and the
per-octave weights are resolved at trace time, once per configuration.
"""

import math
from functools import partial

import jax
import jax.numpy as jnp

from ..config import ConfigLike, DEFAULTS, NoiseConfig, resolve_config
from .noise import base_kernel
from .permutation import as_float, wrap_seed

OCTAVE_SEED_STEP = 1000
RIDGED_SCALE = 1.25
DISPLACE_OFFSET = 1000.0


def _octave_samples(coords, seed, cfg: NoiseConfig):
    """Yield the raw base-kernel sample of every octave, lowest frequency first."""
    sample = base_kernel(cfg.noise_type, len(coords))
    frequency = cfg.frequency
    for i in range(1, int(cfg.octaves) + 1):
        yield sample(*(c * frequency for c in coords), seed + i * OCTAVE_SEED_STEP)
        frequency *= cfg.lacunarity


def spectral_weights(octaves: int, lacunarity: float, gain: float):
    """Per-octave ridged weights f^-gain, with f starting at 1."""
    weights = []
    frequency = 1.0
    for _ in range(int(octaves)):
        weights.append(math.pow(frequency, -gain))
        frequency *= lacunarity
    return weights


@partial(jax.jit, static_argnames=("cfg",))
def fbm_accumulate(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    total = jnp.zeros_like(coords[0])
    max_value = 0.0
    amplitude = cfg.amplitude

    for noise in _octave_samples(coords, seed, cfg):
        total = total + noise * amplitude
        max_value += amplitude
        amplitude *= cfg.persistence

    if max_value == 0:
        return jnp.zeros_like(coords[0])
    return total / max_value


@partial(jax.jit, static_argnames=("cfg",))
def _billow(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    total = jnp.zeros_like(coords[0])
    max_value = 0.0
    amplitude = cfg.amplitude

    for noise in _octave_samples(coords, seed, cfg):
        total = total + jnp.abs(noise) * amplitude
        max_value += amplitude
        amplitude *= cfg.persistence

    if max_value == 0:
        return jnp.zeros_like(coords[0])
    return (total / max_value) * 2.0 - 1.0


@partial(jax.jit, static_argnames=("cfg",))
def _ridged(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    if int(cfg.octaves) < 1:
        return jnp.zeros_like(coords[0])

    weights = spectral_weights(cfg.octaves, cfg.lacunarity, cfg.gain)
    total = jnp.zeros_like(coords[0])
    weight = 1.0

    # Order matters: the next weight comes from this octave's already
    # weighted value, before it is accumulated.
    for spectral, noise in zip(weights, _octave_samples(coords, seed, cfg)):
        noise = cfg.offset - jnp.abs(noise)
        noise = noise * noise
        noise = noise * weight
        weight = jnp.clip(noise * cfg.gain, 0.0, 1.0)
        total = total + noise * spectral

    return total * RIDGED_SCALE - 1.0


@partial(jax.jit, static_argnames=("cfg",))
def _turbulence(coords, seed, cfg: NoiseConfig):
    coords = as_float(*coords)
    total = jnp.zeros_like(coords[0])
    max_value = 0.0
    amplitude = 1.0

    for noise in _octave_samples(coords, seed, cfg):
        total = total + jnp.abs(noise) * amplitude
        max_value += amplitude
        amplitude *= cfg.persistence

    if max_value == 0:
        return jnp.zeros_like(coords[0])
    return jnp.power(total / max_value, cfg.power)


def fbm_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D fractional Brownian motion.

    Args:
        x, y: Coordinates (scalars or arrays)
        seed: Random seed
        config: NoiseConfig or mapping (octaves, lacunarity, persistence,
            frequency, amplitude, noiseType)

    Returns:
        Amplitude-normalized sum of octaves, approximately [-1, 1]
    """
    return fbm_accumulate((x, y), wrap_seed(seed), resolve_config(config, DEFAULTS))


def fbm_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D fractional Brownian motion."""
    return fbm_accumulate((x, y, z), wrap_seed(seed), resolve_config(config, DEFAULTS))


def billow_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D billow noise (billowy, cloud-like patterns).

    Returns:
        Noise values in range [-1, 1]
    """
    return _billow((x, y), wrap_seed(seed), resolve_config(config, DEFAULTS))


def billow_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D billow noise in range [-1, 1]."""
    return _billow((x, y, z), wrap_seed(seed), resolve_config(config, DEFAULTS))


def ridged_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D ridged multifractal noise (good for mountain ridges).

    Strong ridges suppress the finer octaves beneath them through a
    running weight derived from the previous octave, scaled by `gain`.

    Args:
        x, y: Coordinates
        seed: Random seed
        config: NoiseConfig or mapping (octaves, lacunarity, gain,
            frequency, offset, noiseType)

    Returns:
        Noise values centred near zero
    """
    return _ridged((x, y), wrap_seed(seed), resolve_config(config, DEFAULTS))


def ridged_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D ridged multifractal noise."""
    return _ridged((x, y, z), wrap_seed(seed), resolve_config(config, DEFAULTS))


def turbulence_2d(x, y, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """
    Generate 2D turbulence.

    Like billow but normalized to [0, 1] and shaped by `power`.

    Returns:
        Noise values in range [0, 1]
    """
    return _turbulence((x, y), wrap_seed(seed), resolve_config(config, DEFAULTS))


def turbulence_3d(x, y, z, seed: int = 0, config: ConfigLike = None) -> jnp.ndarray:
    """Generate 3D turbulence in range [0, 1]."""
    return _turbulence((x, y, z), wrap_seed(seed), resolve_config(config, DEFAULTS))


def displace_2d(x, y, seed: int = 0, strength: float = 1.0, config: ConfigLike = None):
    """
    Displace coordinates by turbulence.

    Returns:
        Tuple of (displaced_x, displaced_y)
    """
    cfg = resolve_config(config, DEFAULTS)
    seed = wrap_seed(seed)
    x, y = as_float(x, y)
    dx = _turbulence((x, y), seed, cfg) * strength
    dy = _turbulence((x + DISPLACE_OFFSET, y + DISPLACE_OFFSET), seed, cfg) * strength
    return x + dx, y + dy


def displace_3d(x, y, z, seed: int = 0, strength: float = 1.0, config: ConfigLike = None):
    """Displace 3D coordinates by turbulence; returns (x, y, z)."""
    cfg = resolve_config(config, DEFAULTS)
    seed = wrap_seed(seed)
    x, y, z = as_float(x, y, z)
    dx = _turbulence((x, y, z), seed, cfg) * strength
    dy = _turbulence((x + DISPLACE_OFFSET, y + DISPLACE_OFFSET, z), seed, cfg) * strength
    dz = _turbulence((x, y + DISPLACE_OFFSET, z + DISPLACE_OFFSET), seed, cfg) * strength
    return x + dx, y + dy, z + dz
