"""
Lattice noise kernels.

JAX implementations of the two base kernels every combinator builds on:
- Perlin (gradient) noise
- Value (hashed lattice) noise

Both accept scalars or arrays that broadcast together and return an
array of the broadcast shape.
"""

import jax
import jax.numpy as jnp

from .permutation import (
    as_float, fade, gradient_2d, gradient_3d, hash_2d, hash_3d, lattice, lerp, wrap_seed
)


@jax.jit
def _perlin_2d(x, y, seed):
    x, y = as_float(x, y)

    # Wrapped cell index and fractional offsets
    x0, fx = lattice(x)
    y0, fy = lattice(y)

    u = fade(fx)
    v = fade(fy)

    def corner(cx, cy, dx, dy):
        g = gradient_2d(hash_2d(cx, cy, seed))
        return g[..., 0] * dx + g[..., 1] * dy

    n00 = corner(x0, y0, fx, fy)
    n10 = corner(x0 + 1, y0, fx - 1.0, fy)
    n01 = corner(x0, y0 + 1, fx, fy - 1.0)
    n11 = corner(x0 + 1, y0 + 1, fx - 1.0, fy - 1.0)

    nx0 = lerp(n00, n10, u)
    nx1 = lerp(n01, n11, u)
    return lerp(nx0, nx1, v)


@jax.jit
def _perlin_3d(x, y, z, seed):
    x, y, z = as_float(x, y, z)

    x0, fx = lattice(x)
    y0, fy = lattice(y)
    z0, fz = lattice(z)

    u = fade(fx)
    v = fade(fy)
    w = fade(fz)

    def corner(i, j, k):
        g = gradient_3d(hash_3d(x0 + i, y0 + j, z0 + k, seed))
        return g[..., 0] * (fx - i) + g[..., 1] * (fy - j) + g[..., 2] * (fz - k)

    nx00 = lerp(corner(0, 0, 0), corner(1, 0, 0), u)
    nx10 = lerp(corner(0, 1, 0), corner(1, 1, 0), u)
    nx01 = lerp(corner(0, 0, 1), corner(1, 0, 1), u)
    nx11 = lerp(corner(0, 1, 1), corner(1, 1, 1), u)

    nxy0 = lerp(nx00, nx10, v)
    nxy1 = lerp(nx01, nx11, v)
    return lerp(nxy0, nxy1, w)


def _corner_value(h: jnp.ndarray) -> jnp.ndarray:
    # [0, 255] -> [-1, 1]
    return h / 255.0 * 2.0 - 1.0


@jax.jit
def _value_2d(x, y, seed):
    x, y = as_float(x, y)

    x0, fx = lattice(x)
    y0, fy = lattice(y)
    u = fade(fx)
    v = fade(fy)

    n00 = _corner_value(hash_2d(x0, y0, seed))
    n10 = _corner_value(hash_2d(x0 + 1, y0, seed))
    n01 = _corner_value(hash_2d(x0, y0 + 1, seed))
    n11 = _corner_value(hash_2d(x0 + 1, y0 + 1, seed))

    nx0 = lerp(n00, n10, u)
    nx1 = lerp(n01, n11, u)
    return lerp(nx0, nx1, v)


@jax.jit
def _value_3d(x, y, z, seed):
    x, y, z = as_float(x, y, z)

    x0, fx = lattice(x)
    y0, fy = lattice(y)
    z0, fz = lattice(z)
    u = fade(fx)
    v = fade(fy)
    w = fade(fz)

    def corner(i, j, k):
        return _corner_value(hash_3d(x0 + i, y0 + j, z0 + k, seed))

    nx00 = lerp(corner(0, 0, 0), corner(1, 0, 0), u)
    nx10 = lerp(corner(0, 1, 0), corner(1, 1, 0), u)
    nx01 = lerp(corner(0, 0, 1), corner(1, 0, 1), u)
    nx11 = lerp(corner(0, 1, 1), corner(1, 1, 1), u)

    nxy0 = lerp(nx00, nx10, v)
    nxy1 = lerp(nx01, nx11, v)
    return lerp(nxy0, nxy1, w)


def perlin_2d(x, y, seed=0) -> jnp.ndarray:
    """
    Generate 2D Perlin noise.

    Args:
        x, y: Coordinates (scalars or arrays)
        seed: Integer seed, offsets the lattice hash only

    Returns:
        Noise values in range approximately [-1, 1], exactly 0 on lattice points
    """
    return _perlin_2d(x, y, wrap_seed(seed))


def perlin_3d(x, y, z, seed=0) -> jnp.ndarray:
    """
    Generate 3D Perlin noise.

    Returns:
        Noise values in range approximately [-1, 1]
    """
    return _perlin_3d(x, y, z, wrap_seed(seed))


def value_2d(x, y, seed=0) -> jnp.ndarray:
    """
    Generate 2D value noise.

    Cheaper than Perlin noise but shows axis-aligned artifacts at low
    frequency.

    Returns:
        Noise values in range [-1, 1]
    """
    return _value_2d(x, y, wrap_seed(seed))


def value_3d(x, y, z, seed=0) -> jnp.ndarray:
    """Generate 3D value noise in range [-1, 1]."""
    return _value_3d(x, y, z, wrap_seed(seed))


_KERNELS = {
    ("Perlin", 2): perlin_2d,
    ("Perlin", 3): perlin_3d,
    ("Value", 2): value_2d,
    ("Value", 3): value_3d,
}


def base_kernel(noise_type, dims: int):
    """Look up the lattice kernel for a noise type and dimension count."""
    return _KERNELS[(getattr(noise_type, "value", noise_type), dims)]
