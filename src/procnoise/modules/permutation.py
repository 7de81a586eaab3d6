"""
Shared permutation table, gradient sets and lattice helpers.

Every kernel hashes integer lattice coordinates through the same
read-only permutation table, so identical (coords, seed) pairs always
produce identical values.
"""

import jax
import jax.numpy as jnp
import numpy as np


_P = np.array([
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36, 103, 30, 69, 142,
    8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117,
    35, 11, 32, 57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175, 74, 165, 71,
    134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230, 220, 105, 92, 41,
    55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89,
    18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64, 52, 217, 226,
    250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212, 207, 206, 59, 227, 47, 16, 58, 17, 182,
    189, 28, 42, 223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43,
    172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104, 218, 246, 97,
    228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241, 81, 51, 145, 235, 249, 14, 239,
    107, 49, 192, 214, 31, 181, 199, 106, 157, 184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254,
    138, 236, 205, 93, 222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
], dtype=np.int32)

# Doubled so PERM[h + y] never needs a modulo while h, y < 256.
PERMUTATION = np.concatenate([_P, _P])
PERMUTATION.setflags(write=False)

GRADIENTS_2D = np.array([
    [1, 1], [-1, 1], [1, -1], [-1, -1],
    [1, 0], [-1, 0], [0, 1], [0, -1],
], dtype=np.float32)
GRADIENTS_2D.setflags(write=False)

GRADIENTS_3D = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
], dtype=np.float32)
GRADIENTS_3D.setflags(write=False)

_PERM = jnp.asarray(PERMUTATION)
_GRAD2 = jnp.asarray(GRADIENTS_2D)
_GRAD3 = jnp.asarray(GRADIENTS_3D)


def as_float(*arrays):
    """Convert inputs to the default float dtype and broadcast them together."""
    return jnp.broadcast_arrays(*(jnp.asarray(a, dtype=float) for a in arrays))


def wrap_index(cell):
    """Reduce integer-valued lattice coordinates to int32 indices in [0, 255]."""
    return jnp.mod(cell, 256).astype(jnp.int32)


def lattice(t: jnp.ndarray):
    """
    Split coordinates into a wrapped lattice index and the offset within the cell.

    The index is reduced mod 256 while still a float, so coordinates past
    the int32 range keep a finite fraction in [0, 1).

    Returns:
        Tuple of (int32 index in [0, 255], float fraction)
    """
    cell = jnp.floor(t)
    return wrap_index(cell), t - cell


def wrap_seed(seed):
    """Reduce a seed to [0, 255]; hashes only depend on it mod 256."""
    if isinstance(seed, (int, np.integer)):
        return int(seed) % 256
    return jnp.mod(seed, 256)


def fade(t: jnp.ndarray) -> jnp.ndarray:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a, b, t):
    return a + t * (b - a)


@jax.jit
def _hash_2d(x, y, seed):
    h = _PERM[jnp.mod(x + seed, 256)]
    return _PERM[h + jnp.mod(y, 256)]


@jax.jit
def _hash_3d(x, y, z, seed):
    h = _PERM[jnp.mod(x + seed, 256)]
    h = _PERM[h + jnp.mod(y, 256)]
    return _PERM[h + jnp.mod(z, 256)]


def hash_2d(x: jnp.ndarray, y: jnp.ndarray, seed=0) -> jnp.ndarray:
    """
    Hash 2D integer lattice coordinates to an int in [0, 255].

    The seed offsets the first axis only; each further axis is folded
    into the running hash with one more table lookup.
    """
    return _hash_2d(x, y, wrap_seed(seed))


def hash_3d(x: jnp.ndarray, y: jnp.ndarray, z: jnp.ndarray, seed=0) -> jnp.ndarray:
    """Hash 3D integer lattice coordinates to an int in [0, 255]."""
    return _hash_3d(x, y, z, wrap_seed(seed))


def gradient_2d(h: jnp.ndarray) -> jnp.ndarray:
    """Gradient vectors (..., 2) selected by hash % 8."""
    return _GRAD2[jnp.mod(h, 8)]


def gradient_3d(h: jnp.ndarray) -> jnp.ndarray:
    """Gradient vectors (..., 3) selected by hash % 12."""
    return _GRAD3[jnp.mod(h, 12)]
