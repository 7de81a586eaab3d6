"""
Helpers for consuming noise values: range mapping, clamping, weighted
combination, a coordinate hash and a seeded LCG.

These work on plain floats and numpy/jax arrays alike.
"""

from typing import Callable, Iterable, Mapping, Tuple, Union

import numpy as np

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS = 2 ** 31

_MASK32 = 0xFFFFFFFF


def normalize(value):
    """Map a noise value from [-1, 1] to [0, 1]."""
    return (value + 1) * 0.5


def map_range(value, out_min: float, out_max: float,
              in_min: float = -1.0, in_max: float = 1.0):
    """Linearly map `value` from [in_min, in_max] to [out_min, out_max]."""
    t = (value - in_min) / (in_max - in_min)
    return out_min + t * (out_max - out_min)


def clamp(value, lo: float = -1.0, hi: float = 1.0):
    """Clamp a value (or array) to [lo, hi]."""
    if np.ndim(value) == 0:
        return max(lo, min(hi, value))
    return np.clip(value, lo, hi)


WeightedValue = Union[Mapping[str, float], Tuple[float, float]]


def combine(noises: Iterable[WeightedValue]) -> float:
    """
    Weighted mean of pre-computed noise values.

    Args:
        noises: Items of {"value": v, "weight": w} or (value, weight) pairs

    Returns:
        Sum of value * weight divided by the total weight, or 0 when the
        total weight is 0
    """
    total = 0.0
    total_weight = 0.0
    for item in noises:
        if isinstance(item, Mapping):
            value, weight = item["value"], item["weight"]
        else:
            value, weight = item
        total += value * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0
    return total / total_weight


def coord_hash(x, y=0, z=0, seed: int = 0):
    """
    Hash integer coordinates to a float in [0, 1).

    32-bit multiply/xor-shift mix; vectorized over numpy arrays.

    Every product is masked to 32 bits exactly. Mixers that multiply in
    doubles lose low bits once a product passes 2**53, so their hashes
    can differ from this one in the low bits for large inputs.
    """
    x = np.asarray(x, dtype=np.int64)
    y = np.asarray(y, dtype=np.int64)
    z = np.asarray(z, dtype=np.int64)

    h = (seed + x * 374761393 + y * 668265263 + z * 1274126177) & _MASK32
    h = h ^ (h >> 13)
    h = (h * 1274126177) & _MASK32
    h = h ^ (h >> 16)

    result = (h % 1000000) / 1000000.0
    return float(result) if result.ndim == 0 else result


def create_rng(seed: int) -> Callable[[], float]:
    """
    Create a seeded linear congruential generator.

    Returns:
        Function returning the next pseudo-random float in [0, 1)
    """
    state = int(seed)

    def next_value() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return next_value
