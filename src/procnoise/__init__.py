"""
Procedural noise generation engine.

Deterministic, seedable 2D/3D noise kernels:
- Lattice noise: Perlin, Value
- Fractal combinators: FBM, Billow, Ridged, Turbulence
- Cellular noise: Worley, Voronoi
- Domain warping: basic, fractal, progressive

Usage:
    import procnoise

    value = procnoise.perlin_2d(x, y, seed)

    fbm = procnoise.create_sampler("FBM", {"octaves": 4, "persistence": 0.5})
    value = fbm.sample_2d(x, y, seed)
"""

from .config import (
    DistanceFunction, NoiseConfig, NoiseType, VoronoiReturn, WarpType,
    WorleyReturn, resolve_config,
)
from .core import NoiseSampler, REGISTRY, WarpSampler, create_sampler, sample_grid
from .grammar import NoiseKernel, NoiseRegistry, UnknownNoiseTypeError
from .modules.cellular import (
    CellSample2D, CellSample3D, voronoi_2d, voronoi_2d_full, voronoi_3d,
    voronoi_3d_full, worley_2d, worley_2d_full, worley_3d, worley_3d_full,
)
from .modules.fractal import (
    billow_2d, billow_3d, displace_2d, displace_3d, fbm_2d, fbm_3d,
    ridged_2d, ridged_3d, turbulence_2d, turbulence_3d,
)
from .modules.noise import perlin_2d, perlin_3d, value_2d, value_3d
from .modules.permutation import hash_2d, hash_3d
from .modules.warp import (
    apply_to_noise_2d, apply_to_noise_3d, warp_2d, warp_3d, warp_fractal_2d,
    warp_fractal_3d, warp_progressive_2d,
)
from .utils import clamp, combine, coord_hash, create_rng, map_range, normalize

__version__ = "0.1.0"

__all__ = [
    "NoiseConfig", "NoiseType", "DistanceFunction", "WorleyReturn",
    "VoronoiReturn", "WarpType", "resolve_config",
    "NoiseSampler", "WarpSampler", "create_sampler", "sample_grid", "REGISTRY",
    "NoiseKernel", "NoiseRegistry", "UnknownNoiseTypeError",
    "perlin_2d", "perlin_3d", "value_2d", "value_3d",
    "fbm_2d", "fbm_3d", "billow_2d", "billow_3d", "ridged_2d", "ridged_3d",
    "turbulence_2d", "turbulence_3d", "displace_2d", "displace_3d",
    "worley_2d", "worley_3d", "worley_2d_full", "worley_3d_full",
    "voronoi_2d", "voronoi_3d", "voronoi_2d_full", "voronoi_3d_full",
    "CellSample2D", "CellSample3D",
    "warp_2d", "warp_3d", "warp_fractal_2d", "warp_fractal_3d",
    "warp_progressive_2d", "apply_to_noise_2d", "apply_to_noise_3d",
    "hash_2d", "hash_3d",
    "normalize", "map_range", "clamp", "combine", "coord_hash", "create_rng",
]
