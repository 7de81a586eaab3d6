"""
Noise generation modules.

Each module provides one family of kernels:
- permutation: shared hash table, gradient sets, fade/lerp helpers
- noise: Perlin and Value lattice noise
- fractal: FBM, Billow, Ridged multifractal, Turbulence
- cellular: Worley and Voronoi
- warp: domain warping of coordinates
"""

from . import permutation
from . import noise
from . import fractal
from . import cellular
from . import warp

__all__ = ["permutation", "noise", "fractal", "cellular", "warp"]
