"""
Sampler construction and grid evaluation.

create_sampler looks a noise type up by name, resolves its configuration
once, and returns a sampler exposing sample_2d/sample_3d.
"""

import logging
from typing import Optional, Tuple

import jax.numpy as jnp

from .config import (
    ConfigLike, DEFAULTS, VORONOI_DEFAULTS, WARP_DEFAULTS,
    WORLEY_DEFAULTS, WarpType, resolve_config,
)
from .grammar import NoiseKernel, NoiseRegistry
from .modules import cellular, fractal, noise, warp

logger = logging.getLogger(__name__)


def _register_builtin_kernels(registry: NoiseRegistry):
    """Register the nine built-in noise types."""

    registry.register(NoiseKernel(
        "Perlin",
        lambda x, y, seed=0, config=None: noise.perlin_2d(x, y, seed),
        lambda x, y, z, seed=0, config=None: noise.perlin_3d(x, y, z, seed),
        DEFAULTS,
        description="Classic gradient noise",
    ))
    registry.register(NoiseKernel(
        "Value",
        lambda x, y, seed=0, config=None: noise.value_2d(x, y, seed),
        lambda x, y, z, seed=0, config=None: noise.value_3d(x, y, z, seed),
        DEFAULTS,
        description="Lattice-based value noise",
    ))
    registry.register(NoiseKernel(
        "FBM", fractal.fbm_2d, fractal.fbm_3d, DEFAULTS,
        description="Fractal Brownian motion",
    ))
    registry.register(NoiseKernel(
        "Billow", fractal.billow_2d, fractal.billow_3d, DEFAULTS,
        description="Billowy, cloud-like patterns",
    ))
    registry.register(NoiseKernel(
        "Ridged", fractal.ridged_2d, fractal.ridged_3d, DEFAULTS,
        description="Sharp ridges, good for mountains",
    ))
    registry.register(NoiseKernel(
        "Worley", cellular.worley_2d, cellular.worley_3d, WORLEY_DEFAULTS,
        full_2d=cellular.worley_2d_full,
        full_3d=cellular.worley_3d_full,
        description="Cellular distance noise",
    ))
    registry.register(NoiseKernel(
        "Voronoi", cellular.voronoi_2d, cellular.voronoi_3d, VORONOI_DEFAULTS,
        full_2d=cellular.voronoi_2d_full,
        full_3d=cellular.voronoi_3d_full,
        description="Cell-based regions with ids",
    ))
    registry.register(NoiseKernel(
        "Turbulence", fractal.turbulence_2d, fractal.turbulence_3d, DEFAULTS,
        description="Turbulent flow patterns",
    ))
    registry.register(NoiseKernel(
        "DomainWarp", warp.warp_2d, warp.warp_3d, WARP_DEFAULTS,
        description="Coordinate distortion",
    ))


REGISTRY = NoiseRegistry()
_register_builtin_kernels(REGISTRY)


class NoiseSampler:
    """
    A noise kernel bound to a resolved configuration.

    The configuration is resolved against the kernel's defaults once, at
    construction; every sample call reuses it.
    """

    def __init__(self, kernel: NoiseKernel, config: ConfigLike = None):
        self.kernel = kernel
        self.config = resolve_config(config, kernel.defaults)

    @property
    def name(self) -> str:
        return self.kernel.name

    @property
    def has_full_query(self) -> bool:
        return self.kernel.full_2d is not None

    def sample_2d(self, x, y, seed: int = 0):
        return self.kernel.sample_2d(x, y, seed, self.config)

    def sample_3d(self, x, y, z, seed: int = 0):
        return self.kernel.sample_3d(x, y, z, seed, self.config)

    def sample_2d_full(self, x, y, seed: int = 0) -> cellular.CellSample2D:
        """Value, raw distance and owning cell; cellular kernels only."""
        if self.kernel.full_2d is None:
            raise TypeError(f"{self.name} noise has no full query")
        return self.kernel.full_2d(x, y, seed, self.config)

    def sample_3d_full(self, x, y, z, seed: int = 0) -> cellular.CellSample3D:
        if self.kernel.full_3d is None:
            raise TypeError(f"{self.name} noise has no full query")
        return self.kernel.full_3d(x, y, z, seed, self.config)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.config!r})"


class WarpSampler(NoiseSampler):
    """
    Domain warp bound to a resolved configuration.

    sample_2d/sample_3d return warped coordinates, using the warp style
    selected by the config's `warp_type`.
    """

    def sample_2d(self, x, y, seed: int = 0):
        if self.config.warp_type == WarpType.FRACTAL:
            return self.warp_fractal_2d(x, y, seed)
        if self.config.warp_type == WarpType.PROGRESSIVE:
            return self.warp_progressive_2d(x, y, seed)
        return self.warp_2d(x, y, seed)

    def sample_3d(self, x, y, z, seed: int = 0):
        # No progressive form in 3D; it warps like the fractal form.
        if self.config.warp_type == WarpType.BASIC:
            return self.warp_3d(x, y, z, seed)
        return self.warp_fractal_3d(x, y, z, seed)

    def warp_2d(self, x, y, seed: int = 0):
        return warp.warp_2d(x, y, seed, self.config)

    def warp_3d(self, x, y, z, seed: int = 0):
        return warp.warp_3d(x, y, z, seed, self.config)

    def warp_fractal_2d(self, x, y, seed: int = 0):
        return warp.warp_fractal_2d(x, y, seed, self.config)

    def warp_fractal_3d(self, x, y, z, seed: int = 0):
        return warp.warp_fractal_3d(x, y, z, seed, self.config)

    def warp_progressive_2d(self, x, y, seed: int = 0, layers: Optional[int] = None):
        return warp.warp_progressive_2d(x, y, seed, layers, self.config)


def create_sampler(name: str, config: ConfigLike = None,
                   registry: NoiseRegistry = REGISTRY) -> NoiseSampler:
    """
    Create a configured sampler for a named noise type.

    Args:
        name: One of the registered noise types (Perlin, Value, FBM, Billow,
            Ridged, Worley, Voronoi, Turbulence, DomainWarp)
        config: NoiseConfig or mapping; unset options use the type's defaults

    Raises:
        UnknownNoiseTypeError: if `name` is not registered
    """
    kernel = registry.get(name)
    sampler_cls = WarpSampler if kernel.name == "DomainWarp" else NoiseSampler
    sampler = sampler_cls(kernel, config)
    logger.debug("Created %s sampler with %s", kernel.name, sampler.config)
    return sampler


def sample_grid(
    sampler: NoiseSampler,
    width: int,
    height: int,
    origin: Tuple[float, float] = (0.0, 0.0),
    spacing: float = 1.0,
    seed: int = 0
) -> jnp.ndarray:
    """
    Evaluate a scalar sampler over a regular grid.

    Args:
        sampler: Any sampler whose sample_2d returns a value (not a warp)
        width, height: Grid size in samples
        origin: World coordinate of the first sample
        spacing: World distance between neighbouring samples
        seed: Random seed

    Returns:
        jnp.ndarray of shape (height, width)
    """

    x_coords = origin[0] + jnp.arange(width) * spacing
    y_coords = origin[1] + jnp.arange(height) * spacing
    X, Y = jnp.meshgrid(x_coords, y_coords, indexing="xy")
    return sampler.sample_2d(X, Y, seed)
