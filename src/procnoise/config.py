"""
Noise configuration records and their defaults.

Every kernel family shares one immutable record type, NoiseConfig.
Unset fields (None) are filled from the kernel's default record by
resolve_config, so defaults live in exactly one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional, Type, Union

logger = logging.getLogger(__name__)


class _Choice(str, Enum):
    """String enum that parses case-insensitively."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.replace("_", "").replace("-", "").lower()
            for member in cls:
                if member.value.lower() == key or member.name.replace("_", "").lower() == key:
                    return member
        return None


class NoiseType(_Choice):
    PERLIN = "Perlin"
    VALUE = "Value"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.lower() == "gradient":
            return cls.PERLIN
        return super()._missing_(value)


class DistanceFunction(_Choice):
    EUCLIDEAN = "Euclidean"
    MANHATTAN = "Manhattan"
    CHEBYSHEV = "Chebyshev"


class WorleyReturn(_Choice):
    F1 = "F1"
    F2 = "F2"
    F2_MINUS_F1 = "F2MinusF1"
    F1_PLUS_F2 = "F1PlusF2"


class VoronoiReturn(_Choice):
    CELL_VALUE = "CellValue"
    DISTANCE = "Distance"
    BOTH = "Both"


class WarpType(_Choice):
    BASIC = "Basic"
    FRACTAL = "Fractal"
    PROGRESSIVE = "Progressive"


@dataclass(frozen=True)
class NoiseConfig:
    """
    Options shared by all fractal, cellular and warp kernels.

    A field left as None means "use the kernel's default". Records are
    hashable, so a resolved config doubles as a static jit argument.
    """

    octaves: Optional[int] = None
    lacunarity: Optional[float] = None
    persistence: Optional[float] = None
    gain: Optional[float] = None
    frequency: Optional[float] = None
    amplitude: Optional[float] = None
    offset: Optional[float] = None
    power: Optional[float] = None
    noise_type: Optional[NoiseType] = None
    distance_function: Optional[DistanceFunction] = None
    return_type: Optional[str] = None
    jitter: Optional[float] = None
    warp_type: Optional[WarpType] = None
    layers: Optional[int] = None

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "NoiseConfig":
        """Build a config from a plain mapping with camelCase or snake_case keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.warning("Ignoring unknown noise option %r", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)


_ALIASES = {
    "noiseType": "noise_type",
    "distanceFunction": "distance_function",
    "returnType": "return_type",
    "warpType": "warp_type",
}


DEFAULTS = NoiseConfig(
    octaves=6,
    lacunarity=2.0,
    persistence=0.5,
    gain=2.0,
    frequency=1.0,
    amplitude=1.0,
    offset=1.0,
    power=1.0,
    noise_type=NoiseType.PERLIN,
    distance_function=DistanceFunction.EUCLIDEAN,
    return_type=None,
    jitter=1.0,
    warp_type=WarpType.BASIC,
    layers=2,
)

WORLEY_DEFAULTS = replace(DEFAULTS, return_type=WorleyReturn.F1)
VORONOI_DEFAULTS = replace(DEFAULTS, return_type=VoronoiReturn.CELL_VALUE)
WARP_DEFAULTS = replace(DEFAULTS, octaves=3, frequency=0.01, amplitude=30.0)

ConfigLike = Union[NoiseConfig, Mapping[str, Any], None]

_ENUM_FIELDS = {
    "noise_type": NoiseType,
    "distance_function": DistanceFunction,
    "warp_type": WarpType,
}


def _parse_choice(enum_cls: Type[Enum], value: Any, default: Enum) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unknown %s %r, falling back to %s", enum_cls.__name__, value, default.value
        )
        return default


def resolve_config(config: ConfigLike, defaults: NoiseConfig = DEFAULTS) -> NoiseConfig:
    """
    Fill every unset option of `config` from `defaults`.

    Enum-valued options given as strings are parsed; unrecognised values
    fall back to the default rather than failing.
    """
    if config is None:
        return defaults
    if not isinstance(config, NoiseConfig):
        config = NoiseConfig.from_dict(config)

    resolved = {}
    for f in fields(NoiseConfig):
        value = getattr(config, f.name)
        default = getattr(defaults, f.name)
        if value is None:
            value = default
        elif f.name in _ENUM_FIELDS:
            value = _parse_choice(_ENUM_FIELDS[f.name], value, default)
        elif f.name == "return_type" and isinstance(default, Enum):
            value = _parse_choice(type(default), value, default)
        resolved[f.name] = value
    return NoiseConfig(**resolved)
