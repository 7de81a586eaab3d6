"""
Kernel registry for by-name noise construction.

This module defines:
- NoiseKernel: the entry points and default configuration of one noise type
- NoiseRegistry: registration and lookup of noise kernels by name or id
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .config import NoiseConfig


class UnknownNoiseTypeError(KeyError):
    """Raised when a noise type name is not registered."""

    def __init__(self, name: str, known: List[str]):
        self.name = name
        self.known = known
        super().__init__(name)

    def __str__(self):
        return f"Unknown noise type: {self.name!r} (expected one of {', '.join(self.known)})"


@dataclass(frozen=True)
class NoiseKernel:
    """
    Stable entry points of one noise type.

    sample_2d/sample_3d take (coords..., seed, config); full_2d/full_3d
    are only set for kernels with a per-cell "full" query.
    """

    name: str
    sample_2d: Callable
    sample_3d: Callable
    defaults: NoiseConfig
    full_2d: Optional[Callable] = None
    full_3d: Optional[Callable] = None
    description: str = ""


class NoiseRegistry:
    """
    Registry for noise kernels.

    Names are matched case-insensitively; each kernel also gets a stable
    integer id in registration order.
    """

    def __init__(self):
        self.kernels: Dict[str, NoiseKernel] = {}
        self._ids: Dict[str, int] = {}
        self._names: Dict[int, str] = {}
        self._next_id = 0

    def register(self, kernel: NoiseKernel):
        """Register a new noise kernel."""

        key = kernel.name.lower()
        if key in self.kernels:
            raise ValueError(f"Noise type already registered: {kernel.name!r}")

        kernel_id = self._next_id
        self._next_id += 1

        self.kernels[key] = kernel
        self._ids[kernel.name] = kernel_id
        self._names[kernel_id] = kernel.name

    def get(self, name: str) -> NoiseKernel:
        """Get a kernel by name, failing with the offending name if unknown."""
        try:
            return self.kernels[str(name).lower()]
        except KeyError:
            raise UnknownNoiseTypeError(str(name), self.names()) from None

    def name_of(self, kernel_id: int) -> str:
        """Name of the kernel registered under `kernel_id`."""
        return self._names[kernel_id]

    def id_of(self, name: str) -> int:
        """Registration id of a kernel, looked up case-insensitively."""
        return self._ids[self.get(name).name]

    def names(self) -> List[str]:
        """Registered names in registration order."""
        return [self._names[i] for i in sorted(self._names)]

    def items(self) -> List[Tuple[int, str]]:
        """(id, name) pairs in registration order."""
        return [(kernel_id, name) for name, kernel_id in self._ids.items()]

    def __contains__(self, name) -> bool:
        return str(name).lower() in self.kernels

    def __len__(self) -> int:
        return len(self.kernels)
