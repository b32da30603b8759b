"""
Configuration surface for a simulation run.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields, replace as _replace
from typing import Any

from .constants import (
    FPS,
    FRAME_TIME_BUDGET,
    G_DEFAULT,
    KPH,
    METERS_PER_PIXEL,
    MIN_SEPARATION_DEFAULT,
    FIXED_TIMESTEP,
    SOFTENING_DEFAULT,
)
from .errors import DomainError

_POSITIVE = ("gravitational_constant", "timestep", "speed_unit", "meters_per_pixel")
_NON_NEGATIVE = ("softening", "min_separation")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Validated, immutable set of knobs shared by a Simulator and its bodies.

    gravitational_constant: G in m^3 kg^-1 s^-2.
    softening: epsilon in metres, added as eps**2 to r**2 in the force magnitude.
    timestep: default dt in seconds used when step() is called without one.
    min_separation: separations at or below this raise DegenerateGeometryError.
    speed_unit: factor converting preset speeds (km/h) to m/s.
    meters_per_pixel: scale used by the presentation views.
    """

    gravitational_constant: float = G_DEFAULT
    softening: float = SOFTENING_DEFAULT
    timestep: float = FIXED_TIMESTEP
    min_separation: float = MIN_SEPARATION_DEFAULT
    speed_unit: float = KPH
    meters_per_pixel: float = METERS_PER_PIXEL

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise DomainError(f"{f.name} must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise DomainError(f"{f.name} must be finite, got {value!r}")
            object.__setattr__(self, f.name, float(value))
        for name in _POSITIVE:
            if getattr(self, name) <= 0:
                raise DomainError(f"{name} must be positive, got {getattr(self, name)!r}")
        for name in _NON_NEGATIVE:
            if getattr(self, name) < 0:
                raise DomainError(f"{name} must not be negative, got {getattr(self, name)!r}")

    def replace(self, **changes: Any) -> SimulationConfig:
        """Return a validated copy with ``changes`` applied; None values are ignored."""
        return _replace(self, **{k: v for k, v in changes.items() if v is not None})

    @staticmethod
    def frame_timestep(fps: float = FPS) -> float:
        """Simulated seconds per rendered frame at ``fps`` frames per second."""
        if not fps > 0:
            raise DomainError(f"fps must be positive, got {fps!r}")
        return FRAME_TIME_BUDGET * (1.0 / fps)

