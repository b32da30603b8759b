"""
Mutable representation of a point mass that belongs to a Simulator.
"""

from __future__ import annotations

import math
from typing import Iterable, TYPE_CHECKING, Optional, Dict, Any

import numpy as np

from .errors import DegenerateGeometryError, DomainError

if TYPE_CHECKING:  # Avoid circular import during runtime
    from .system import Simulator


def _vector2(values: Iterable[float], label: str) -> np.ndarray:
    vec = np.array(values, dtype=float)
    if vec.shape != (2,):
        raise ValueError(f"{label} must be a 2-element vector")
    return vec


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


def check_mass(mass: float) -> float:
    mass = float(mass)
    if not (math.isfinite(mass) and mass > 0):
        raise DomainError(f"mass must be positive and finite, got {mass!r}")
    return mass


def check_timestep(dt: float) -> float:
    dt = float(dt)
    if not (math.isfinite(dt) and dt > 0):
        raise DomainError(f"dt must be positive and finite, got {dt!r}")
    return dt


class Body:
    """
    A single point mass tracked by a Simulator. The Simulator instance is
    stored on the body as ``self.system`` so every body reads the same
    gravitational constant and softening length.

    Position, velocity and force are exposed as read-only arrays. Only the
    body itself (and its Simulator, through ``apply_force``) writes them.
    """

    def __init__(
        self,
        system: Simulator,
        name: str,
        mass: float,
        position: Iterable[float],
        velocity: Iterable[float],
        radius: Optional[float] = None,
        rotation_period: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.system = system
        self.name = name
        self._mass = check_mass(mass)
        self._position = _vector2(position, "position")
        self._velocity = _vector2(velocity, "velocity")
        self._force = np.zeros(2, dtype=float)
        # Presentation only, never read by the physics.
        self.radius = radius
        self.rotation_period = rotation_period
        self.metadata: Dict[str, Any] = dict(metadata or {})

    def __repr__(self) -> str:
        return (
            f"Body(name={self.name!r}, mass={self._mass}, "
            f"position={self._position.tolist()}, velocity={self._velocity.tolist()})"
        )

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def position(self) -> np.ndarray:
        return _readonly(self._position)

    @property
    def velocity(self) -> np.ndarray:
        return _readonly(self._velocity)

    @property
    def force(self) -> np.ndarray:
        return _readonly(self._force)

    def place(
        self, position: Iterable[float], velocity: Optional[Iterable[float]] = None
    ) -> None:
        """Set the initial state of the body and clear its force."""
        self._position = _vector2(position, "position")
        if velocity is not None:
            self._velocity = _vector2(velocity, "velocity")
        self.reset_force()

    def reset_force(self) -> None:
        self._force.fill(0.0)

    def apply_force(self, force: Iterable[float]) -> None:
        self._force += np.asarray(force, dtype=float)

    def add_force_from(self, other: Body) -> np.ndarray:
        """
        Accumulate the softened gravitational pull of ``other`` on this body
        and return it, so the caller can apply the negation to ``other``.

        The magnitude uses the softened denominator ``r**2 + eps**2`` while
        the direction is normalised by the plain distance ``r``.
        """
        if other is self:
            raise ValueError("a body exerts no force on itself")
        config = self.system.config
        offset = other._position - self._position
        distance = float(np.linalg.norm(offset))
        if distance <= config.min_separation:
            raise DegenerateGeometryError(
                f"{self.name!r} and {other.name!r} are {distance} m apart"
            )
        magnitude = (
            config.gravitational_constant
            * self._mass
            * other._mass
            / (distance * distance + config.softening * config.softening)
        )
        force = magnitude * offset / distance
        self._force += force
        return force

    def acceleration(self) -> np.ndarray:
        return self._force / self._mass

    def integrate(self, dt: float) -> None:
        """Advance velocity then position using the current net force."""
        dt = check_timestep(dt)
        check_mass(self._mass)
        self._velocity += dt * self._force / self._mass
        self._position += dt * self._velocity

    def distance_to(self, other: Body) -> float:
        """Return Euclidean distance to another body."""
        return float(np.linalg.norm(self._position - other._position))

    def momentum(self) -> np.ndarray:
        return self._mass * self._velocity

    def kinetic_energy(self) -> float:
        return 0.5 * self._mass * float(np.dot(self._velocity, self._velocity))
