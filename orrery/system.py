"""
Simulator that owns a fixed set of bodies and advances them one timestep at a
time with exact pairwise gravity.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from .body import Body, check_mass, check_timestep
from .config import SimulationConfig


class FrameView(Protocol):
    def advance(self, simulator: Simulator, dt: float) -> None: ...

    def frame(self, simulator: Simulator) -> List[Dict[str, Any]]: ...


class Simulator:
    """
    Container that owns Body instances, computes each pairwise force once and
    applies it with opposite signs to both members of the pair, then lets the
    bodies integrate their trajectories.
    """

    def __init__(
        self,
        name: str = "Unnamed system",
        config: Optional[SimulationConfig] = None,
        initial_bodies: Optional[Sequence[dict]] = None,
    ):
        self.name = name
        self.config = config or SimulationConfig()
        self.bodies: List[Body] = []
        self.elapsed = 0.0
        self.steps_taken = 0
        if initial_bodies:
            self.add_bodies(initial_bodies)

    def add_body(
        self,
        name: str,
        mass: float,
        position: Iterable[float],
        velocity: Iterable[float],
        radius: Optional[float] = None,
        rotation_period: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Body:
        if self.get_body(name) is not None:
            raise ValueError(f"duplicate body name {name!r}")
        body = Body(
            self,
            name,
            mass,
            position,
            velocity,
            radius=radius,
            rotation_period=rotation_period,
            metadata=metadata,
        )
        self.bodies.append(body)
        return body

    def add_bodies(self, configs: Sequence[dict]) -> List[Body]:
        created = []
        for cfg in configs:
            created.append(
                self.add_body(
                    name=cfg["name"],
                    mass=cfg["mass"],
                    position=cfg["position"],
                    velocity=cfg["velocity"],
                    radius=cfg.get("radius"),
                    rotation_period=cfg.get("rotation_period"),
                    metadata=cfg.get("metadata"),
                )
            )
        return created

    def get_body(self, name: str) -> Optional[Body]:
        return next((b for b in self.bodies if b.name == name), None)

    def total_mass(self) -> float:
        return sum(body.mass for body in self.bodies)

    def compute_forces(self) -> None:
        """
        Reset every accumulator, then visit each unordered pair (i < j) once:
        bodies[i] accumulates the pair force and bodies[j] receives its
        negation.
        """
        for body in self.bodies:
            body.reset_force()
        for i, primary in enumerate(self.bodies[:-1]):
            for secondary in self.bodies[i + 1:]:
                force = primary.add_force_from(secondary)
                secondary.apply_force(-force)

    def step(self, dt: Optional[float] = None) -> None:
        """
        Advance every body by dt seconds (``config.timestep`` when omitted).
        The timestep and every mass are checked before any state changes.
        """
        dt = check_timestep(self.config.timestep if dt is None else dt)
        for body in self.bodies:
            check_mass(body.mass)
        if not self.bodies:
            return
        self.compute_forces()
        for body in self.bodies:
            body.integrate(dt)
        self.elapsed += dt
        self.steps_taken += 1

    def run(self, steps: int, dt: Optional[float] = None) -> None:
        if steps < 0:
            raise ValueError("steps must not be negative")
        for _ in range(steps):
            self.step(dt)

    def net_force(self) -> np.ndarray:
        """Sum of the accumulated forces; zero up to rounding after compute_forces()."""
        return np.sum([body.force for body in self.bodies], axis=0) if self.bodies else np.zeros(2)

    def total_momentum(self) -> np.ndarray:
        return np.sum([body.momentum() for body in self.bodies], axis=0) if self.bodies else np.zeros(2)

    def center_of_mass(self) -> np.ndarray:
        total = self.total_mass()
        if total == 0:
            return np.zeros(2)
        return np.sum([body.mass * body.position for body in self.bodies], axis=0) / total

    def kinetic_energy(self) -> float:
        return math.fsum(body.kinetic_energy() for body in self.bodies)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "t": self.elapsed,
            "bodies": [
                {
                    "name": body.name,
                    "position": body.position.tolist(),
                    "velocity": body.velocity.tolist(),
                    "force": body.force.tolist(),
                }
                for body in self.bodies
            ],
        }

    def sample_trajectory(
        self,
        steps: int,
        dt: Optional[float] = None,
        every: int = 1,
        view: Optional[FrameView] = None,
    ) -> List[dict]:
        """
        Return one sample every ``every`` steps over ``steps`` steps, starting
        with the current state and always ending with the state after the last
        step. The live bodies (position, velocity and accumulated force) are
        restored afterwards, so sampling does not advance the simulator.

        Without a view each sample is ``snapshot()``; with one it is
        ``{"t": ..., "bodies": view.frame(self)}`` and ``view.advance`` is
        called after every step.
        """
        if steps < 0:
            raise ValueError("steps must not be negative")
        if every < 1:
            raise ValueError("every must be at least 1")
        dt = check_timestep(self.config.timestep if dt is None else dt)

        # Preserve state so sampling does not mutate the live system.
        preserved_state = [
            (body, body.position.copy(), body.velocity.copy(), body.force.copy())
            for body in self.bodies
        ]
        preserved_clock = (self.elapsed, self.steps_taken)

        def capture_sample() -> dict:
            if view is None:
                return self.snapshot()
            return {"t": self.elapsed, "bodies": view.frame(self)}

        samples: List[dict] = [capture_sample()]
        try:
            for idx in range(1, steps + 1):
                self.step(dt)
                if view is not None:
                    view.advance(self, dt)
                if idx % every == 0 or idx == steps:
                    samples.append(capture_sample())
        finally:
            for body, position, velocity, force in preserved_state:
                body.place(position, velocity)
                body.apply_force(force)
            self.elapsed, self.steps_taken = preserved_clock
        return samples
