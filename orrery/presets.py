"""
Initial body sets. The Jovian preset is Jupiter and its four Galilean moons
placed on the axes of the orbital plane, with orbital speeds quoted in km/h
as published and converted to m/s through ``SimulationConfig.speed_unit``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import SimulationConfig
from .constants import DAY
from .system import Simulator

# Axial tilt, eccentricity and orbital inclination are neglected.
JOVIAN_BODIES: List[Dict[str, Any]] = [
    {
        "name": "Jupiter",
        "mass": 1.8986e27,
        "position": [0.0, 0.0],
        "velocity_kph": [0.0, 0.0],
        "radius": 20,
        "rotation_days": 0.41354,
        "kind": "planet",
    },
    {
        "name": "Io",
        "mass": 8.931e22,
        "position": [0.0, -421800e3],
        "velocity_kph": [62423.1, 0.0],
        "radius": 3,
        "rotation_days": 1.769,
        "kind": "moon",
    },
    {
        "name": "Europa",
        "mass": 4.7998e22,
        "position": [671100e3, 0.0],
        "velocity_kph": [0.0, 49476.1],
        "radius": 2,
        "rotation_days": 3.551,
        "kind": "moon",
    },
    {
        "name": "Ganymede",
        "mass": 1.4819e23,
        "position": [0.0, 1070400e3],
        "velocity_kph": [-39165.6, 0.0],
        "radius": 5,
        "rotation_days": 7.155,
        "kind": "moon",
    },
    {
        "name": "Callisto",
        "mass": 1.0759e23,
        "position": [-1882700e3, 0.0],
        "velocity_kph": [0.0, -29531.6],
        "radius": 4,
        "rotation_days": 16.6890184,
        "kind": "moon",
    },
]


def jovian_bodies(config: Optional[SimulationConfig] = None) -> List[Dict[str, Any]]:
    """Return Simulator body configs for the Jovian preset in SI units."""
    config = config or SimulationConfig()
    bodies: List[Dict[str, Any]] = []
    for preset in JOVIAN_BODIES:
        bodies.append(
            {
                "name": preset["name"],
                "mass": preset["mass"],
                "position": list(preset["position"]),
                "velocity": [v * config.speed_unit for v in preset["velocity_kph"]],
                "radius": preset["radius"],
                "rotation_period": preset["rotation_days"] * DAY,
                "metadata": {"kind": preset["kind"]},
            }
        )
    return bodies


def build_jovian_system(config: Optional[SimulationConfig] = None) -> Simulator:
    config = config or SimulationConfig()
    return Simulator(
        name="Jovian system",
        config=config,
        initial_bodies=jovian_bodies(config),
    )
