"""
Thin presentation adapters. Each view reads body state after a step and turns
it into plain dicts a front-end can draw; none of them write to a body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .constants import FORCE_VECTOR_SCALE, TWO_PI, VELOCITY_VECTOR_SCALE
from .system import Simulator


def _scale(simulator: Simulator, meters_per_pixel: Optional[float]) -> float:
    return meters_per_pixel or simulator.config.meters_per_pixel


class PlanarView:
    """
    2D canvas view: positions in pixels relative to the canvas centre, plus
    the tips of the velocity and force arrows drawn from each body.
    """

    def __init__(
        self,
        meters_per_pixel: Optional[float] = None,
        velocity_scale: float = VELOCITY_VECTOR_SCALE,
        force_scale: float = FORCE_VECTOR_SCALE,
    ) -> None:
        if meters_per_pixel is not None and meters_per_pixel <= 0:
            raise ValueError("meters_per_pixel must be positive")
        if velocity_scale <= 0 or force_scale <= 0:
            raise ValueError("vector scales must be positive")
        self.meters_per_pixel = meters_per_pixel
        self.velocity_scale = velocity_scale
        self.force_scale = force_scale

    def advance(self, simulator: Simulator, dt: float) -> None:
        pass

    def frame(self, simulator: Simulator) -> List[Dict[str, Any]]:
        mpp = _scale(simulator, self.meters_per_pixel)
        frame = []
        for body in simulator.bodies:
            x, y = (body.position / mpp).tolist()
            vx, vy = (body.velocity / self.velocity_scale).tolist()
            fx, fy = (body.force / self.force_scale).tolist()
            frame.append(
                {
                    "name": body.name,
                    "x": x,
                    "y": y,
                    "radius": body.radius,
                    "velocityTip": [x + vx, y + vy],
                    "forceTip": [x + fx, y + fy],
                }
            )
        return frame


class SceneView:
    """
    3D scene view: the simulation plane is laid onto the scene's x/z plane at
    y = 0, and each body with a rotation period spins about the scene's y axis.
    Spin angles belong to the view and do not touch the physics.
    """

    def __init__(self, meters_per_pixel: Optional[float] = None) -> None:
        if meters_per_pixel is not None and meters_per_pixel <= 0:
            raise ValueError("meters_per_pixel must be positive")
        self.meters_per_pixel = meters_per_pixel
        self.spin: Dict[str, float] = {}

    def advance(self, simulator: Simulator, dt: float) -> None:
        for body in simulator.bodies:
            if body.rotation_period:
                angle = self.spin.get(body.name, 0.0) - TWO_PI / body.rotation_period * dt
                self.spin[body.name] = angle % TWO_PI

    def frame(self, simulator: Simulator) -> List[Dict[str, Any]]:
        mpp = _scale(simulator, self.meters_per_pixel)
        frame = []
        for body in simulator.bodies:
            x, z = (body.position / mpp).tolist()
            frame.append(
                {
                    "name": body.name,
                    "position": [x, 0.0, z],
                    "rotationY": self.spin.get(body.name, 0.0),
                    "radius": body.radius,
                }
            )
        return frame


VIEWS = {"planar": PlanarView, "scene": SceneView}
