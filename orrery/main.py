import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from orrery.config import SimulationConfig
from orrery.errors import SimulationError
from orrery.presets import jovian_bodies
from orrery.system import Simulator
from orrery.views import VIEWS

MAX_STEPS = 100_000

logger = logging.getLogger(__name__)

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class BodyIn(BaseModel):
    name: str
    mass: float
    position: List[float] = Field(min_length=2, max_length=2)
    velocity: List[float] = Field(min_length=2, max_length=2)
    radius: Optional[float] = None
    rotationPeriod: Optional[float] = None


class ConfigIn(BaseModel):
    gravitationalConstant: Optional[float] = None
    softening: Optional[float] = None
    timestep: Optional[float] = None
    minSeparation: Optional[float] = None
    metersPerPixel: Optional[float] = None
    speedUnit: Optional[float] = None


class SimulateRequest(BaseModel):
    bodies: Optional[List[BodyIn]] = None
    config: Optional[ConfigIn] = None
    steps: int = Field(default=1, ge=0, le=MAX_STEPS)
    dt: Optional[float] = None
    every: int = Field(default=1, ge=1)
    view: Literal["planar", "scene"] = "planar"


class BodyMetadata(BaseModel):
    name: str
    mass: float
    radius: Optional[float] = None
    rotationPeriod: Optional[float] = None


class Sample(BaseModel):
    t: float
    bodies: List[Dict[str, Any]]


class SimulateResponse(BaseModel):
    bodyMetadata: List[BodyMetadata]
    samples: List[Sample]
    meta: dict


@app.exception_handler(SimulationError)
async def simulation_error_handler(request: Request, exc: SimulationError):
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def _config_from_request(cfg: Optional[ConfigIn]) -> SimulationConfig:
    base = SimulationConfig()
    if cfg is None:
        return base
    return base.replace(
        gravitational_constant=cfg.gravitationalConstant,
        softening=cfg.softening,
        timestep=cfg.timestep,
        min_separation=cfg.minSeparation,
        meters_per_pixel=cfg.metersPerPixel,
        speed_unit=cfg.speedUnit,
    )


def _bodies_from_request(
    bodies: Optional[List[BodyIn]], config: SimulationConfig
) -> List[Dict[str, Any]]:
    if bodies is None:
        return jovian_bodies(config)
    return [
        {
            "name": body.name,
            "mass": body.mass,
            "position": body.position,
            "velocity": body.velocity,
            "radius": body.radius,
            "rotation_period": body.rotationPeriod,
        }
        for body in bodies
    ]


@app.get("/api/presets/jovian")
def jovian_preset():
    """Jovian preset in SI units, in the same shape /api/simulate accepts."""
    config = SimulationConfig()
    bodies = [
        {
            "name": body["name"],
            "mass": body["mass"],
            "position": body["position"],
            "velocity": body["velocity"],
            "radius": body["radius"],
            "rotationPeriod": body["rotation_period"],
        }
        for body in jovian_bodies(config)
    ]
    return {
        "bodies": bodies,
        "config": {
            "gravitationalConstant": config.gravitational_constant,
            "softening": config.softening,
            "timestep": config.timestep,
            "minSeparation": config.min_separation,
            "metersPerPixel": config.meters_per_pixel,
            "speedUnit": config.speed_unit,
        },
    }


@app.post("/api/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest):
    """
    Build a simulator from the request (the Jovian preset when no bodies are
    given) and return one frame of the requested view every ``every`` steps.
    """
    config = _config_from_request(req.config)
    simulator = Simulator(
        name="Requested system",
        config=config,
        initial_bodies=_bodies_from_request(req.bodies, config),
    )
    dt = config.timestep if req.dt is None else req.dt
    logger.debug(
        "Simulating %d bodies for %d steps of %s s", len(simulator.bodies), req.steps, dt
    )
    samples = simulator.sample_trajectory(
        req.steps, dt=dt, every=req.every, view=VIEWS[req.view]()
    )
    return {
        "bodyMetadata": [
            {
                "name": body.name,
                "mass": body.mass,
                "radius": body.radius,
                "rotationPeriod": body.rotation_period,
            }
            for body in simulator.bodies
        ],
        "samples": samples,
        "meta": {"dt": dt, "steps": req.steps, "view": req.view},
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="127.0.0.1", port=8000)
