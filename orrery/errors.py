"""
Errors raised by the simulation core. Both are fatal to the step that raised
them; nothing here is transient or worth retrying.
"""


class SimulationError(Exception):
    """Base class for every error the simulation core raises on purpose."""


class DomainError(SimulationError, ValueError):
    """A quantity lies outside its valid domain (mass, timestep, config value)."""


class DegenerateGeometryError(SimulationError, ZeroDivisionError):
    """Two bodies are too close together for the force direction to be defined."""
