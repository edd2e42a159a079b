"""Core simulation components (the pygame application lives in core.application)."""

from .camera import Camera
from .timestep import VariableTimestep, FixedTimestep, make_timestep
from .simulation import Simulation, Simulation2D, Simulation3D

__all__ = [
    "Camera",
    "VariableTimestep",
    "FixedTimestep",
    "make_timestep",
    "Simulation",
    "Simulation2D",
    "Simulation3D",
]
