"""Boid entities, flocks and trail history."""

from .boid import Boid2D, Boid3D
from .flock import Flock, Flock2D, Flock3D, warmup_kernels
from .trail import TrailHistory

__all__ = ["Boid2D", "Boid3D", "Flock", "Flock2D", "Flock3D", "TrailHistory", "warmup_kernels"]
