"""Rendering components for the boids simulations."""

from .grid import BoundsCube
from .boids import TriangleRenderer, SegmentRenderer, clear

__all__ = ["BoundsCube", "TriangleRenderer", "SegmentRenderer", "clear"]
