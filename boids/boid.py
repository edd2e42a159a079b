"""Individual boid entities for the 2D and 3D flocks."""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Tuple
from numba import njit

from config import boids2d


@njit(cache=True)
def rotate_points(points: np.ndarray, centroid: np.ndarray, delta: float):
    """
    Rotate 2D points in place about a centroid.

    Positive deltas turn counter-clockwise on a y-down screen.
    """
    c = math.cos(delta)
    s = math.sin(delta)
    for p in range(points.shape[0]):
        dx = points[p, 0] - centroid[0]
        dy = points[p, 1] - centroid[1]
        points[p, 0] = dx * c + dy * s + centroid[0]
        points[p, 1] = -dx * s + dy * c + centroid[1]


def triangle_offsets() -> np.ndarray:
    """Spawn triangle vertices relative to their centroid."""
    offsets = np.array(boids2d.TRIANGLE, dtype=np.float64)
    return offsets - offsets.mean(axis=0)


@dataclass
class Boid2D:
    """
    A triangle-shaped boid on a 2D screen.

    Attributes:
        points: (3, 2) triangle vertices
        centroid: Mean of the three vertices, used as the boid's position
        velocity: 2D velocity vector (units per step)
        angle: Facing angle in radians the points were last rotated to
    """
    points: np.ndarray = field(default_factory=lambda: np.zeros((3, 2)))
    centroid: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    angle: float = math.radians(boids2d.BOIDS["initial_angle"])

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64).reshape(3, 2)
        self.centroid = np.asarray(self.centroid, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.angle = float(self.angle)

    @classmethod
    def from_points(cls, points, velocity=(0.0, 0.0)) -> "Boid2D":
        points = np.array(points, dtype=np.float64).reshape(3, 2)
        return cls(
            points=points,
            centroid=points.mean(axis=0),
            velocity=np.array(velocity, dtype=np.float64),
        )

    @classmethod
    def from_centroid(cls, centroid, velocity=(0.0, 0.0)) -> "Boid2D":
        """Place the spawn triangle so that its centroid lands on ``centroid``."""
        centroid = np.asarray(centroid, dtype=np.float64)
        return cls.from_points(triangle_offsets() + centroid, velocity)

    @property
    def position(self) -> np.ndarray:
        return self.centroid

    def translate(self, offset: np.ndarray):
        """Move the triangle and its centroid together."""
        self.points += offset
        self.centroid += offset

    def rotate(self, to_angle: float):
        """Rotate the triangle about its centroid so it faces ``to_angle``."""
        rotate_points(self.points, self.centroid, float(to_angle - self.angle))
        self.angle = float(to_angle)


@dataclass
class Boid3D:
    """
    A line-segment boid inside the 3D volume.

    The segment runs from ``tail`` to ``head`` through ``position`` along
    ``heading``, the last non-zero direction of travel.
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    heading: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0]))
    color: Tuple[int, int, int] = (129, 161, 193)
    half_length: float = 0.2

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        speed = np.linalg.norm(self.velocity)
        if speed > 0:
            self.heading = self.velocity / speed
        else:
            self.heading = np.asarray(self.heading, dtype=np.float64)

    @property
    def head(self) -> np.ndarray:
        return self.position + self.heading * self.half_length

    @property
    def tail(self) -> np.ndarray:
        return self.position - self.heading * self.half_length
