"""Simulation contexts owning all per-run state for each mode."""

import numpy as np

from config import boids2d, boids3d
from boids import Flock2D, Flock3D, TrailHistory
from .camera import Camera
from .timestep import make_timestep


class Simulation:
    """Drives a flock with a timestep discipline."""

    def __init__(self, timestep, rng: np.random.Generator = None):
        self.timestep = timestep
        self.rng = rng if rng is not None else np.random.default_rng()

    def step(self):
        raise NotImplementedError

    def advance(self, frame_time: float) -> int:
        """Run however many steps the timestep grants for this frame."""
        steps = self.timestep.advance(frame_time)
        for _ in range(steps):
            self.step()
        return steps


class Simulation2D(Simulation):
    """Top-down flock with motion trails."""

    def __init__(
        self,
        width: float = boids2d.WINDOW["width"],
        height: float = boids2d.WINDOW["height"],
        timestep=None,
        rng: np.random.Generator = None,
        num_boids: int = None,
        **flock_overrides
    ):
        super().__init__(timestep or make_timestep(boids2d.TIMESTEP), rng)
        self.flock = Flock2D(width, height, num_boids=num_boids, rng=self.rng, **flock_overrides)
        self.trails = TrailHistory(len(self.flock), boids2d.TRAIL["length"])

    def step(self):
        self.flock.update()
        self.trails.record(self.flock.positions)

    def drawables(self):
        """
        Yield (triangle, trail_segments) per boid, in the order they are drawn.

        Each boid's trail is drawn right after its own triangle.
        """
        for index, triangle in enumerate(self.flock.points):
            yield triangle, list(self.trails.segments(index))


class Simulation3D(Simulation):
    """Flock inside a cube, watched by a free-fly camera the boids avoid."""

    def __init__(
        self,
        timestep=None,
        rng: np.random.Generator = None,
        camera: Camera = None,
        num_boids: int = None,
        **flock_overrides
    ):
        super().__init__(timestep or make_timestep(boids3d.TIMESTEP), rng)
        self.camera = camera or Camera()
        self.flock = Flock3D(num_boids=num_boids, rng=self.rng, **flock_overrides)
        self.personal_space = boids3d.CAMERA["personal_space"]
        self.personal_space_weight = boids3d.CAMERA["personal_space_weight"]

    def step(self):
        self.flock.update(
            avoid_point=self.camera.position,
            avoid_radius=self.personal_space,
            avoid_weight=self.personal_space_weight
        )
