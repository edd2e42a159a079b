"""Flock management - O(n^2) neighbor scan with Numba-compiled kernels."""

import math
import numpy as np
from numba import njit

from config import boids2d, boids3d
from .boid import Boid2D, Boid3D, rotate_points, triangle_offsets


UPDATE_ORDERS = ("sequential", "snapshot")


# ============================================================================
# NUMBA JIT-COMPILED FLOCKING KERNELS
# ============================================================================

@njit(cache=True)
def steer_and_integrate(
    positions: np.ndarray,
    velocities: np.ndarray,
    src_positions: np.ndarray,
    src_velocities: np.ndarray,
    cohesion_radius: float,
    separation_radius: float,
    cohesion_weight: float,
    alignment_weight: float,
    separation_weight: float,
    lower: np.ndarray,
    upper: np.ndarray,
    margin: float,
    turn_factor: float,
    inclusive_margin: bool,
    max_speed: float,
    avoid_point: np.ndarray,
    avoid_radius: float,
    avoid_weight: float
):
    """
    Apply separation, cohesion, alignment and wall steering, then integrate.

    Boids are updated in index order and in place. Neighbors are read from
    ``src_positions``/``src_velocities``: passing the live arrays lets later
    boids see this step's earlier updates, passing copies freezes the
    neighborhood at the start of the step.
    """
    num_boids, dim = positions.shape
    center = np.zeros(dim)
    avg_vel = np.zeros(dim)
    move = np.zeros(dim)

    for i in range(num_boids):
        center[:] = 0.0
        avg_vel[:] = 0.0
        move[:] = 0.0
        neighbors = 0

        for j in range(num_boids):
            if i == j:
                continue

            dist_sq = 0.0
            for k in range(dim):
                d = positions[i, k] - src_positions[j, k]
                dist_sq += d * d
            dist = math.sqrt(dist_sq)

            if dist < cohesion_radius:
                for k in range(dim):
                    center[k] += src_positions[j, k]
                    avg_vel[k] += src_velocities[j, k]
                neighbors += 1

            if dist < separation_radius:
                for k in range(dim):
                    move[k] += positions[i, k] - src_positions[j, k]

        # Velocity-less obstacle that only repels (the 3D camera)
        if avoid_radius > 0.0:
            dist_sq = 0.0
            for k in range(dim):
                d = positions[i, k] - avoid_point[k]
                dist_sq += d * d
            if math.sqrt(dist_sq) < avoid_radius:
                for k in range(dim):
                    move[k] += (positions[i, k] - avoid_point[k]) * avoid_weight

        for k in range(dim):
            velocities[i, k] += move[k] * separation_weight

        if neighbors > 0:
            for k in range(dim):
                center[k] /= neighbors
                avg_vel[k] /= neighbors
                velocities[i, k] += (center[k] - positions[i, k]) * cohesion_weight
                velocities[i, k] += (avg_vel[k] - velocities[i, k]) * alignment_weight

        for k in range(dim):
            pos = positions[i, k]
            if inclusive_margin:
                if pos >= upper[k] - margin:
                    velocities[i, k] -= turn_factor
                if pos <= lower[k] + margin:
                    velocities[i, k] += turn_factor
            else:
                if pos < lower[k] + margin:
                    velocities[i, k] += turn_factor
                if pos > upper[k] - margin:
                    velocities[i, k] -= turn_factor

        speed_sq = 0.0
        for k in range(dim):
            speed_sq += velocities[i, k] * velocities[i, k]
        speed = math.sqrt(speed_sq)
        if speed > max_speed:
            scale = max_speed / speed
            for k in range(dim):
                velocities[i, k] *= scale

        for k in range(dim):
            positions[i, k] += velocities[i, k]


@njit(cache=True)
def update_triangles(
    points: np.ndarray,
    centroids: np.ndarray,
    velocities: np.ndarray,
    angles: np.ndarray
):
    """Carry each triangle along with its centroid and turn it to face its velocity."""
    for i in range(points.shape[0]):
        for p in range(points.shape[1]):
            points[i, p, 0] += velocities[i, 0]
            points[i, p, 1] += velocities[i, 1]

        heading = math.atan2(-velocities[i, 1], velocities[i, 0])
        rotate_points(points[i], centroids[i], heading - angles[i])
        angles[i] = heading


@njit(cache=True)
def update_segments(
    heads: np.ndarray,
    tails: np.ndarray,
    headings: np.ndarray,
    positions: np.ndarray,
    velocities: np.ndarray,
    half_length: float
):
    """Rebuild segment endpoints; a stopped boid keeps its last heading."""
    for i in range(positions.shape[0]):
        speed = math.sqrt(
            velocities[i, 0] ** 2 +
            velocities[i, 1] ** 2 +
            velocities[i, 2] ** 2
        )
        if speed > 0.0:
            for k in range(3):
                headings[i, k] = velocities[i, k] / speed

        for k in range(3):
            heads[i, k] = positions[i, k] + headings[i, k] * half_length
            tails[i, k] = positions[i, k] - headings[i, k] * half_length


# ============================================================================
# FLOCK CLASSES
# ============================================================================

class Flock:
    """
    Fixed-size arena of boids stored as structure-of-arrays.

    Subclasses supply the boundary box and rebuild their drawable shapes
    after each step.
    """

    def __init__(self, settings: dict, overrides: dict = None):
        overrides = overrides or {}
        unknown = sorted(set(overrides) - set(settings))
        if unknown:
            raise ValueError(f"Unknown flock settings: {', '.join(unknown)}")
        self.settings = {**settings, **overrides}
        self.max_speed = float(self.settings["max_speed"])
        self.cohesion_radius = float(self.settings["cohesion_radius"])
        self.separation_radius = float(self.settings["separation_radius"])
        self.cohesion_weight = float(self.settings["cohesion_weight"])
        self.alignment_weight = float(self.settings["alignment_weight"])
        self.separation_weight = float(self.settings["separation_weight"])
        self.margin = float(self.settings["margin"])
        self.turn_factor = float(self.settings["turn_factor"])
        self.inclusive_margin = bool(self.settings["inclusive_margin"])

        self.update_order = self.settings["update_order"]
        if self.update_order not in UPDATE_ORDERS:
            raise ValueError(
                f"Unknown update order {self.update_order!r}, expected one of {UPDATE_ORDERS}"
            )

        self.steps = 0

    def __len__(self) -> int:
        return self.num_boids

    @property
    def num_boids(self) -> int:
        return self.positions.shape[0]

    def _bounds(self):
        """Return (lower, upper) corner arrays of the steering box."""
        raise NotImplementedError

    def _update_shapes(self):
        raise NotImplementedError

    def _steer(self, avoid_point=None, avoid_radius: float = 0.0, avoid_weight: float = 0.0):
        if self.update_order == "snapshot":
            src_positions = self.positions.copy()
            src_velocities = self.velocities.copy()
        else:
            src_positions = self.positions
            src_velocities = self.velocities

        dim = self.positions.shape[1]
        if avoid_point is None:
            avoid_point = np.zeros(dim)
            avoid_radius = 0.0

        lower, upper = self._bounds()
        steer_and_integrate(
            self.positions,
            self.velocities,
            src_positions,
            src_velocities,
            self.cohesion_radius,
            self.separation_radius,
            self.cohesion_weight,
            self.alignment_weight,
            self.separation_weight,
            lower,
            upper,
            self.margin,
            self.turn_factor,
            self.inclusive_margin,
            self.max_speed,
            np.asarray(avoid_point, dtype=np.float64),
            float(avoid_radius),
            float(avoid_weight)
        )

    def update(self):
        """Advance every boid by one simulation step."""
        self._steer()
        self._update_shapes()
        self.steps += 1


class Flock2D(Flock):
    """Triangle boids steered inside a screen-sized rectangle (y down)."""

    def __init__(
        self,
        width: float,
        height: float,
        num_boids: int = None,
        rng: np.random.Generator = None,
        boids=None,
        **overrides
    ):
        super().__init__(boids2d.BOIDS, overrides)
        self.width = float(width)
        self.height = float(height)

        if boids is None:
            rng = rng if rng is not None else np.random.default_rng()
            count = self.settings["count"] if num_boids is None else num_boids
            boids = self._spawn(count, rng)
        boids = list(boids)
        if not boids:
            raise ValueError("A flock needs at least one boid")

        self.points = np.array([b.points for b in boids], dtype=np.float64)
        self.positions = np.array([b.centroid for b in boids], dtype=np.float64)
        self.velocities = np.array([b.velocity for b in boids], dtype=np.float64)
        self.angles = np.array([b.angle for b in boids], dtype=np.float64)

    def _spawn(self, count: int, rng: np.random.Generator) -> list:
        """Scatter boids over the screen with random velocities."""
        speed = self.settings["initial_speed"]
        corners = np.array(boids2d.TRIANGLE, dtype=np.float64)
        origins = rng.uniform((0.0, 0.0), (self.width, self.height), size=(count, 2))
        velocities = rng.uniform(-speed, speed, size=(count, 2))
        return [
            Boid2D.from_points(origin + corners, velocity)
            for origin, velocity in zip(origins, velocities)
        ]

    def _bounds(self):
        return np.zeros(2), np.array([self.width, self.height])

    def _update_shapes(self):
        update_triangles(self.points, self.positions, self.velocities, self.angles)

    def boid(self, index: int) -> Boid2D:
        """Return a copy of one boid's state."""
        return Boid2D(
            points=self.points[index].copy(),
            centroid=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            angle=float(self.angles[index]),
        )


class Flock3D(Flock):
    """Segment boids steered inside a cube centred on the origin."""

    def __init__(
        self,
        num_boids: int = None,
        rng: np.random.Generator = None,
        boids=None,
        **overrides
    ):
        super().__init__(boids3d.BOIDS, overrides)
        self.bounds = float(self.settings["bounds"])
        self.half_length = float(self.settings["segment_half_length"])
        self.palette = [tuple(c) for c in self.settings["palette"]]

        if boids is None:
            rng = rng if rng is not None else np.random.default_rng()
            count = self.settings["count"] if num_boids is None else num_boids
            boids = self._spawn(count, rng)
        boids = list(boids)
        if not boids:
            raise ValueError("A flock needs at least one boid")

        self.positions = np.array([b.position for b in boids], dtype=np.float64)
        self.velocities = np.array([b.velocity for b in boids], dtype=np.float64)
        self.headings = np.array([b.heading for b in boids], dtype=np.float64)
        self.colors = [tuple(b.color) for b in boids]
        self.heads = np.zeros_like(self.positions)
        self.tails = np.zeros_like(self.positions)
        self._update_shapes()

    def _spawn(self, count: int, rng: np.random.Generator) -> list:
        """Scatter boids through the cube with random velocities and palette colors."""
        speed = self.settings["initial_speed"]
        positions = rng.uniform(-self.bounds, self.bounds, size=(count, 3))
        velocities = rng.uniform(-speed, speed, size=(count, 3))
        color_indices = rng.integers(0, len(self.palette), size=count)
        # Only used if a velocity comes out exactly zero
        fallback = np.ones(3) / math.sqrt(3.0)
        return [
            Boid3D(
                position=position,
                velocity=velocity,
                heading=fallback,
                color=self.palette[color_index],
                half_length=self.half_length,
            )
            for position, velocity, color_index in zip(positions, velocities, color_indices)
        ]

    def _bounds(self):
        return np.full(3, -self.bounds), np.full(3, self.bounds)

    def _update_shapes(self):
        update_segments(
            self.heads, self.tails, self.headings,
            self.positions, self.velocities, self.half_length
        )

    def update(self, avoid_point=None, avoid_radius: float = 0.0, avoid_weight: float = 0.0):
        """
        Advance every boid by one simulation step.

        Args:
            avoid_point: Optional position (the camera) that repels boids
                closer than ``avoid_radius`` with extra ``avoid_weight``
        """
        self._steer(avoid_point, avoid_radius, avoid_weight)
        self._update_shapes()
        self.steps += 1

    def boid(self, index: int) -> Boid3D:
        """Return a copy of one boid's state."""
        return Boid3D(
            position=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            heading=self.headings[index].copy(),
            color=self.colors[index],
            half_length=self.half_length,
        )


def warmup_kernels():
    """Pre-compile the Numba kernels so the first frame does not stall."""
    print("[Boids] Compiling flocking kernels...")
    flat = Flock2D(
        200.0, 200.0,
        boids=[Boid2D.from_centroid((50.0, 50.0)), Boid2D.from_centroid((60.0, 50.0))]
    )
    flat.update()
    space = Flock3D(boids=[Boid3D(position=np.zeros(3)), Boid3D(position=np.ones(3))])
    space.update(avoid_point=np.zeros(3), avoid_radius=0.5, avoid_weight=1.3)
    rotate_points(triangle_offsets(), np.zeros(2), 0.0)
