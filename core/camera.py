"""Free-fly camera for first-person navigation of the 3D flock."""

import math
import numpy as np
from config import boids3d as config


WORLD_UP = np.array([0.0, 1.0, 0.0])


class Camera:
    """First-person camera steered by yaw/pitch angles and WASD movement."""

    def __init__(self, position=None, yaw: float = None, pitch: float = None):
        self.position = np.array(
            config.CAMERA["initial_position"] if position is None else position,
            dtype=np.float64
        )
        self.yaw = config.CAMERA["initial_yaw"] if yaw is None else yaw
        self.pitch = config.CAMERA["initial_pitch"] if pitch is None else pitch
        self.move_speed = config.CAMERA["move_speed"]
        self.look_speed = config.CAMERA["look_speed"]
        self.pitch_limit = config.CAMERA["pitch_limit"]
        self.update_vectors()

    def update_vectors(self):
        """Re-derive front, right and up from yaw and pitch."""
        front = np.array([
            math.cos(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            math.sin(self.yaw) * math.cos(self.pitch),
        ])
        self.front = front / np.linalg.norm(front)

        right = np.cross(self.front, WORLD_UP)
        self.right = right / np.linalg.norm(right)

        up = np.cross(self.right, self.front)
        self.up = up / np.linalg.norm(up)

    def move(self, forward: bool, backward: bool, left: bool, right: bool):
        """Translate along the current basis by one step per pressed direction."""
        if forward:
            self.position += self.front * self.move_speed
        if backward:
            self.position -= self.front * self.move_speed
        if left:
            self.position -= self.right * self.move_speed
        if right:
            self.position += self.right * self.move_speed

    def look(self, dx: float, dy: float, dt: float):
        """Turn by a mouse delta (pixels) scaled by frame time."""
        self.yaw += dx * dt * self.look_speed
        self.pitch += dy * dt * -self.look_speed
        self.pitch = max(-self.pitch_limit, min(self.pitch_limit, self.pitch))
        self.update_vectors()

    def get_target(self) -> np.ndarray:
        """Point one unit ahead of the camera."""
        return self.position + self.front
