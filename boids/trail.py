"""Bounded per-boid position history for drawing motion trails."""

from collections import deque
from typing import Iterator, List, Tuple

import numpy as np

from config import boids2d as config


Point = Tuple[float, float]


def fade_alpha(index: int, fade_step: int = config.TRAIL["fade_step"]) -> int:
    """Alpha for the trail segment ``index`` steps behind the boid, clamped to 0-255."""
    return max(0, min(255, 255 - index * fade_step))


class TrailHistory:
    """Newest-first position log for every boid in a flock."""

    def __init__(self, num_boids: int, length: int = config.TRAIL["length"]):
        self.length = length
        self._histories = [deque(maxlen=length) for _ in range(num_boids)]

    def __len__(self) -> int:
        return len(self._histories)

    def __getitem__(self, index: int) -> List[Point]:
        return list(self._histories[index])

    def record(self, positions: np.ndarray):
        """Push the current position of every boid onto the front of its history."""
        for history, position in zip(self._histories, positions):
            history.appendleft((float(position[0]), float(position[1])))

    def segments(self, index: int) -> Iterator[Tuple[Point, Point, int]]:
        """
        Yield (start, end, alpha) for each drawable trail segment of a boid.

        Segments run from the newest position backwards and stop one point
        short of the oldest.
        """
        history = self._histories[index]
        for i in range(len(history) - 2):
            yield history[i], history[i + 1], fade_alpha(i)
