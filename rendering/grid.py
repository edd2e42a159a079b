"""Wireframe cube marking the 3D flock's steering bounds."""

from OpenGL.GL import *
from config import boids3d as config


class BoundsCube:
    """Draws the twelve edges of an axis-aligned cube centred on the origin."""

    def __init__(self):
        self.half_extent = config.GRID["half_extent"]
        self.color = tuple(c / 255.0 for c in config.GRID["color"])

    def edges(self):
        """Yield (start, end) corner pairs, four edges per axis."""
        e = self.half_extent
        for axis in range(3):
            for a in (-e, e):
                for b in (-e, e):
                    start = [a, b]
                    end = [a, b]
                    start.insert(axis, -e)
                    end.insert(axis, e)
                    yield tuple(start), tuple(end)

    def draw(self):
        glBegin(GL_LINES)
        glColor3f(*self.color)
        for start, end in self.edges():
            glVertex3f(*start)
            glVertex3f(*end)
        glEnd()
