"""Immediate-mode OpenGL drawing for both flock variants."""

from OpenGL.GL import *

from config import boids2d, boids3d


def _rgb(color):
    return tuple(c / 255.0 for c in color)


class TriangleRenderer:
    """Draws 2D boids as filled triangles, each followed by its fading trail."""

    def __init__(self):
        self.boid_color = _rgb(boids2d.COLORS["boid"])
        self.trail_color = _rgb(boids2d.TRAIL["color"])
        self.trail_width = boids2d.TRAIL["width"]

    def draw(self, simulation):
        glLineWidth(self.trail_width)
        for triangle, segments in simulation.drawables():
            glColor3f(*self.boid_color)
            glBegin(GL_TRIANGLES)
            for x, y in triangle:
                glVertex2f(x, y)
            glEnd()

            if not segments:
                continue
            glBegin(GL_LINES)
            for start, end, alpha in segments:
                glColor4f(*self.trail_color, alpha / 255.0)
                glVertex2f(*start)
                glVertex2f(*end)
            glEnd()


class SegmentRenderer:
    """Draws 3D boids as short colored line segments along their heading."""

    def draw(self, flock):
        glBegin(GL_LINES)
        for head, tail, color in zip(flock.heads, flock.tails, flock.colors):
            glColor3f(*_rgb(color))
            glVertex3f(*head)
            glVertex3f(*tail)
        glEnd()


def clear(color):
    glClearColor(*_rgb(color), 1.0)
    glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
