"""Main application classes that tie simulation, input and rendering together."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import boids2d, boids3d
from boids import warmup_kernels
from rendering import BoundsCube, TriangleRenderer, SegmentRenderer, clear
from .input_handler import InputHandler
from .simulation import Simulation2D, Simulation3D


class Application:
    """Window, frame clock and main loop shared by both simulation modes."""

    def __init__(self, window: dict):
        pygame.init()
        self.width = window["width"]
        self.height = window["height"]
        pygame.display.set_mode((self.width, self.height), DOUBLEBUF | OPENGL)
        pygame.display.set_caption(window["title"])

        self.fps_cap = window["fps"]
        self.clock = pygame.time.Clock()
        self.running = True
        self.input_handler = InputHandler()

        warmup_kernels()

    def _setup_gl(self):
        raise NotImplementedError

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        self.simulation.advance(dt)

    def _render(self):
        raise NotImplementedError

    def run(self):
        """Main application loop."""
        flock = self.simulation.flock
        print(
            f"[App] Running {len(flock)} boids, {self.simulation.timestep.mode} timestep, "
            f"{flock.update_order} update order"
        )
        dt = 0.0
        while self.running:
            self._handle_events()
            self._update(dt)
            self._render()
            pygame.display.flip()
            dt = self.clock.tick(self.fps_cap) / 1000.0

        print(f"[App] Stopped after {flock.steps} steps")
        pygame.quit()


class Application2D(Application):
    """Top-down flock drawn as triangles with fading trails."""

    def __init__(self, timestep=None, rng=None, num_boids=None, **flock_overrides):
        super().__init__(boids2d.WINDOW)
        self.simulation = Simulation2D(
            self.width, self.height,
            timestep=timestep, rng=rng, num_boids=num_boids, **flock_overrides
        )
        self.renderer = TriangleRenderer()
        self._setup_gl()

    def _setup_gl(self):
        """Pixel-space orthographic projection with y pointing down."""
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.width, self.height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _render(self):
        clear(boids2d.COLORS["background"])
        self.renderer.draw(self.simulation)


class Application3D(Application):
    """Flock inside a wireframe cube, explored with a free-fly camera."""

    def __init__(self, timestep=None, rng=None, num_boids=None, **flock_overrides):
        super().__init__(boids3d.WINDOW)
        self.simulation = Simulation3D(
            timestep=timestep, rng=rng, num_boids=num_boids, **flock_overrides
        )
        self.camera = self.simulation.camera
        self.input_handler = InputHandler(self.camera)
        self.input_handler.grab_mouse()

        self.renderer = SegmentRenderer()
        self.bounds_cube = BoundsCube()
        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            boids3d.CAMERA["fov"],
            self.width / self.height,
            boids3d.CAMERA["near_clip"],
            boids3d.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _update(self, dt: float):
        self.input_handler.handle_continuous_input(dt)
        super()._update(dt)

    def _apply_camera(self):
        """Load the camera's view transform into the modelview matrix."""
        eye = self.camera.position
        target = self.camera.get_target()
        up = self.camera.up
        glLoadIdentity()
        gluLookAt(
            eye[0], eye[1], eye[2],
            target[0], target[1], target[2],
            up[0], up[1], up[2]
        )

    def _render(self):
        clear(boids3d.COLORS["background"])
        self._apply_camera()
        self.renderer.draw(self.simulation.flock)
        self.bounds_cube.draw()
