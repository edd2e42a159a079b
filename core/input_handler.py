"""Input handling for keyboard and mouse events."""

import pygame
from pygame.locals import *

from .camera import Camera


class InputHandler:
    """Handles quit keys and, in 3D, free-fly camera controls."""

    def __init__(self, camera: Camera = None):
        self.camera = camera

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
        return True

    def grab_mouse(self):
        """Hide and capture the cursor so mouse motion turns the camera."""
        pygame.event.set_grab(True)
        pygame.mouse.set_visible(False)
        pygame.mouse.get_rel()

    def handle_continuous_input(self, dt: float):
        """Handle held keys and mouse motion (called each frame)."""
        if self.camera is None:
            return

        keys = pygame.key.get_pressed()
        self.camera.move(
            forward=keys[K_w] or keys[K_UP],
            backward=keys[K_s] or keys[K_DOWN],
            left=keys[K_a] or keys[K_LEFT],
            right=keys[K_d] or keys[K_RIGHT]
        )

        dx, dy = pygame.mouse.get_rel()
        self.camera.look(dx, dy, dt)
