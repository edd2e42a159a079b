"""Configuration for the 2D top-down boids simulation."""

WINDOW = {
    "width": 1024,
    "height": 720,
    "title": "Boids 2D",
    "fps": 60
}

BOIDS = {
    "count": 100,
    "max_speed": 5.5,
    "initial_speed": 5.0,      # Per-axis spawn range (-v, v)
    "initial_angle": 90.0,     # Degrees, matches the spawn triangle's orientation

    # Flocking behavior
    "cohesion_radius": 75.0,   # Neighbors that pull and align
    "separation_radius": 25.0, # Neighbors that push away
    "cohesion_weight": 0.005,
    "alignment_weight": 0.05,
    "separation_weight": 0.05,

    # Soft walls
    "margin": 80.0,
    "turn_factor": 1.0,
    "inclusive_margin": False,

    "update_order": "sequential",
}

# Spawn triangle, relative to its first vertex (y-down screen space)
TRIANGLE = ((0.0, 0.0), (5.0, -15.0), (10.0, 0.0))

TRAIL = {
    "length": 20,
    "fade_step": 10,
    "width": 1.0,
    "color": (139, 171, 243)
}

TIMESTEP = {
    "mode": "variable",
    "delta": 1.0 / 60.0,
    "max_frame_time": 0.25
}

COLORS = {
    "background": (36, 42, 54),
    "boid": (129, 161, 193)
}
