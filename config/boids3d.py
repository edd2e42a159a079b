"""Configuration for the 3D first-person boids simulation."""

WINDOW = {
    "width": 1024,
    "height": 720,
    "title": "Boids 3D",
    "fps": 60
}

CAMERA = {
    "fov": 45.0,
    "near_clip": 0.01,
    "far_clip": 10000.0,
    "initial_position": (0.0, 1.0, 0.0),
    "initial_yaw": 1.18,       # Radians
    "initial_pitch": 0.0,
    "pitch_limit": 1.5,        # Keeps front away from world up
    "move_speed": 0.3,         # Units per frame
    "look_speed": 0.14,
    "personal_space": 0.5,     # Boids steer away from the camera inside this
    "personal_space_weight": 1.3
}

BOIDS = {
    "count": 100,
    "max_speed": 0.2,
    "initial_speed": 0.2,
    "segment_half_length": 0.2,

    # Flocking behavior
    "cohesion_radius": 2.7,
    "separation_radius": 0.5,
    "cohesion_weight": 0.001,
    "alignment_weight": 0.05,
    "separation_weight": 0.05,

    # Soft walls (cube of +/- bounds)
    "bounds": 12.0,
    "margin": 3.5,
    "turn_factor": 0.005,
    "inclusive_margin": True,

    "update_order": "sequential",

    "palette": (
        (129, 161, 193),
        (191, 97, 106),
        (208, 135, 112),
        (163, 190, 140),
        (235, 203, 139),
        (143, 188, 187),
        (136, 192, 208),
    )
}

GRID = {
    "half_extent": 12.0,
    "color": (216, 222, 233)
}

TIMESTEP = {
    "mode": "variable",
    "delta": 1.0 / 60.0,
    "max_frame_time": 0.25
}

COLORS = {
    "background": (36, 42, 54)
}
