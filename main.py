"""
Boids Flocking Simulation
=========================

Real-time flocking in two flavours: a top-down 2D flock with motion trails
and a 3D flock explored with a free-fly camera.

Usage:
    python main.py                        # 2D flock
    python main.py 3d                     # 3D flock
    python main.py 2d --fixed-step        # Simulate in fixed 1/60 s steps
    python main.py 3d --count 300 --seed 7

Controls (3D):
    - W/S or Up/Down: Move forward/backward
    - A/D or Left/Right: Strafe
    - Mouse: Look around
    - ESC: Quit
"""

import argparse

import numpy as np

from config import boids2d, boids3d
from core.timestep import make_timestep
from boids.flock import UPDATE_ORDERS


MODES = {
    "2d": boids2d,
    "3d": boids3d,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive boids flocking simulation")
    parser.add_argument("mode", nargs="?", choices=sorted(MODES), default="2d",
                        help="Simulation variant (default: 2d)")
    parser.add_argument("--count", type=int, default=None,
                        help="Number of boids (default: from config)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the initial flock")
    step = parser.add_mutually_exclusive_group()
    step.add_argument("--fixed-step", dest="timestep", action="store_const", const="fixed",
                      help="Simulate in fixed increments with an accumulator")
    step.add_argument("--variable-step", dest="timestep", action="store_const", const="variable",
                      help="Simulate one step per rendered frame")
    parser.add_argument("--update-order", choices=UPDATE_ORDERS, default=None,
                        help="sequential: boids see this step's earlier updates; "
                             "snapshot: all boids read start-of-step state")
    args = parser.parse_args(argv)
    if args.count is not None and args.count < 1:
        parser.error("--count must be at least 1")
    return args


def main(argv=None):
    args = parse_args(argv)
    config = MODES[args.mode]

    timestep = make_timestep(config.TIMESTEP, args.timestep)
    rng = np.random.default_rng(args.seed)
    overrides = {}
    if args.update_order is not None:
        overrides["update_order"] = args.update_order

    print(f"[App] Starting {args.mode.upper()} boids (seed={args.seed})")

    # Imported here so argument errors do not open a window
    from core.application import Application2D, Application3D

    app_class = Application2D if args.mode == "2d" else Application3D
    app = app_class(timestep=timestep, rng=rng, num_boids=args.count, **overrides)
    app.run()


if __name__ == "__main__":
    main()
