"""Simulation timing: one step per frame, or fixed steps with an accumulator."""


TIMESTEP_MODES = ("variable", "fixed")


class VariableTimestep:
    """Couples physics to the frame rate: exactly one step per rendered frame."""

    mode = "variable"

    def advance(self, frame_time: float) -> int:
        return 1


class FixedTimestep:
    """
    Runs the simulation in constant ``delta`` increments.

    Frame time is accumulated and consumed in whole steps; the leftover
    carries into the next frame.

    Attributes:
        delta: Seconds per simulation step
        max_frame_time: Frame times above this are clipped (None disables)
        accumulator: Unconsumed time carried between frames
    """

    mode = "fixed"

    def __init__(self, delta: float = 1.0 / 60.0, max_frame_time: float = None):
        if delta <= 0:
            raise ValueError(f"Timestep delta must be positive, got {delta}")
        self.delta = delta
        self.max_frame_time = max_frame_time
        self.accumulator = 0.0

    def advance(self, frame_time: float) -> int:
        """Add a frame's elapsed time and return how many steps to run."""
        if self.max_frame_time is not None:
            frame_time = min(frame_time, self.max_frame_time)
        self.accumulator += frame_time

        steps = 0
        while self.accumulator >= self.delta:
            self.accumulator -= self.delta
            steps += 1
        return steps


def make_timestep(settings: dict, mode: str = None):
    """Build the timestep discipline named by ``mode`` (or ``settings["mode"]``)."""
    mode = mode or settings["mode"]
    if mode == "variable":
        return VariableTimestep()
    if mode == "fixed":
        return FixedTimestep(settings["delta"], settings.get("max_frame_time"))
    raise ValueError(f"Unknown timestep mode {mode!r}, expected one of {TIMESTEP_MODES}")
