import pytest

from core.timestep import FixedTimestep, VariableTimestep, make_timestep


def test_variable_timestep_steps_once_per_frame():
    timestep = VariableTimestep()
    assert timestep.advance(0.0) == 1
    assert timestep.advance(0.5) == 1


def test_fixed_timestep_carries_remainder():
    timestep = FixedTimestep(delta=0.25)
    assert timestep.advance(0.6) == 2
    assert timestep.accumulator == pytest.approx(0.1)
    assert timestep.advance(0.2) == 1
    assert timestep.accumulator == pytest.approx(0.05)
    assert timestep.advance(0.1) == 0
    assert timestep.accumulator == pytest.approx(0.15)


def test_fixed_timestep_clips_long_frames():
    timestep = FixedTimestep(delta=0.1, max_frame_time=0.25)
    assert timestep.advance(5.0) == 2
    assert timestep.accumulator == pytest.approx(0.05)


def test_fixed_timestep_rejects_non_positive_delta():
    with pytest.raises(ValueError):
        FixedTimestep(delta=0.0)


def test_make_timestep():
    settings = {"mode": "variable", "delta": 0.02, "max_frame_time": 0.5}
    assert isinstance(make_timestep(settings), VariableTimestep)

    fixed = make_timestep(settings, "fixed")
    assert isinstance(fixed, FixedTimestep)
    assert fixed.delta == 0.02
    assert fixed.max_frame_time == 0.5

    with pytest.raises(ValueError):
        make_timestep(settings, "adaptive")
