import numpy as np
import pytest

from boids import Boid2D, Boid3D, Flock2D, Flock3D, warmup_kernels


WIDTH, HEIGHT = 800.0, 600.0


def flat_flock(*boids, **overrides):
    return Flock2D(WIDTH, HEIGHT, boids=list(boids), **overrides)


def test_spawn_uses_configured_count():
    flock = Flock2D(WIDTH, HEIGHT, rng=np.random.default_rng(1))
    assert len(flock) == 100
    flock.update()
    assert len(flock) == 100
    assert flock.steps == 1


def test_same_seed_same_flock():
    a = Flock2D(WIDTH, HEIGHT, num_boids=20, rng=np.random.default_rng(5))
    b = Flock2D(WIDTH, HEIGHT, num_boids=20, rng=np.random.default_rng(5))
    assert np.array_equal(a.positions, b.positions)
    assert np.array_equal(a.velocities, b.velocities)


def test_empty_flock_rejected():
    with pytest.raises(ValueError):
        Flock2D(WIDTH, HEIGHT, boids=[])


def test_unknown_update_order_rejected():
    with pytest.raises(ValueError):
        Flock2D(WIDTH, HEIGHT, num_boids=3, update_order="parallel")


@pytest.mark.parametrize("seed", range(5))
def test_velocity_capped_2d(seed):
    rng = np.random.default_rng(seed)
    boids = [
        Boid2D.from_centroid(rng.uniform(350.0, 450.0, size=2), rng.uniform(-20.0, 20.0, size=2))
        for _ in range(30)
    ]
    flock = flat_flock(*boids)
    flock.update()
    speeds = np.linalg.norm(flock.velocities, axis=1)
    assert np.all(speeds <= flock.max_speed + 1e-9)


@pytest.mark.parametrize("seed", range(5))
def test_velocity_capped_3d(seed):
    rng = np.random.default_rng(seed)
    boids = [
        Boid3D(position=rng.uniform(-1.0, 1.0, size=3), velocity=rng.uniform(-3.0, 3.0, size=3))
        for _ in range(30)
    ]
    flock = Flock3D(boids=boids)
    flock.update()
    speeds = np.linalg.norm(flock.velocities, axis=1)
    assert np.all(speeds <= flock.max_speed + 1e-12)


def test_lone_boid_keeps_velocity():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0), (2.0, 1.0)),
        Boid2D.from_centroid((600.0, 300.0), (0.0, 0.0)),
    )
    flock.update()
    assert np.allclose(flock.velocities[0], (2.0, 1.0))
    assert np.allclose(flock.positions[0], (402.0, 301.0))


def test_single_neighbor_cohesion_and_alignment_only():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0), (1.0, 0.0)),
        Boid2D.from_centroid((430.0, 300.0), (0.0, 2.0)),
    )
    flock.update()

    # 30 apart: inside cohesion radius, outside separation radius
    cohered = np.array([1.0, 0.0]) + np.array([30.0, 0.0]) * 0.005
    expected = cohered + (np.array([0.0, 2.0]) - cohered) * 0.05
    assert np.allclose(flock.velocities[0], expected)
    assert np.allclose(flock.velocities[0], (1.0925, 0.1))
    assert np.allclose(flock.positions[0], (401.0925, 300.1))


def test_separation_pushes_apart():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0)),
        Boid2D.from_centroid((410.0, 300.0)),
        cohesion_radius=0.0,
    )
    flock.update()
    # move = (-10, 0) * 0.05
    assert np.allclose(flock.velocities[0], (-0.5, 0.0))


def test_two_close_boids_sequentially():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0)),
        Boid2D.from_centroid((410.0, 300.0)),
    )
    flock.update()

    # 10 apart is inside both radii: separation, then cohesion, then alignment
    first = (400.0 - 410.0) * 0.05 + (410.0 - 400.0) * 0.005
    first += (0.0 - first) * 0.05
    assert first == pytest.approx(-0.4275)
    assert np.allclose(flock.velocities[0], (first, 0.0))
    assert np.allclose(flock.positions[0], (400.0 + first, 300.0))

    # The second boid already sees the first one's new state
    moved = 400.0 + first
    second = (410.0 - moved) * 0.05 + (moved - 410.0) * 0.005
    second += (first - second) * 0.05
    assert second == pytest.approx(0.42440063)
    assert np.allclose(flock.velocities[1], (second, 0.0))


def test_two_close_boids_from_snapshot():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0)),
        Boid2D.from_centroid((410.0, 300.0)),
        update_order="snapshot",
    )
    flock.update()
    assert np.allclose(flock.velocities[0], (-0.4275, 0.0))
    assert np.allclose(flock.velocities[1], (0.4275, 0.0))


def test_two_boids_cohere_outside_separation_radius():
    flock = flat_flock(
        Boid2D.from_centroid((400.0, 300.0)),
        Boid2D.from_centroid((440.0, 300.0)),
        update_order="snapshot",
    )
    flock.update()
    # (40, 0) * 0.005, then alignment toward the zero velocity
    assert np.allclose(flock.velocities[0], (0.19, 0.0))
    assert np.allclose(flock.velocities[1], (-0.19, 0.0))


@pytest.mark.parametrize("centroid, expected", [
    ((5.0, 300.0), (1.0, 0.0)),
    ((795.0, 300.0), (-1.0, 0.0)),
    ((400.0, 5.0), (0.0, 1.0)),
    ((400.0, 595.0), (0.0, -1.0)),
    ((5.0, 5.0), (1.0, 1.0)),
])
def test_wall_margin_nudges_2d(centroid, expected):
    flock = flat_flock(Boid2D.from_centroid(centroid))
    flock.update()
    assert np.allclose(flock.velocities[0], expected)


def test_wall_margin_is_strict_2d():
    flock = flat_flock(Boid2D.from_centroid((80.0, 300.0)))
    flock.update()
    assert np.allclose(flock.velocities[0], (0.0, 0.0))


def test_triangle_follows_centroid():
    flock = Flock2D(WIDTH, HEIGHT, num_boids=40, rng=np.random.default_rng(3))
    for _ in range(10):
        flock.update()
        assert np.allclose(flock.points.mean(axis=1), flock.positions, atol=1e-6)


def test_triangle_faces_velocity():
    flock = flat_flock(Boid2D.from_centroid((400.0, 300.0), (0.0, -3.0)))
    flock.update()
    boid = flock.boid(0)
    # Moving up the screen keeps the spawn orientation
    assert boid.angle == pytest.approx(np.pi / 2)
    spawn = Boid2D.from_centroid(boid.centroid)
    assert np.allclose(boid.points, spawn.points)


def test_segment_follows_position():
    flock = Flock3D(num_boids=40, rng=np.random.default_rng(3))
    for _ in range(10):
        flock.update()
        offsets = flock.heads - flock.positions
        assert np.allclose(np.linalg.norm(offsets, axis=1), 0.2)
        directions = flock.velocities / np.linalg.norm(flock.velocities, axis=1)[:, None]
        assert np.allclose(offsets / 0.2, directions)
        assert np.allclose(flock.tails, flock.positions - offsets)


def test_stopped_boid_keeps_heading():
    flock = Flock3D(boids=[
        Boid3D(position=np.zeros(3), velocity=np.zeros(3), heading=np.array([0.0, 0.0, 1.0]))
    ])
    flock.update()
    assert np.allclose(flock.velocities[0], 0.0)
    assert np.allclose(flock.heads[0], (0.0, 0.0, 0.2))
    assert np.all(np.isfinite(flock.tails))


def test_camera_repels_within_personal_space():
    flock = Flock3D(boids=[Boid3D(position=np.zeros(3), velocity=np.zeros(3))])
    flock.update(avoid_point=np.array([0.3, 0.0, 0.0]), avoid_radius=0.5, avoid_weight=1.3)
    assert np.allclose(flock.velocities[0], (-0.3 * 1.3 * 0.05, 0.0, 0.0))


def test_camera_ignored_outside_personal_space():
    flock = Flock3D(boids=[Boid3D(position=np.zeros(3), velocity=np.zeros(3))])
    flock.update(avoid_point=np.array([0.6, 0.0, 0.0]), avoid_radius=0.5, avoid_weight=1.3)
    assert np.allclose(flock.velocities[0], 0.0)


def test_wall_margin_is_inclusive_3d():
    flock = Flock3D(boids=[
        Boid3D(position=np.array([8.5, 0.0, -8.5]), velocity=np.zeros(3)),
    ])
    flock.update()
    assert np.allclose(flock.velocities[0], (-0.005, 0.0, 0.005))


def test_cohesion_radius_3d():
    flock = Flock3D(boids=[
        Boid3D(position=np.zeros(3), velocity=np.zeros(3)),
        Boid3D(position=np.array([0.0, 2.0, 0.0]), velocity=np.array([0.0, 0.0, 0.1])),
    ])
    flock.update()
    cohered = np.array([0.0, 2.0 * 0.001, 0.0])
    expected = cohered + (np.array([0.0, 0.0, 0.1]) - cohered) * 0.05
    assert np.allclose(flock.velocities[0], expected)


def test_spawned_colors_come_from_palette():
    flock = Flock3D(num_boids=25, rng=np.random.default_rng(2))
    assert set(flock.colors) <= set(flock.palette)
    assert flock.boid(0).color == flock.colors[0]


def test_unknown_setting_rejected():
    with pytest.raises(ValueError, match="cohesion_raduis"):
        Flock2D(WIDTH, HEIGHT, num_boids=3, cohesion_raduis=1.0)
    with pytest.raises(ValueError):
        Flock3D(num_boids=3, speed_limit=0.5)


def test_known_setting_overrides_config():
    flock = Flock3D(num_boids=3, rng=np.random.default_rng(0), max_speed=0.1)
    assert flock.max_speed == 0.1


def test_warmup_announces_itself(capsys):
    warmup_kernels()
    assert "[Boids] Compiling flocking kernels" in capsys.readouterr().out
