import math
import random

import numpy as np
import pytest

from orbitsim.body import CelestialBody
from orbitsim.simulation import SUN_MASS, GravitySimulation


def sim(seed=1):
    return GravitySimulation(random.Random(seed))


def test_reset_creates_sun_and_five_planets():
    s = sim()
    assert len(s) == 6
    sun = s.bodies[0]
    assert sun.mass == 1000.0
    assert sun.radius == 1.5
    assert np.allclose(sun.position, 0) and np.allclose(sun.velocity, 0)
    assert [b.radius for b in s.bodies[1:]] == [0.3, 0.4, 0.35, 0.5, 0.25]


def test_default_planets_at_their_distances():
    s = sim()
    distances = [math.hypot(b.position[0], b.position[2]) for b in s.bodies[1:]]
    assert np.allclose(distances, [4.0, 7.0, 10.0, 13.0, 16.0])


def test_planet_velocity_is_tangential_and_slower_further_out():
    s = sim()
    speeds = []
    for body in s.bodies[1:]:
        horizontal_pos = body.position[[0, 2]]
        horizontal_vel = body.velocity[[0, 2]]
        assert abs(np.dot(horizontal_pos, horizontal_vel)) < 1e-9
        speeds.append(np.linalg.norm(horizontal_vel))
    assert speeds == sorted(speeds, reverse=True)


def test_custom_planet_inclination_bounded():
    s = sim(7)
    for _ in range(50):
        body = s.add_planet_with_params(8.0, 1.0, 0.3, (0.5, 0.5, 0.9, 1.0))
        assert abs(body.position[1]) <= 8.0 * math.sin(0.2) + 1e-9
        assert body.color == (0.5, 0.5, 0.9, 1.0)


def test_add_planet_rejects_non_positive_distance():
    with pytest.raises(ValueError):
        sim().add_planet_with_params(0.0, 0.0, 0.3, (1, 1, 1, 1))


def test_random_orbit_parameters_ranges():
    s = sim(3)
    for _ in range(100):
        p = s.random_orbit_parameters(2.0)
        assert 3.0 <= p.distance <= 15.0
        assert 0.0 <= p.angle <= 2.0 * math.pi
        assert -0.3 <= p.inclination <= 0.3
        assert math.isclose(p.speed ** 2 * p.distance, 2.0 * SUN_MASS)


def test_add_random_planet_properties():
    s = sim(11)
    for _ in range(60):
        body = s.add_random_planet()
        assert 0.2 <= body.radius <= 0.6
        assert 3.0 - 1e-9 <= math.hypot(body.position[0], body.position[2]) <= 15.0 + 1e-9
        r, g, b, a = body.color
        assert a == 1.0
        assert (r == 0.0 and b >= 0.5) or (b == 0.1 and r >= 0.7)
    assert len(s) == 66


def test_random_planets_reproducible_with_seed():
    a, b = sim(42), sim(42)
    pa, pb = a.add_random_planet(), b.add_random_planet()
    assert np.array_equal(pa.position, pb.position)
    assert pa.color == pb.color


def test_update_advances_time_and_moves_planets():
    s = sim()
    before = [b.position.copy() for b in s.bodies[1:]]
    s.update(0.1, 1.0)
    assert math.isclose(s.time, 0.05)
    for old, body in zip(before, s.bodies[1:]):
        assert not np.allclose(old, body.position)


def test_update_resolves_collisions():
    s = sim()
    s.bodies = [
        CelestialBody(1.0, (1, 1, 1, 1), (0, 0, 0), (0, 0, 0), 1.0),
        CelestialBody(1.0, (1, 1, 1, 1), (1.0, 0, 0), (0, 0, 0), 1.0),
    ]
    s.update(0.0, 0.0)
    assert np.isclose(np.linalg.norm(s.bodies[1].position - s.bodies[0].position), 2.0)


def test_reset_restores_after_changes():
    s = sim()
    s.add_random_planet()
    s.bodies.pop(0)
    s.reset()
    assert len(s) == 6
    assert np.allclose(s.light_position, 0)